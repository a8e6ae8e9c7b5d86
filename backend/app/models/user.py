"""
Database model for users.
Represents a user account in the system, containing credentials, profile
information, role-based access control and the courses assigned to the user.
"""
import uuid
from enum import Enum
from tortoise import fields, models


class Role(str, Enum):
    """Closed set of user roles."""
    ADMIN = "ADMIN"
    INSTRUCTOR = "INSTRUCTOR"
    STUDENT = "STUDENT"


class UserStatus(str, Enum):
    """Closed set of account states."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    BANNED = "BANNED"


class User(models.Model):
    """
    User database model.

    Relationships:
    - Many-to-many with Course via "assigned_courses" (join table user_assigned_courses)

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Email must be unique across all users
    - Role determines access level (admin / instructor / student)
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    name = fields.CharField(max_length=256)
    email = fields.CharField(max_length=256, unique=True, index=True)  # Login identifier (unique, indexed)
    password_hash = fields.CharField(max_length=255)  # Argon2 hash, never plain text
    role = fields.CharEnumField(Role, max_length=16, default=Role.STUDENT)
    status = fields.CharEnumField(UserStatus, max_length=16, default=UserStatus.ACTIVE)
    created_at = fields.DatetimeField(auto_now_add=True)  # Set once on insert

    assigned_courses: fields.ManyToManyRelation["Course"] = fields.ManyToManyField(
        "models.Course",
        related_name="assigned_users",
        through="user_assigned_courses",
    )  # Join rows are dropped with the user; courses themselves are untouched

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name
