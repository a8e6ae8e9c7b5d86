"""
Database models for the course curriculum.
Courses are authored elsewhere; this service only reads them when projecting
a user's enrolled curriculum (course -> modules -> lessons).
"""
import uuid
from tortoise import fields, models


class Course(models.Model):
    """
    Course database model.

    Relationships:
    - Has many Modules (one-to-many, via related_name="modules")
    - Many-to-many with User (reverse side "assigned_users")
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    title = fields.CharField(max_length=256)
    description = fields.TextField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)  # Curriculum lists newest courses first

    class Meta:
        table = "courses"


class Module(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    course = fields.ForeignKeyField("models.Course", related_name="modules", on_delete=fields.CASCADE)
    title = fields.CharField(max_length=256)
    order = fields.IntField(default=0)  # Display sequence inside the course

    class Meta:
        table = "course_modules"


class Lesson(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    module = fields.ForeignKeyField("models.Module", related_name="lessons", on_delete=fields.CASCADE)
    title = fields.CharField(max_length=256)
    duration = fields.IntField(null=True)  # Minutes
    order = fields.IntField(default=0)  # Display sequence inside the module

    class Meta:
        table = "lessons"
