# app/core/exceptions.py
"""
Domain exceptions raised by the user directory.
The HTTP layer maps each one to a status code and an error code in app.main.
"""
from typing import Iterable


class DirectoryError(Exception):
    """Base exception for all user directory errors."""

    code = "DIRECTORY_ERROR"


class UserNotFound(DirectoryError):
    """Raised when an operation targets a user id that does not exist."""

    code = "USER_NOT_FOUND"

    def __init__(self, user_id):
        self.user_id = str(user_id)
        super().__init__(f"User with ID {user_id} not found")


class EmailAlreadyExists(DirectoryError):
    """Raised when an email collides with another user's email."""

    code = "EMAIL_EXISTS"

    def __init__(self, email: str):
        self.email = email
        super().__init__("Email already registered")


class CourseReferenceError(DirectoryError):
    """Raised when assigned course ids reference courses that do not exist."""

    code = "COURSE_NOT_FOUND"

    def __init__(self, missing: Iterable):
        self.missing = sorted(str(c) for c in missing)
        super().__init__(f"Unknown course id(s): {', '.join(self.missing)}")


class InvalidStatus(DirectoryError):
    """Raised when a status value is not a member of UserStatus."""

    code = "INVALID_STATUS"

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid status: {value!r}")


class InvalidRole(DirectoryError):
    """Raised when a role value is not a member of Role."""

    code = "INVALID_ROLE"

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid role: {value!r}")
