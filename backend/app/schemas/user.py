# app/schemas/user.py
"""
Pydantic schemas for user directory endpoints.
Request models are the validation boundary: anything that reaches the
directory has already passed them. Response models describe the projections
the directory returns (never the password hash).
"""
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from app.models.user import Role, UserStatus


def _reject_duplicates(ids):
    if ids is not None and len(set(ids)) != len(ids):
        raise ValueError("assignedCourseIds must not contain duplicates")
    return ids


# ========== Input models ==========
class UserCreateIn(BaseModel):
    """Request model for creating a user."""
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    role: Optional[Role] = None  # Store default (STUDENT) when omitted
    assigned_course_ids: List[UUID] = Field(default_factory=list, alias="assignedCourseIds")

    model_config = {"populate_by_name": True}

    @field_validator("assigned_course_ids")
    @classmethod
    def check_unique_ids(cls, ids):
        return _reject_duplicates(ids)


class UserUpdateIn(BaseModel):
    """
    Request model for partial user updates.

    Only fields present in the request body are applied. Omitting
    assignedCourseIds keeps the current assignments, while sending [] clears
    them, so explicit nulls are rejected to keep those cases apart.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=1)
    role: Optional[Role] = None
    status: Optional[UserStatus] = None
    assigned_course_ids: Optional[List[UUID]] = Field(default=None, alias="assignedCourseIds")

    model_config = {"populate_by_name": True}

    @field_validator("assigned_course_ids")
    @classmethod
    def check_unique_ids(cls, ids):
        return _reject_duplicates(ids)

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} may be omitted but not null")
        return self


class UserStatusIn(BaseModel):
    """Request model for the status-only update."""
    status: UserStatus


# ========== Output models ==========
class CourseRef(BaseModel):
    """Minimal course shape embedded in user projections."""
    id: str
    title: str


class UserBaseOut(BaseModel):
    """User projection without course assignments (status update, delete)."""
    id: str
    name: str
    email: str
    status: UserStatus
    createdAt: str  # ISO format
    role: Role


class UserOut(UserBaseOut):
    """Full user projection returned by create / read / update."""
    assignedCourses: List[CourseRef] = []


class LessonOut(BaseModel):
    id: str
    title: str
    duration: Optional[int] = None  # Minutes
    order: int


class ModuleOut(BaseModel):
    id: str
    title: str
    order: int
    lessons: List[LessonOut]  # Ascending by order


class UserCourseOut(BaseModel):
    """A course in a user's curriculum, with its ordered modules and lessons."""
    id: str
    title: str
    description: Optional[str] = None
    modules: List[ModuleOut]  # Ascending by order
