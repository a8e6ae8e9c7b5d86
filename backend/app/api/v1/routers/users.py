# app/api/v1/routers/users.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.v1.deps import get_current_user, get_user_directory, require_admin
from app.models.user import Role, User
from app.schemas.user import (
    UserBaseOut,
    UserCourseOut,
    UserCreateIn,
    UserOut,
    UserStatusIn,
    UserUpdateIn,
)
from app.services.user_directory import UserCreate, UserDirectory, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_user(body: UserCreateIn, directory: UserDirectory = Depends(get_user_directory)):
    """
    Create a user (admin only).

    Raises:
        409 EMAIL_EXISTS: Email already registered
        400 COURSE_NOT_FOUND: An assigned course id does not exist
    """
    return await directory.create(UserCreate(
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
        assigned_course_ids=body.assigned_course_ids,
    ))


@router.get("", response_model=List[UserOut], dependencies=[Depends(require_admin)])
async def list_users(directory: UserDirectory = Depends(get_user_directory)):
    """List all users with their assigned courses (admin only)."""
    return await directory.find_all()


@router.get("/{user_id}", response_model=UserOut, dependencies=[Depends(require_admin)])
async def get_user(user_id: UUID, directory: UserDirectory = Depends(get_user_directory)):
    return await directory.find_one(user_id)


@router.patch("/{user_id}", response_model=UserOut, dependencies=[Depends(require_admin)])
async def update_user(
    user_id: UUID,
    body: UserUpdateIn,
    directory: UserDirectory = Depends(get_user_directory),
):
    """
    Partially update a user (admin only).

    Only the fields present in the body are applied. Sending
    "assignedCourseIds" replaces the whole assignment set ([] clears it);
    leaving it out keeps the current assignments.
    """
    return await directory.update(user_id, UserUpdate(**body.model_dump(exclude_unset=True)))


@router.patch("/{user_id}/status", response_model=UserBaseOut, dependencies=[Depends(require_admin)])
async def update_user_status(
    user_id: UUID,
    body: UserStatusIn,
    directory: UserDirectory = Depends(get_user_directory),
):
    return await directory.update_status(user_id, body.status)


@router.get("/{user_id}/courses", response_model=List[UserCourseOut])
async def get_user_courses(
    user_id: UUID,
    current: User = Depends(get_current_user),
    directory: UserDirectory = Depends(get_user_directory),
):
    """
    Curriculum of a user: courses (newest first) with ordered modules and lessons.
    Admins can read anyone's; other users only their own.
    """
    if current.role != Role.ADMIN and str(current.id) != str(user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="FORBIDDEN_NOT_OWNER")
    return await directory.get_user_courses(user_id)


@router.delete("/{user_id}", response_model=UserBaseOut, dependencies=[Depends(require_admin)])
async def delete_user(
    user_id: UUID,
    current_admin: User = Depends(get_current_user),
    directory: UserDirectory = Depends(get_user_directory),
):
    """
    Delete a user (admin only) and return its final state.
    Course assignments are detached; the courses themselves are kept.
    """
    if str(current_admin.id) == str(user_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "CANNOT_DELETE_SELF", "message": "Cannot delete yourself"},
        )
    return await directory.remove(user_id)
