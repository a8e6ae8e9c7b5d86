"""
User Directory Service

Owns user identity records and their many-to-many association with courses.
Input is assumed to be validated already (see app.schemas.user); every
failure is raised as an app.core.exceptions.DirectoryError and never retried.
"""
import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from tortoise.transactions import in_transaction

from app.core.exceptions import EmailAlreadyExists, InvalidRole, InvalidStatus, UserNotFound
from app.core.security import hash_password
from app.models.user import Role, User, UserStatus
from app.repositories.users import UserRepository

logger = logging.getLogger("uvicorn.error")


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self):
        return "UNSET"


# Marks a field that was not provided at all (as opposed to provided empty)
UNSET = _Unset.UNSET


@dataclass
class UserCreate:
    """Input for UserDirectory.create."""
    name: str
    email: str
    password: str
    role: Optional[Role] = None
    assigned_course_ids: Sequence = ()


@dataclass
class UserUpdate:
    """
    Input for UserDirectory.update.

    Every field defaults to UNSET. For assigned_course_ids this gives three
    states: UNSET keeps the current assignments, an empty sequence clears
    them, a non-empty sequence replaces them.
    """
    name: Union[str, _Unset] = UNSET
    email: Union[str, _Unset] = UNSET
    password: Union[str, _Unset] = UNSET
    role: Union[Role, str, _Unset] = UNSET
    status: Union[UserStatus, str, _Unset] = UNSET
    assigned_course_ids: Union[Sequence, _Unset] = UNSET

    def provided(self) -> List[str]:
        """Names of the fields that were given a value."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not UNSET]


def coerce_status(value) -> UserStatus:
    """Map a raw value onto UserStatus, raising InvalidStatus otherwise."""
    try:
        return UserStatus(value)
    except ValueError:
        raise InvalidStatus(value) from None


def coerce_role(value) -> Role:
    """Map a raw value onto Role, raising InvalidRole otherwise."""
    try:
        return Role(value)
    except ValueError:
        raise InvalidRole(value) from None


def _base_projection(user: User) -> dict:
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "status": UserStatus(user.status).value,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
        "role": Role(user.role).value,
    }


def _course_refs(courses) -> List[dict]:
    return [{"id": str(c.id), "title": c.title} for c in courses]


class UserDirectory:
    """
    CRUD over users plus course assignment and curriculum lookup.

    Mutating operations run their existence check and their writes inside a
    single transaction, so an operation either fully applies or raises.
    """

    def __init__(self, repo: Optional[UserRepository] = None, hasher: Callable[[str], str] = hash_password):
        self.repo = repo or UserRepository()
        self.hasher = hasher

    async def _require(self, user_id) -> User:
        user = await self.repo.get(user_id)
        if not user:
            logger.warning("[users] user not found: id=%s", user_id)
            raise UserNotFound(user_id)
        return user

    async def _projection(self, user: User) -> dict:
        data = _base_projection(user)
        data["assignedCourses"] = _course_refs(await self.repo.courses_of(user))
        return data

    # ---------------- create ----------------
    async def create(self, data: UserCreate) -> dict:
        """
        Create a user and optionally connect assigned courses.

        Raises:
            EmailAlreadyExists: If the email belongs to another user
            InvalidRole: If role is not a Role member
            CourseReferenceError: If an assigned course id does not exist
        """
        password_hash = self.hasher(data.password)
        values = {"name": data.name, "email": data.email, "password_hash": password_hash}
        if data.role is not None:
            values["role"] = coerce_role(data.role)

        async with in_transaction():
            if await self.repo.email_taken(data.email):
                logger.warning("[users] email already taken on create")
                raise EmailAlreadyExists(data.email)
            user = await self.repo.insert(**values)
            if data.assigned_course_ids:
                await self.repo.connect_courses(user, data.assigned_course_ids)
            result = await self._projection(user)

        logger.info("[users] created id=%s email=%s role=%s courses=%d",
                    result["id"], result["email"], result["role"], len(result["assignedCourses"]))
        return result

    # ---------------- read ----------------
    async def find_all(self) -> List[dict]:
        users = await self.repo.list_with_courses()
        return [
            {**_base_projection(u), "assignedCourses": _course_refs(u.assigned_courses)}
            for u in users
        ]

    async def find_one(self, user_id) -> dict:
        user = await self._require(user_id)
        return await self._projection(user)

    async def find_by_email(self, email: str) -> Optional[dict]:
        """
        Credential projection for the login flow.

        This is the only read that includes the password hash (under
        "password"). Returns None when no user has this email.
        """
        user = await self.repo.get_by_email(email)
        if not user:
            return None
        data = await self._projection(user)
        data.pop("createdAt")
        data["password"] = user.password_hash
        return data

    # ---------------- update ----------------
    async def update(self, user_id, data: UserUpdate) -> dict:
        """
        Apply a partial update.

        Raises:
            UserNotFound: If no user has this id
            EmailAlreadyExists: If the new email belongs to another user
            InvalidStatus: If status is not a UserStatus member
            InvalidRole: If role is not a Role member
            CourseReferenceError: If an assigned course id does not exist
        """
        status = coerce_status(data.status) if data.status is not UNSET else UNSET
        role = coerce_role(data.role) if data.role is not UNSET else UNSET
        password_hash = self.hasher(data.password) if data.password is not UNSET else UNSET

        async with in_transaction():
            user = await self._require(user_id)
            changed = []

            if data.name is not UNSET:
                user.name = data.name
                changed.append("name")
            if data.email is not UNSET and data.email != user.email:
                if await self.repo.email_taken(data.email, exclude_id=user.id):
                    logger.warning("[users] email already taken on update: id=%s", user_id)
                    raise EmailAlreadyExists(data.email)
                user.email = data.email
                changed.append("email")
            if password_hash is not UNSET:
                user.password_hash = password_hash
                changed.append("password_hash")
            if role is not UNSET:
                user.role = role
                changed.append("role")
            if status is not UNSET:
                user.status = status
                changed.append("status")

            if changed:
                await self.repo.save_fields(user, changed)
            if data.assigned_course_ids is not UNSET:
                await self.repo.set_courses(user, data.assigned_course_ids)
            result = await self._projection(user)

        logger.info("[users] updated id=%s fields=%s", result["id"], data.provided())
        return result

    async def update_status(self, user_id, status) -> dict:
        """Change only the status; the result carries no course assignments."""
        new_status = coerce_status(status)
        async with in_transaction():
            user = await self._require(user_id)
            user.status = new_status
            await self.repo.save_fields(user, ["status"])
        logger.info("[users] status changed id=%s status=%s", user.id, new_status.value)
        return _base_projection(user)

    # ---------------- curriculum ----------------
    async def get_user_courses(self, user_id) -> List[dict]:
        user = await self._require(user_id)
        return await self.repo.curriculum_of(user)

    # ---------------- delete ----------------
    async def remove(self, user_id) -> dict:
        """Delete a user, detaching (not deleting) its courses. Returns its final state."""
        async with in_transaction():
            user = await self._require(user_id)
            snapshot = _base_projection(user)
            await self.repo.clear_courses(user)
            await self.repo.delete(user)
        logger.info("[users] deleted id=%s email=%s", snapshot["id"], snapshot["email"])
        return snapshot


# Shared instance used by the HTTP layer
user_directory = UserDirectory()
