# app/repositories/users.py
"""
Store adapter for users and their course assignments.

All course association changes go through connect_courses / set_courses /
clear_courses so the many-to-many join rows are managed in one place.
"""
from collections import defaultdict
from typing import Iterable, List, Optional, Sequence

from tortoise.exceptions import IntegrityError

from app.core.exceptions import CourseReferenceError, EmailAlreadyExists
from app.models.course import Course, Lesson, Module
from app.models.user import User


class UserRepository:
    """Tortoise-backed persistence for the user directory."""

    # ---------------- users ----------------
    async def get(self, user_id) -> Optional[User]:
        return await User.get_or_none(id=user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await User.get_or_none(email=email)

    async def list_with_courses(self) -> List[User]:
        return await User.all().prefetch_related("assigned_courses")

    async def email_taken(self, email: str, exclude_id=None) -> bool:
        qs = User.filter(email=email)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        return await qs.exists()

    async def insert(self, **values) -> User:
        """Insert a user row; a unique-email collision becomes EmailAlreadyExists."""
        try:
            user = await User.create(**values)
        except IntegrityError as exc:
            raise EmailAlreadyExists(values.get("email")) from exc
        # Reload so created_at reads back exactly as later lookups will see it
        await user.refresh_from_db(fields=["created_at"])
        return user

    async def save_fields(self, user: User, fields: Sequence[str]) -> None:
        try:
            await user.save(update_fields=list(fields))
        except IntegrityError as exc:
            raise EmailAlreadyExists(user.email) from exc

    async def delete(self, user: User) -> None:
        await user.delete()

    # ---------------- associations ----------------
    async def _resolve_courses(self, course_ids: Iterable) -> List[Course]:
        """
        Load the courses for the given ids, keeping request order.

        Raises:
            CourseReferenceError: If any id has no matching course
        """
        wanted = list(dict.fromkeys(str(c) for c in course_ids))
        if not wanted:
            return []
        found = {str(c.id): c for c in await Course.filter(id__in=wanted)}
        missing = [c for c in wanted if c not in found]
        if missing:
            raise CourseReferenceError(missing)
        return [found[c] for c in wanted]

    async def connect_courses(self, user: User, course_ids: Iterable) -> None:
        """Add associations to the given courses, keeping existing ones."""
        courses = await self._resolve_courses(course_ids)
        if courses:
            await user.assigned_courses.add(*courses)

    async def set_courses(self, user: User, course_ids: Iterable) -> None:
        """Replace the association set with exactly the given courses."""
        courses = await self._resolve_courses(course_ids)
        await user.assigned_courses.clear()
        if courses:
            await user.assigned_courses.add(*courses)

    async def clear_courses(self, user: User) -> None:
        await user.assigned_courses.clear()

    async def courses_of(self, user: User) -> List[Course]:
        return await user.assigned_courses.all()

    async def curriculum_of(self, user: User) -> List[dict]:
        """
        Expand the user's courses into course -> modules -> lessons.

        Courses come newest first; modules and lessons follow their order
        value ascending. Ties fall back to id so the output is stable.
        """
        courses = await user.assigned_courses.all().order_by("-created_at", "id")
        if not courses:
            return []

        modules = await Module.filter(course_id__in=[c.id for c in courses]).order_by("order", "id")
        lessons = (
            await Lesson.filter(module_id__in=[m.id for m in modules]).order_by("order", "id")
            if modules
            else []
        )

        lessons_by_module = defaultdict(list)
        for lesson in lessons:
            lessons_by_module[str(lesson.module_id)].append({
                "id": str(lesson.id),
                "title": lesson.title,
                "duration": lesson.duration,
                "order": lesson.order,
            })

        modules_by_course = defaultdict(list)
        for m in modules:
            modules_by_course[str(m.course_id)].append({
                "id": str(m.id),
                "title": m.title,
                "order": m.order,
                "lessons": lessons_by_module[str(m.id)],
            })

        return [
            {
                "id": str(c.id),
                "title": c.title,
                "description": c.description,
                "modules": modules_by_course[str(c.id)],
            }
            for c in courses
        ]
