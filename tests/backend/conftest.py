import datetime as dt
import os
import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from app.core import db as db_module
from app.core.security import hash_password
from app.main import app
from app.models.course import Course, Lesson, Module
from app.models.user import Role, User


TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
TEST_TORTOISE_ORM = db_module.build_tortoise_config(TEST_DB_URL)


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=TEST_TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """
    Fresh database without an HTTP client, for service-level tests.
    """
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    The app's startup hooks are not run; the db fixture owns the connection.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def create_admin(db):
    """
    Factory fixture to create admin users directly via ORM for privileged endpoints.
    """

    async def _create_admin(password: str = "AdminPass!23") -> tuple[User, str]:
        user = await User.create(
            name="Admin",
            email=f"admin_{uuid.uuid4().hex[:6]}@example.com",
            password_hash=hash_password(password),
            role=Role.ADMIN,
        )
        return user, password

    return _create_admin


@pytest_asyncio.fixture
async def create_user(db):
    """
    Factory fixture to create student users directly.
    """

    async def _create_user(password: str = "UserPass!23", **extra) -> tuple[User, str]:
        user = await User.create(
            name=extra.pop("name", "Student"),
            email=f"user_{uuid.uuid4().hex[:6]}@example.com",
            password_hash=hash_password(password),
            **extra,
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def make_course(db):
    """
    Factory fixture for courses owned by the (external) course catalogue.

    modules is a list of (order, [lesson orders]) pairs, inserted in the
    given sequence so tests can check that output follows order values.
    """

    async def _make_course(
        title: str,
        created_at: dt.datetime | None = None,
        modules: list[tuple[int, list[int]]] = (),
    ) -> Course:
        values = {"title": title, "description": f"{title} description"}
        if created_at is not None:
            values["created_at"] = created_at
        course = await Course.create(**values)
        for module_order, lesson_orders in modules:
            module = await Module.create(course=course, title=f"{title} M{module_order}", order=module_order)
            for lesson_order in lesson_orders:
                await Lesson.create(
                    module=module,
                    title=f"{title} M{module_order} L{lesson_order}",
                    duration=10 * lesson_order,
                    order=lesson_order,
                )
        return course

    return _make_course


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(email: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/v1/auth/login",
            json={"email": email, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["accessToken"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers
