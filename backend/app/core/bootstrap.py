# app/core/bootstrap.py
"""
Bootstrap module for application initialization.
Handles initial setup tasks such as creating default admin user on first startup.
"""
import os
import logging
from app.models.user import Role, User
from app.services.user_directory import UserCreate, user_directory

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin() -> None:
    """
    If no admin exists in the database, create a default admin based on environment variables.
    Only takes effect under the following conditions:
      - Currently no user with role=ADMIN
      - And ADMIN_PASSWORD is set (to avoid using default weak password)
    Environment variables:
      ADMIN_NAME     (default: "Administrator")
      ADMIN_EMAIL    (default: "admin@example.com")
      ADMIN_PASSWORD (required, otherwise won't create)
    """
    if await User.filter(role=Role.ADMIN).exists():
        return

    admin_password = os.getenv("ADMIN_PASSWORD")
    if not admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return

    admin_name = os.getenv("ADMIN_NAME", "Administrator")
    admin_email = os.getenv("ADMIN_EMAIL", "admin@example.com")

    # Email is the login identifier; never take over an existing account
    if await User.filter(email=admin_email).exists():
        logger.warning("[bootstrap] ADMIN_EMAIL=%s already belongs to a non-admin user -> skip.", admin_email)
        return

    admin = await user_directory.create(UserCreate(
        name=admin_name,
        email=admin_email,
        password=admin_password,
        role=Role.ADMIN,
    ))
    logger.warning("[bootstrap] Created default admin -> email=%s id=%s", admin["email"], admin["id"])
