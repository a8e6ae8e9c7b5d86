"""
Services Module

Application services sitting between the HTTP routers and the store:
- UserDirectory: user records, course assignments and curriculum lookup
"""
from .user_directory import (
    UNSET,
    UserCreate,
    UserDirectory,
    UserUpdate,
    user_directory,
)

__all__ = [
    "UNSET",
    "UserCreate",
    "UserDirectory",
    "UserUpdate",
    "user_directory",
]
