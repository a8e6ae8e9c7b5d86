"""
Persistence adapters.
Wraps Tortoise ORM queries behind the operations the user directory needs.
"""
from .users import UserRepository
