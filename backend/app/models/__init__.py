# app/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: User account model (with Role / UserStatus enumerations)
- Course: Course referenced by user assignments
- Module: Ordered section of a Course
- Lesson: Ordered unit of a Module
"""
from .user import User, Role, UserStatus
from .course import Course, Module, Lesson
