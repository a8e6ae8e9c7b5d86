# app/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Application initialization and default admin creation
- db: Database configuration and connection management
- exceptions: Domain errors raised by the user directory
- security: Authentication, authorization, and password hashing
"""
