# app/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.
Defines request/response models for login and user information.
"""
from pydantic import BaseModel, EmailStr

from app.schemas.user import UserOut

class LoginRequest(BaseModel):
    """
    Request model for user login endpoint.
    Contains credentials for authentication.
    """
    email: EmailStr  # Login identifier
    password: str  # Plain text, verified against the stored hash

class LoginResponse(BaseModel):
    """
    Response model for successful login.
    Returns user information and access token for authenticated requests.
    """
    user: UserOut  # Public projection (no password hash)
    accessToken: str  # JWT access token for API authentication
