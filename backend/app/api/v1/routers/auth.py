# app/api/v1/routers/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.v1.deps import get_current_user, get_user_directory
from app.core.security import create_access_token, verify_password
from app.models.user import User, UserStatus
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.user import UserOut
from app.services.user_directory import UserDirectory

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    directory: UserDirectory = Depends(get_user_directory),
):
    """
    Authenticate user and create access token.

    Looks the user up through the directory's credential projection, verifies
    the password against the stored hash and issues a JWT. The token is
    returned in the body and also set as an HttpOnly cookie.

    Raises:
        HTTPException (401): If credentials are invalid
        HTTPException (403): If the account is inactive or banned

    Note:
        The credential projection carries the password hash; it is consumed
        here and never included in the response.
    """
    record = await directory.find_by_email(payload.email)
    if not record or not verify_password(payload.password, record.pop("password")):
        logger.warning("[auth] failed login for email=%s", payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail={"code": "AUTH_INVALID_CREDENTIALS", "message": "Incorrect email or password"})
    if record["status"] != UserStatus.ACTIVE.value:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                            detail={"code": "AUTH_USER_INACTIVE", "message": f"Account is {record['status'].lower()}"})

    token = create_access_token(record["id"], record["role"])
    response.set_cookie("accessToken", token, httponly=True, secure=False, samesite="lax")
    user = await directory.find_one(record["id"])
    return {"user": user, "accessToken": token}

@router.get("/me", response_model=UserOut)
async def me(
    user: User = Depends(get_current_user),
    directory: UserDirectory = Depends(get_user_directory),
):
    """Return the public projection of the currently authenticated user."""
    return await directory.find_one(user.id)

@router.post("/logout")
async def logout(response: Response):
    """
    Log out the current user by clearing the access token cookie.

    Note:
        The JWT itself stays valid until it expires.
    """
    response.delete_cookie("accessToken")
    return {"success": True}
