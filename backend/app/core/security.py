"""
Password hashing and access tokens.

All hashes share one argon2 time cost (PASSWORD_HASH_ROUNDS). Tokens are
HS256 JWTs carrying the user id as "sub" and the user's role.
"""
import os
import datetime as dt
from pathlib import Path

import jwt  # PyJWT
from dotenv import load_dotenv
from passlib.context import CryptContext

ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

PASSWORD_HASH_ROUNDS = int(os.getenv("PASSWORD_HASH_ROUNDS", "3"))

pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__rounds=PASSWORD_HASH_ROUNDS,
)

JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret")  # override outside local dev
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
JWT_ALG = "HS256"


def hash_password(plain: str) -> str:
    """Salted argon2 hash of plain, stored as User.password_hash."""
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(user_id: str, role: str) -> str:
    """
    Issue a token for a logged-in user.

    Args:
        user_id: User UUID as a string
        role: Role value, e.g. "ADMIN" or "STUDENT"

    Returns:
        Signed JWT that expires ACCESS_TOKEN_EXPIRE_MINUTES from now
    """
    issued = dt.datetime.now(dt.timezone.utc)
    claims = {
        "sub": user_id,
        "role": role,
        "iat": issued,
        "exp": issued + dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALG)


def decode_access_token(token: str) -> dict:
    """
    Verify signature and expiry, returning the claims.

    Raises:
        jwt.InvalidTokenError: Bad signature, malformed or expired token
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])
