"""
Unit tests for core.security module.
Tests password hashing, JWT token creation/validation.
"""
import pytest
import datetime as dt
import jwt
from app.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_access_token,
    ACCESS_TOKEN_EXPIRE_MINUTES,
    PASSWORD_HASH_ROUNDS,
)


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_password_returns_different_hash_each_time(self):
        """Password hashing should produce different hashes (salt included)."""
        password = "TestPassword123"
        assert hash_password(password) != hash_password(password)

    def test_hash_password_produces_valid_hash(self):
        """Hashed password should be a non-empty argon2 string, never the plain text."""
        password = "TestPassword123"
        hashed = hash_password(password)
        assert isinstance(hashed, str)
        assert hashed.startswith("$argon2")
        assert hashed != password

    def test_hash_uses_fixed_work_factor(self):
        """Every hash carries the configured time cost."""
        hashed = hash_password("pw123")
        assert f"t={PASSWORD_HASH_ROUNDS}" in hashed

    def test_verify_password_correct_password(self):
        password = "TestPassword123"
        assert verify_password(password, hash_password(password)) is True

    def test_verify_password_incorrect_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("WrongPassword456", hashed) is False


class TestJWTTokens:
    """Tests for JWT token creation and validation."""

    def test_token_carries_subject_and_role(self):
        token = create_access_token("user-456", "INSTRUCTOR")
        payload = decode_access_token(token)
        assert payload["sub"] == "user-456"
        assert payload["role"] == "INSTRUCTOR"

    def test_token_expiration_time(self):
        """Token expiration should match configured time and lie in the future."""
        payload = decode_access_token(create_access_token("user-exp", "STUDENT"))
        now_ts = dt.datetime.now(dt.timezone.utc).timestamp()
        assert payload["exp"] > now_ts
        diff_minutes = (payload["exp"] - payload["iat"]) / 60
        assert abs(diff_minutes - ACCESS_TOKEN_EXPIRE_MINUTES) < 1

    def test_decode_access_token_invalid_token(self):
        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token("invalid.token.here")

    def test_decode_access_token_wrong_secret(self):
        token = create_access_token("user-secret", "STUDENT")
        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(token, "wrong-secret", algorithms=["HS256"])
