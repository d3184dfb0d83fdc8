"""JWT helpers for resolving the caller's login."""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from moneylogger.config import settings


def create_access_token(login: str, expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token.

    Args:
        login: Caller login to encode as the subject
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_expire_minutes)

    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {
        "sub": login,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a JWT token.

    Raises:
        JWTError: If token is invalid or expired
    """
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


def get_login_from_token(token: str) -> str:
    """
    Extract the caller login from a JWT access token.

    Raises:
        JWTError: If token is invalid, expired, not an access token, or has
            no subject
    """
    payload = decode_token(token)
    if payload.get("type") != "access":
        raise JWTError("Not an access token")
    login = payload.get("sub")
    if not login:
        raise JWTError("Token missing 'sub' claim")
    return login
