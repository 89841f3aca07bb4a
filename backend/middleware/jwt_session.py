"""
JWT session management for website owners
"""
from datetime import datetime, timedelta, timezone
from jose import jwt
from config import get_settings


def create_access_token(user) -> str:
    """
    Create JWT access token for user

    Args:
        user: Object with user_id, email, name

    Returns:
        JWT token string
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.jwt_expire_minutes)

    payload = {
        "sub": str(user.user_id),
        "email": user.email,
        "name": user.name,
        "exp": expire,
        "iat": now
    }

    return jwt.encode(
        payload,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> dict:
    """
    Decode and validate JWT token

    Returns:
        Decoded payload dict

    Raises:
        jose.JWTError if token invalid/expired
    """
    settings = get_settings()
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm]
    )
