"""
Authentication dependencies

Two kinds of caller:
- Website owners (dashboard/CRUD API): JWT session cookie or bearer token
- Embedded loader scripts (integration API): X-API-Key header

Both resolve to an explicit principal value passed into the handler; nothing
is kept in process-wide state.
"""

from dataclasses import dataclass
from fastapi import Request, HTTPException
from jose import JWTError
from typing import Optional

from services.errors import AuthenticationError
from .jwt_session import decode_access_token

API_KEY_HEADER = "X-API-Key"


class UserPublic:
    """Minimal user info from JWT token"""
    def __init__(self, user_id: str, email: str, name: str):
        self.user_id = user_id
        self.email = email
        self.name = name


@dataclass(frozen=True)
class ApiKeyPrincipal:
    """Caller identified only by the API key it presented"""
    api_key: str


def _token_from_request(request: Request) -> Optional[str]:
    token = request.cookies.get("access_token")
    if token:
        return token

    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


async def get_current_user_optional(request: Request) -> Optional[UserPublic]:
    """
    Get current user from JWT token (optional - doesn't raise if not authenticated)

    Returns:
        UserPublic if authenticated, None otherwise
    """
    token = _token_from_request(request)
    if not token:
        return None

    try:
        payload = decode_access_token(token)
    except JWTError:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    return UserPublic(
        user_id=str(user_id),
        email=payload.get("email"),
        name=payload.get("name"),
    )


async def get_current_user(request: Request) -> UserPublic:
    """
    Get current user (required - raises 401 if not authenticated)

    Raises:
        HTTPException 401 if not authenticated
    """
    user = await get_current_user_optional(request)

    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")

    return user


async def get_api_key_principal(request: Request) -> ApiKeyPrincipal:
    """
    Read the website API key from the request headers.

    Raises:
        AuthenticationError if the header is missing or blank
    """
    api_key = (request.headers.get(API_KEY_HEADER) or "").strip()
    if not api_key:
        raise AuthenticationError("API key is required")
    return ApiKeyPrincipal(api_key=api_key)
