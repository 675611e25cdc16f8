"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect mutating endpoints.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from app.core.exceptions import UnauthorizedError
from app.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>).
# auto_error is off so a missing header maps to our 401 error body.
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Extract and validate the caller's claims from the JWT token.

    Raises:
        UnauthorizedError: If the token is missing, invalid or has no username
    """
    if credentials is None:
        raise UnauthorizedError()

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise UnauthorizedError()

    if payload.get("username") is None:
        raise UnauthorizedError()

    return payload


def get_admin_user(user: dict = Depends(get_current_user)) -> dict:
    """
    Require the caller to be an admin.

    Raises:
        UnauthorizedError: If the token does not carry is_admin=true
    """
    if user.get("is_admin") is not True:
        logger.warning(f"Non-admin user {user.get('username')} attempted an admin action")
        raise UnauthorizedError()
    return user
