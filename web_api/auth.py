"""
Session token verification.

Tokens are issued by the external sign-in provider as HS256 JWTs whose "sub"
claim is the user's open_id. They arrive either as a Bearer header or in the
session cookie. This module only verifies them; it does not log users in.
"""

import logging
import os
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)

JWT_SECRET = os.environ.get("JWT_SECRET", "")
JWT_ALGORITHM = "HS256"
SESSION_COOKIE_NAME = os.environ.get("SESSION_COOKIE_NAME", "session")


def create_jwt(
    open_id: str,
    name: str | None = None,
    email: str | None = None,
    expires_in: timedelta = timedelta(days=7),
) -> str:
    """Create a session token (scripts and tests; production tokens come from the provider)."""
    if not JWT_SECRET:
        raise RuntimeError("JWT_SECRET is not set")

    payload = {
        "sub": open_id,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    if name:
        payload["name"] = name
    if email:
        payload["email"] = email
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_jwt(token: str) -> dict | None:
    """Decode a session token. Returns the payload, or None if invalid/expired."""
    if not JWT_SECRET:
        logger.warning("JWT_SECRET is not set, rejecting token")
        return None
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None
    if not payload.get("sub"):
        return None
    return payload


def _get_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip()
    return request.cookies.get(SESSION_COOKIE_NAME)


async def get_optional_user(request: Request) -> dict | None:
    """Token payload of the caller, or None if unauthenticated."""
    token = _get_token(request)
    if not token:
        return None
    return verify_jwt(token)


async def get_current_user(request: Request) -> dict:
    """FastAPI dependency: token payload of the caller, or 401."""
    user = await get_optional_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user
