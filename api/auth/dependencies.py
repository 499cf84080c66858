"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from fastapi import Header, HTTPException, status

from . import security


async def get_current_user(authorization: str | None = Header(default=None)) -> dict:
    """
    Resolve the identity claims of the bearer token, or reject with 401.
    """
    result = security.validate_authorization(authorization)
    if not result.valid or result.identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.message or "Unauthorized.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return result.identity
