"""
User business logic: signup, login, and profile maintenance.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from auth import security
from core import db

from . import repository, schemas

logger = logging.getLogger(__name__)

USER_PRIMARY_KEY = "user_account_pkey"


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        user_id=str(user_row["user_id"]),
        username=str(user_row["username"] or ""),
        club_or_association=str(user_row["club_or_association"] or ""),
    )


def _user_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found",
    )


async def signup(payload: schemas.SignupRequest) -> schemas.UserEnvelope:
    existing = await repository.get_user_by_id(payload.user_id)
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists.",
        )

    try:
        password_hash = security.hash_password(payload.password)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc

    try:
        user_row = await repository.create_user(
            user_id=payload.user_id,
            username=payload.username,
            club_or_association=payload.club_or_association,
            password_hash=password_hash,
        )
    except db.ConstraintError as exc:
        if exc.constraint_name != USER_PRIMARY_KEY:
            raise
        # Lost a race with a concurrent signup for the same user_id.
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists.",
        ) from exc

    logger.info("user_signup user_id=%s", payload.user_id)
    return schemas.UserEnvelope(user=_to_user_response(user_row))


async def login(*, user_id: str, password: str) -> schemas.LoginResponse:
    user_row = await repository.get_user_by_id(user_id)
    if user_row is None:
        raise _user_not_found()

    is_valid = security.verify_password(password, str(user_row.get("password") or ""))
    if not is_valid:
        logger.info("login_rejected user_id=%s", user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    user = _to_user_response(user_row)
    token = security.build_access_token(
        user_id=user.user_id,
        username=user.username,
        club_or_association=user.club_or_association,
    )
    return schemas.LoginResponse(user=user, token=token)


async def list_all() -> schemas.UserListResponse:
    rows = await repository.list_users()
    return schemas.UserListResponse(
        users=[
            schemas.StoredUserResponse(
                user_id=str(row["user_id"]),
                username=str(row["username"] or ""),
                club_or_association=str(row["club_or_association"] or ""),
                password=row.get("password"),
            )
            for row in rows
        ]
    )


async def update(payload: schemas.UpdateUserRequest) -> schemas.UserEnvelope:
    user_row = await repository.update_user(
        user_id=payload.user_id,
        username=payload.username,
        club_or_association=payload.club_or_association,
    )
    if user_row is None:
        raise _user_not_found()
    return schemas.UserEnvelope(user=_to_user_response(user_row))


async def delete(user_id: str) -> None:
    deleted = await repository.delete_user(user_id)
    if not deleted:
        raise _user_not_found()
