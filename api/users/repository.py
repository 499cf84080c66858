"""
User persistence helpers.

The table column is `user_name`; it is aliased to `username` on the way out.
"""

from __future__ import annotations

from core import db


async def create_user(
    *,
    user_id: str,
    username: str,
    club_or_association: str,
    password_hash: str,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO user_account (user_id, user_name, club_or_association, password)
        VALUES ($1, $2, $3, $4)
        RETURNING user_id, user_name AS username, club_or_association
        """,
        user_id,
        username,
        club_or_association,
        password_hash,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_id(user_id: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT user_id, user_name AS username, club_or_association, password
        FROM user_account
        WHERE user_id = $1
        """,
        user_id,
    )


async def list_users() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT user_id, user_name AS username, club_or_association, password
        FROM user_account
        ORDER BY user_id
        """
    )


async def update_user(*, user_id: str, username: str, club_or_association: str) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE user_account
        SET user_name = $1,
            club_or_association = $2
        WHERE user_id = $3
        RETURNING user_id, user_name AS username, club_or_association
        """,
        username,
        club_or_association,
        user_id,
    )


async def delete_user(user_id: str) -> bool:
    deleted = await db.execute(
        """
        DELETE FROM user_account
        WHERE user_id = $1
        """,
        user_id,
    )
    return deleted > 0
