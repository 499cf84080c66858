"""
Club persistence (raw SQL).
"""

from __future__ import annotations

from core import db


async def list_clubs() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT club_id, club_name
        FROM clubs
        ORDER BY club_id
        """
    )


async def create_club(club_name: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO clubs (club_name)
        VALUES ($1)
        RETURNING club_id, club_name
        """,
        club_name,
    )
    if row is None:
        raise RuntimeError("Failed to create club.")
    return row


async def update_club(*, club_id: int, club_name: str) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE clubs
        SET club_name = $1
        WHERE club_id = $2
        RETURNING club_id, club_name
        """,
        club_name,
        club_id,
    )


async def delete_club(club_id: int) -> dict | None:
    return await db.fetch_one(
        """
        DELETE FROM clubs
        WHERE club_id = $1
        RETURNING club_id, club_name
        """,
        club_id,
    )
