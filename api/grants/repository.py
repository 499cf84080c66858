"""
Grant persistence.

Creating a grant touches two tables. The stock check, the grant insert and
the stock decrement run on one connection inside one transaction, and the
item row is locked (`FOR UPDATE`) before the check so concurrent grants for
the same item queue up behind each other instead of over-allocating.
"""

from __future__ import annotations

from core import db


class GrantError(RuntimeError):
    pass


class ItemNotFoundError(GrantError):
    def __init__(self, procurement_id: int) -> None:
        super().__init__(f"Procurement item {procurement_id} not found.")
        self.procurement_id = procurement_id


class InsufficientStockError(GrantError):
    def __init__(self, *, procurement_id: int, available: int, requested: int) -> None:
        super().__init__(
            f"Insufficient count for item {procurement_id}: available={available} requested={requested}"
        )
        self.procurement_id = procurement_id
        self.available = available
        self.requested = requested


async def list_grants() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT grant_id, user_id, procurement_id, count, club_id
        FROM grants
        ORDER BY grant_id
        """
    )


async def create_grant_and_decrement_stock(
    *,
    user_id: str,
    procurement_id: int,
    count: int,
    club_id: int,
) -> dict:
    """
    Allocate `count` units of an item to a club.

    Raises ItemNotFoundError / InsufficientStockError before anything is
    written; any failure after the insert rolls the whole unit back.
    """
    async with db.transaction() as conn:
        item = await conn.fetchrow(
            """
            SELECT item_id, item_count
            FROM procurement_item
            WHERE item_id = $1
            FOR UPDATE
            """,
            procurement_id,
        )
        if item is None:
            raise ItemNotFoundError(procurement_id)

        available = int(item["item_count"])
        if available < count:
            raise InsufficientStockError(
                procurement_id=procurement_id,
                available=available,
                requested=count,
            )

        grant = await conn.fetchrow(
            """
            INSERT INTO grants (user_id, procurement_id, count, club_id)
            VALUES ($1, $2, $3, $4)
            RETURNING grant_id, user_id, procurement_id, count, club_id
            """,
            user_id,
            procurement_id,
            count,
            club_id,
        )
        if grant is None:
            raise RuntimeError("Failed to insert grant.")

        await conn.execute(
            """
            UPDATE procurement_item
            SET item_count = item_count - $1
            WHERE item_id = $2
            """,
            count,
            procurement_id,
        )

        return dict(grant)
