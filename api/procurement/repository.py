"""
Procurement item persistence (raw SQL).
"""

from __future__ import annotations

from core import db


async def list_items(*, item_name: str = "", item_category: str = "") -> list[dict]:
    """
    Return items whose name/category contain the given filters, ignoring case.

    An empty filter disables matching on that column. `strpos` keeps the
    match literal, so `%` and `_` in a filter are not wildcards.
    """
    return await db.fetch_all(
        """
        SELECT item_id, item_name, item_count, item_category
        FROM procurement_item
        WHERE ($1::text = '' OR strpos(lower(item_name), lower($1::text)) > 0)
          AND ($2::text = '' OR strpos(lower(item_category), lower($2::text)) > 0)
        ORDER BY item_id
        """,
        item_name,
        item_category,
    )


async def create_item(*, item_name: str, item_count: int, item_category: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO procurement_item (item_name, item_count, item_category)
        VALUES ($1, $2, $3)
        RETURNING item_id, item_name, item_count, item_category
        """,
        item_name,
        item_count,
        item_category,
    )
    if row is None:
        raise RuntimeError("Failed to create procurement item.")
    return row


async def update_item(
    *,
    item_id: int,
    item_name: str,
    item_count: int,
    item_category: str,
) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE procurement_item
        SET item_name = $1,
            item_count = $2,
            item_category = $3
        WHERE item_id = $4
        RETURNING item_id, item_name, item_count, item_category
        """,
        item_name,
        item_count,
        item_category,
        item_id,
    )


async def delete_item(item_id: int) -> bool:
    deleted = await db.execute(
        """
        DELETE FROM procurement_item
        WHERE item_id = $1
        """,
        item_id,
    )
    return deleted > 0
