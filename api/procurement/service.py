"""
Procurement item business logic.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from . import repository, schemas


def _to_item_response(row: dict) -> schemas.ItemResponse:
    return schemas.ItemResponse(
        item_id=int(row["item_id"]),
        item_name=str(row["item_name"]),
        item_count=int(row["item_count"]),
        item_category=str(row["item_category"] or ""),
    )


def _item_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Procurement item not found")


async def list_items(*, item_name: str = "", item_category: str = "") -> list[schemas.ItemResponse]:
    rows = await repository.list_items(
        item_name=(item_name or "").strip(),
        item_category=(item_category or "").strip(),
    )
    return [_to_item_response(row) for row in rows]


async def create_item(payload: schemas.CreateItemRequest) -> schemas.ItemResponse:
    row = await repository.create_item(
        item_name=payload.item_name,
        item_count=payload.item_count,
        item_category=payload.item_category,
    )
    return _to_item_response(row)


async def update_item(payload: schemas.UpdateItemRequest) -> schemas.ItemResponse:
    row = await repository.update_item(
        item_id=payload.item_id,
        item_name=payload.item_name,
        item_count=payload.item_count,
        item_category=payload.item_category,
    )
    if row is None:
        raise _item_not_found()
    return _to_item_response(row)


async def delete_item(item_id: int) -> schemas.DeleteItemResponse:
    deleted = await repository.delete_item(item_id)
    if not deleted:
        raise _item_not_found()
    return schemas.DeleteItemResponse(message=f"Item with ID {item_id} has been deleted")
