"""
Procurement item API endpoints. Every route needs a bearer token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/api/p", dependencies=[Depends(auth_dependencies.get_current_user)])


@router.get("/")
async def list_items(
    item_name: str = Query(default="", max_length=200),
    item_category: str = Query(default="", max_length=200),
) -> list[schemas.ItemResponse]:
    return await service.list_items(item_name=item_name, item_category=item_category)


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_item(request: schemas.CreateItemRequest) -> schemas.ItemResponse:
    return await service.create_item(request)


# Missing item_id on update/delete is 404; the old API answered 200 / 202 regardless.
@router.put("/")
async def update_item(request: schemas.UpdateItemRequest) -> schemas.ItemResponse:
    return await service.update_item(request)


@router.delete("/", status_code=status.HTTP_202_ACCEPTED)
async def delete_item(request: schemas.DeleteItemRequest) -> schemas.DeleteItemResponse:
    return await service.delete_item(request.item_id)
