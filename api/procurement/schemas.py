"""
Pydantic schemas for procurement item endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateItemRequest(BaseModel):
    item_name: str = Field(..., min_length=1, max_length=200)
    item_count: int = Field(..., ge=0)
    item_category: str = Field(..., max_length=200)


class UpdateItemRequest(CreateItemRequest):
    item_id: int = Field(..., ge=1)


class DeleteItemRequest(BaseModel):
    item_id: int = Field(..., ge=1)


class ItemResponse(BaseModel):
    item_id: int
    item_name: str
    item_count: int
    item_category: str


class DeleteItemResponse(BaseModel):
    message: str
