"""
Pydantic schemas for grant endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateGrantRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=100)
    procurement_id: int = Field(..., ge=1)
    count: int = Field(..., ge=1)
    club_id: int = Field(..., ge=1)


class GrantResponse(BaseModel):
    grant_id: int
    user_id: str
    procurement_id: int
    count: int
    club_id: int
