"""
Pydantic schemas for club endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateClubRequest(BaseModel):
    club_name: str = Field(..., min_length=1, max_length=200)


class UpdateClubRequest(CreateClubRequest):
    club_id: int = Field(..., ge=1)


class DeleteClubRequest(BaseModel):
    club_id: int = Field(..., ge=1)


class ClubResponse(BaseModel):
    club_id: int
    club_name: str
