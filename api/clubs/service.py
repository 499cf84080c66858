"""
Club business logic.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from . import repository, schemas


def _to_club_response(row: dict) -> schemas.ClubResponse:
    return schemas.ClubResponse(club_id=int(row["club_id"]), club_name=str(row["club_name"]))


def _club_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Club not found")


async def list_clubs() -> list[schemas.ClubResponse]:
    return [_to_club_response(row) for row in await repository.list_clubs()]


async def create_club(payload: schemas.CreateClubRequest) -> schemas.ClubResponse:
    row = await repository.create_club(payload.club_name.strip())
    return _to_club_response(row)


async def update_club(payload: schemas.UpdateClubRequest) -> schemas.ClubResponse:
    row = await repository.update_club(club_id=payload.club_id, club_name=payload.club_name.strip())
    if row is None:
        raise _club_not_found()
    return _to_club_response(row)


async def delete_club(club_id: int) -> schemas.ClubResponse:
    row = await repository.delete_club(club_id)
    if row is None:
        raise _club_not_found()
    return _to_club_response(row)
