"""
Club API endpoints. Every route needs a bearer token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/api/c", dependencies=[Depends(auth_dependencies.get_current_user)])


@router.get("/")
async def list_clubs() -> list[schemas.ClubResponse]:
    return await service.list_clubs()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_club(request: schemas.CreateClubRequest) -> schemas.ClubResponse:
    return await service.create_club(request)


# Missing club_id on update/delete is 404; the old API answered 200 with an empty body.
@router.put("/")
async def update_club(request: schemas.UpdateClubRequest) -> schemas.ClubResponse:
    return await service.update_club(request)


@router.delete("/")
async def delete_club(request: schemas.DeleteClubRequest) -> schemas.ClubResponse:
    return await service.delete_club(request.club_id)
