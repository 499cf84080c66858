"""
Grant API endpoints. Every route needs a bearer token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/api/g", dependencies=[Depends(auth_dependencies.get_current_user)])


@router.get("")
async def list_grants() -> list[schemas.GrantResponse]:
    return await service.list_grants()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_grant(request: schemas.CreateGrantRequest) -> schemas.GrantResponse:
    return await service.create_grant(request)
