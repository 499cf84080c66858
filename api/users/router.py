"""
User API endpoints.

Signup, login and the full listing are public; update and delete need a
bearer token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/api/u")


@router.post("/user", status_code=status.HTTP_201_CREATED)
async def signup(request: schemas.SignupRequest) -> schemas.UserEnvelope:
    return await service.signup(request)


@router.get("/user")
async def login(
    user_id: str = Query(..., min_length=1),
    password: str = Query(..., min_length=1),
) -> schemas.LoginResponse:
    return await service.login(user_id=user_id, password=password)


@router.get("/user/all")
async def list_users() -> schemas.UserListResponse:
    # Public and includes stored hashes; kept for existing admin tooling.
    return await service.list_all()


@router.put("/user")
async def update_user(
    request: schemas.UpdateUserRequest,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> schemas.UserEnvelope:
    return await service.update(request)


@router.delete("/user", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str = Query(..., min_length=1),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> Response:
    await service.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
