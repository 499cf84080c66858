"""
User API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=200)
    club_or_association: str = Field(..., max_length=200)
    password: str = Field(..., min_length=1, max_length=72)


class UpdateUserRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=200)
    club_or_association: str = Field(..., max_length=200)


class UserResponse(BaseModel):
    user_id: str
    username: str
    club_or_association: str


class StoredUserResponse(UserResponse):
    # Stored bcrypt hash, never the plaintext.
    password: str | None = None


class UserEnvelope(BaseModel):
    user: UserResponse


class LoginResponse(BaseModel):
    user: UserResponse
    token: str


class UserListResponse(BaseModel):
    users: list[StoredUserResponse]
