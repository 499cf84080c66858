"""
Auth security helpers: password hashing and access tokens.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import bcrypt
import jwt

from core import config

INVALID_FORMAT = "InvalidFormat"
INVALID_SIGNATURE_OR_EXPIRED = "InvalidSignatureOrExpired"

IDENTITY_CLAIMS = ("user_id", "username", "club_or_association")


class AuthSecurityError(RuntimeError):
    def __init__(self, message: str, *, kind: str = INVALID_SIGNATURE_OR_EXPIRED) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class TokenValidation:
    valid: bool
    identity: dict[str, str] | None = None
    error: str | None = None
    message: str | None = None


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.", kind=INVALID_FORMAT)
    if len(password) > 72:
        # bcrypt only looks at the first 72 bytes.
        raise AuthSecurityError("Password is longer than 72 bytes.", kind=INVALID_FORMAT)
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=config.bcrypt_rounds())).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(*, user_id: str, username: str, club_or_association: str) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + (config.access_token_expire_minutes() * 60)

    payload = {
        "user_id": str(user_id),
        "username": username,
        "club_or_association": club_or_association,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, config.jwt_secret(), algorithm=config.jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.", kind=INVALID_FORMAT)

    try:
        payload = jwt.decode(
            raw,
            config.jwt_secret(),
            algorithms=[config.jwt_algorithm()],
            options={"require": ["exp", "user_id"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    return payload


def extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise AuthSecurityError("Missing Authorization header.", kind=INVALID_FORMAT)

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise AuthSecurityError("Invalid Authorization header format.", kind=INVALID_FORMAT)

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise AuthSecurityError("Authorization must be: Bearer <token>.", kind=INVALID_FORMAT)
    return token


def validate_authorization(authorization: str | None) -> TokenValidation:
    """
    Validate a raw `Authorization` header value.

    Never raises; failures come back as `valid=False` with `error` set to
    INVALID_FORMAT or INVALID_SIGNATURE_OR_EXPIRED.
    """
    try:
        payload = decode_access_token(extract_bearer_token(authorization))
    except AuthSecurityError as exc:
        return TokenValidation(valid=False, error=exc.kind, message=str(exc))

    identity = {claim: str(payload.get(claim) or "") for claim in IDENTITY_CLAIMS}
    return TokenValidation(valid=True, identity=identity)
