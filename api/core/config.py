"""
Environment-driven settings.

Values are read on each call so tests can override them with monkeypatch.
"""

from __future__ import annotations

import os


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def database_url_raw() -> str:
    # POSTGRES_URL is what older deployments export.
    return (os.environ.get("DATABASE_URL") or os.environ.get("POSTGRES_URL") or "").strip()


def db_pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", 1), 0)


def db_pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 5), 1)


def db_command_timeout() -> int:
    return _env_int("DB_COMMAND_TIMEOUT", 30)


def db_max_idle_seconds() -> int:
    return _env_int("DB_MAX_IDLE_SECONDS", 300)


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return _env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return _env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    return _env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def bcrypt_rounds() -> int:
    # bcrypt accepts 4..31
    return min(max(_env_int("BCRYPT_ROUNDS", 10), 4), 31)


def listen_host() -> str:
    return _env_str("HOST", "0.0.0.0")


def listen_port() -> int:
    return _env_int("PORT", _env_int("EXPRESS_PORT", 3000))


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def expose_db_errors() -> bool:
    return _env_bool("EXPOSE_DB_ERRORS", False)
