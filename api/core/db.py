"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver exceptions never leave this module as-is; they are translated into
`DatabaseError` subclasses so handlers only deal with one taxonomy:
- ConnectivityError: connection refused/lost, timeouts
- ConstraintError: unique / foreign key / check violations
- QueryError: anything else PostgreSQL reports
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncIterator, Iterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from core import config

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


class DatabaseError(RuntimeError):
    pass


class ConnectivityError(DatabaseError):
    pass


class ConstraintError(DatabaseError):
    def __init__(self, message: str, *, constraint_name: str | None = None) -> None:
        super().__init__(message)
        self.constraint_name = constraint_name


class QueryError(DatabaseError):
    pass


_CONNECTIVITY_ERRORS: tuple[type[BaseException], ...] = (
    OSError,
    asyncio.TimeoutError,
    asyncpg.exceptions.PostgresConnectionError,
    asyncpg.exceptions.ConnectionDoesNotExistError,
    asyncpg.exceptions.CannotConnectNowError,
)


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except asyncpg.exceptions.IntegrityConstraintViolationError as exc:
        raise ConstraintError(
            str(exc),
            constraint_name=getattr(exc, "constraint_name", None),
        ) from exc
    except _CONNECTIVITY_ERRORS as exc:
        raise ConnectivityError(str(exc) or exc.__class__.__name__) from exc
    except (asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
        raise QueryError(str(exc)) from exc


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = config.database_url_raw()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    with _translate_errors():
        _pool = await asyncpg.create_pool(
            dsn=database_url(),
            min_size=config.db_pool_min_size(),
            max_size=config.db_pool_max_size(),
            command_timeout=config.db_command_timeout(),
            max_inactive_connection_lifetime=config.db_max_idle_seconds(),
        )
    logger.info(
        "db_pool_ready min_size=%s max_size=%s",
        config.db_pool_min_size(),
        config.db_pool_max_size(),
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None
    logger.info("db_pool_closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


def _row_count(status: str | None) -> int:
    """
    Parse the affected-row count out of a command tag.

    "UPDATE 3" -> 3, "INSERT 0 1" -> 1, "DELETE 0" -> 0.
    """
    tail = (status or "").rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else 0


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    with _translate_errors():
        row = await pool().fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    with _translate_errors():
        rows = await pool().fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def execute(sql: str, *args: Any) -> int:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) and return the affected row count.
    """
    with _translate_errors():
        status = await pool().execute(sql, *args)
    return _row_count(status)


@asynccontextmanager
async def transaction() -> AsyncIterator[asyncpg.Connection]:
    """
    Acquire one pooled connection and run a transaction on it.

    Commits when the block exits normally, rolls back on any exception.
    The connection goes back to the pool on every exit path.
    """
    with _translate_errors():
        async with pool().acquire() as conn:  # type: asyncpg.Connection
            async with conn.transaction():
                yield conn
