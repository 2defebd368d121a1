"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created once per process by the FastAPI lifespan (see
`api/main.py`), stored on `app.state.pool` and handed to route handlers via
the `get_pool` dependency. Nothing in here keeps module-level state.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
- user input always travels as a bound parameter, never inside the SQL text
"""

from __future__ import annotations

import json
import logging
import os
import ssl
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from . import config

logger = logging.getLogger(__name__)


def _sanitize_database_url(url: str) -> str:
    # TLS is configured through `ssl=`; a DSN sslmode would override it.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def ssl_context(insecure: bool) -> ssl.SSLContext:
    """
    TLS context for the pool. Encryption is always on; `insecure` only drops
    hostname and certificate-chain checks.
    """
    ctx = ssl.create_default_context()
    if insecure:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return ctx


async def _init_connection(conn: asyncpg.Connection) -> None:
    # ST_AsGeoJSON(...)::json should reach Python as a dict, not a string.
    for type_name in ("json", "jsonb"):
        await conn.set_type_codec(
            type_name,
            encoder=json.dumps,
            decoder=json.loads,
            schema="pg_catalog",
        )


async def create_pool() -> asyncpg.Pool:
    dsn = database_url()
    insecure = config.db_ssl_insecure()
    min_size = config.db_pool_min_size()
    max_size = config.db_pool_max_size()
    if insecure:
        logger.warning("db_ssl_certificate_validation_disabled")

    pool = await asyncpg.create_pool(
        dsn=dsn,
        min_size=min_size,
        max_size=max_size,
        command_timeout=config.db_command_timeout(),
        ssl=ssl_context(insecure),
        init=_init_connection,
    )
    logger.info(
        "db_pool_started min_size=%s max_size=%s ssl_insecure=%s",
        min_size,
        max_size,
        insecure,
    )
    return pool


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()
    logger.info("db_pool_closed")


def get_pool(request: Request) -> asyncpg.Pool:
    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        raise RuntimeError("DB pool is not initialized. It is created in the app lifespan.")
    return pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(pool: asyncpg.Pool, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await pool.fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(pool: asyncpg.Pool, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await pool.fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]
