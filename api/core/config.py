"""
Environment-driven settings.

Values are read on demand (not cached) so tests can monkeypatch the
environment. A `.env` file is loaded once by `main.py` before anything here
is called.
"""

from __future__ import annotations

import os

DEFAULT_PORT = 3000
DEFAULT_MAX_BODY_BYTES = 1024 * 1024


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw not in {"0", "false", "no", "off"}


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip() or "0.0.0.0"


def db_ssl_insecure() -> bool:
    """
    Skip server certificate validation on the DB connection (TLS stays on).

    Defaults to true: managed Postgres providers commonly present certificates
    that don't chain to a local CA.
    """
    return _env_bool("DB_SSL_INSECURE", True)


def db_pool_min_size() -> int:
    return max(0, _env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(1, db_pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 10))


def db_command_timeout() -> float:
    return float(max(1, _env_int("DB_COMMAND_TIMEOUT", 30)))


def max_body_bytes() -> int:
    value = _env_int("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES)
    return value if value > 0 else DEFAULT_MAX_BODY_BYTES


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
