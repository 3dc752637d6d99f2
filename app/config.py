from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL


LIBPQ_SSL_MODES = {"disable", "allow", "prefer", "require", "verify-ca", "verify-full"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    # Extra keyword arguments handed to the DB-API connect() call.
    connect_args: dict

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    sql_echo: bool = False


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _truthy(value: Optional[str]) -> bool:
    return (value or "").lower() in {"1", "true", "yes", "on"}


def ssl_connect_args(mode: Optional[str]) -> dict:
    """Translate ``PGSSLMODE`` into psycopg connect arguments.

    ``"true"`` requires SSL without verifying the server certificate;
    libpq mode names are passed through; anything else leaves SSL to the
    driver's default.
    """
    if not mode:
        return {}
    mode = mode.lower()
    if mode == "true":
        return {"sslmode": "require"}
    if mode in LIBPQ_SSL_MODES:
        return {"sslmode": mode}
    return {}


def _postgres_url() -> str:
    port = _getenv("PGPORT")
    url = URL.create(
        "postgresql+psycopg",
        username=_getenv("PGUSER"),
        password=_getenv("PGPASSWORD"),
        host=_getenv("PGHOST"),
        port=int(port) if port else None,
        database=_getenv("PGDATABASE"),
    )
    return url.render_as_string(hide_password=False)


def get_settings() -> Settings:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - ``DATABASE_URL`` wins over the individual ``PG*`` variables
    """
    load_dotenv(override=False)

    database_url = _getenv("DATABASE_URL")
    if database_url:
        connect_args = {}
    else:
        database_url = _postgres_url()
        connect_args = ssl_connect_args(_getenv("PGSSLMODE"))

    return Settings(
        database_url=database_url,
        connect_args=connect_args,
        host=_getenv("HOST", "0.0.0.0") or "0.0.0.0",
        port=int(_getenv("PORT", "8080") or "8080"),
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
        sql_echo=_truthy(_getenv("SQL_ECHO")),
    )
