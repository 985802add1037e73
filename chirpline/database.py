"""Process-wide PostgreSQL engine configured from the environment."""

from __future__ import annotations

import os
import threading
from collections.abc import Mapping

import sqlalchemy

_DSN_TEMPLATE = (
    "host={host} port={port} user={user} password={password} "
    "dbname={dbname} sslmode=disable"
)

_engine: sqlalchemy.engine.Engine | None = None
_lock = threading.Lock()


def build_dsn(env: Mapping[str, str]) -> str:
    """Build the libpq connection string from DB_* variables."""
    return _DSN_TEMPLATE.format(
        host=env.get("DB_HOST", ""),
        port=env.get("DB_PORT", ""),
        user=env.get("DB_USER", ""),
        password=env.get("DB_PASSWORD", ""),
        dbname=env.get("DB_NAME", ""),
    )


def get_sql_client() -> sqlalchemy.engine.Engine:
    """Return the shared engine, creating and pinging it on first use."""
    global _engine
    with _lock:
        if _engine is None:
            engine = sqlalchemy.create_engine(
                "postgresql+psycopg2://",
                connect_args={"dsn": build_dsn(os.environ)},
            )
            try:
                with engine.connect() as connection:
                    connection.execute(sqlalchemy.text("SELECT 1"))
            except Exception:
                engine.dispose()
                raise
            _engine = engine
        return _engine