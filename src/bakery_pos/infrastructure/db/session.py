from __future__ import annotations

import logging
import os
from functools import lru_cache

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set")
    return url


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite ignores ON DELETE rules unless this is set per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache(maxsize=8)
def _build_engine(database_url: str, connect_timeout: int) -> Engine:
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
        connect_args={"connect_timeout": connect_timeout},
    )


def get_engine(timeout_seconds: float = 1.0) -> Engine:
    return _build_engine(_database_url(), max(1, int(timeout_seconds)))


def ping_database(timeout_seconds: float = 1.0) -> bool:
    try:
        engine = get_engine(timeout_seconds)
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except (RuntimeError, SQLAlchemyError) as exc:
        logger.warning("database_ping_failed", extra={"error_type": type(exc).__name__})
        return False
    return True
