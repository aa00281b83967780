"""Database connection and schema management.

One SQLAlchemy engine per process, created from DATABASE_URL.
PostgreSQL in production, SQLite for local development and tests.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator

import structlog
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine, make_url

from folio.db.schema import metadata

logger = structlog.get_logger(__name__)

# Current engine (module-level, shared by all requests of the process)
_engine: Engine | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given SQLAlchemy URL.

    SQLite file databases get their parent directory created and
    foreign key enforcement switched on for every connection.
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(url, echo=echo)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(url, echo=echo, pool_pre_ping=True)


def init_db(database_url: str | None = None, echo: bool = False) -> Engine:
    """Initialize database with schema.

    Creates all required tables if they don't exist.

    Args:
        database_url: SQLAlchemy URL. Defaults to the configured DATABASE_URL.

    Returns:
        The engine now used by get_db().
    """
    global _engine

    if database_url is None:
        from folio.config import load_app_config

        database = load_app_config().database
        database_url, echo = database.url, database.echo

    if _engine is not None:
        _engine.dispose()

    _engine = create_db_engine(database_url, echo=echo)
    metadata.create_all(_engine)

    logger.info(
        "database.initialized",
        backend=_engine.url.get_backend_name(),
        database=_engine.url.render_as_string(hide_password=True),
    )
    return _engine


def get_engine() -> Engine:
    """Return the current engine, initializing from config on first use."""
    if _engine is None:
        return init_db()
    return _engine


def dispose_engine() -> None:
    """Close pooled connections and forget the engine."""
    global _engine

    if _engine is not None:
        _engine.dispose()
        _engine = None


@contextmanager
def get_db() -> Generator[Connection, None, None]:
    """Get database connection as a transactional context manager.

    Everything executed inside the block commits together, or rolls back
    together if the block raises.

    Example:
        with get_db() as conn:
            rows = conn.execute(text("SELECT * FROM projects")).mappings().all()
    """
    conn = get_engine().connect()

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string (the stored timestamp format)."""
    return datetime.now(timezone.utc).isoformat()


def ping() -> None:
    """Run a trivial query; raises if the database is unreachable."""
    with get_db() as conn:
        conn.execute(text("SELECT 1"))
