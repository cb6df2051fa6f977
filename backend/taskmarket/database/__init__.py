"""
Database engine, session factory, and metadata shared across the application.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from taskmarket.core.config import settings
from taskmarket.middleware.perf_counters import inc_db_query

logger = logging.getLogger(__name__)

# SQLite ships without trigonometric SQL functions; the distance expression
# used by search needs these on every connection.
_SQLITE_MATH_FUNCTIONS = {
    "radians": (1, math.radians),
    "sin": (1, math.sin),
    "cos": (1, math.cos),
    "asin": (1, math.asin),
    "sqrt": (1, math.sqrt),
    "power": (2, math.pow),
}


def _null_safe(fn: Any) -> Any:
    def wrapper(*args: Any) -> Any:
        if any(arg is None for arg in args):
            return None
        return fn(*args)

    return wrapper


def register_sqlite_functions(dbapi_connection: Any) -> None:
    for name, (arity, fn) in _SQLITE_MATH_FUNCTIONS.items():
        dbapi_connection.create_function(name, arity, _null_safe(fn), deterministic=True)


def _build_engine_kwargs(db_url: str) -> dict[str, Any]:
    """Pool settings for PostgreSQL; single shared connection for SQLite."""
    if db_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in db_url or db_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
        "pool_pre_ping": True,
    }


def create_db_engine(db_url: str) -> Engine:
    new_engine = create_engine(db_url, echo=settings.sql_echo, **_build_engine_kwargs(db_url))
    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine, "connect", _on_sqlite_connect)
    return new_engine


def _on_sqlite_connect(dbapi_connection: Any, connection_record: Any) -> None:
    register_sqlite_functions(dbapi_connection)
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@event.listens_for(Engine, "after_cursor_execute", retval=False)
def _perf_after_cursor_execute(
    conn: Engine,
    cursor: Any,
    statement: str,
    params: Any,
    context: Any,
    executemany: bool,
) -> None:
    """Track executed queries for perf instrumentation."""
    inc_db_query(statement)


engine: Engine = create_db_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


__all__ = [
    "Base",
    "SessionLocal",
    "create_db_engine",
    "engine",
    "get_db",
    "register_sqlite_functions",
]
