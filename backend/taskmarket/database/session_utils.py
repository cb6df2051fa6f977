"""
Helpers for writing dialect-aware queries against a session.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import UnboundExecutionError
from sqlalchemy.orm import Session
from sqlalchemy.sql import ColumnElement, case


def resolve_session_bind(session: Session) -> Optional[Connection | Engine]:
    """Return the engine/connection bound to a session, if any."""
    try:
        return session.get_bind()
    except UnboundExecutionError:
        return None


def get_dialect_name(session: Session, default: str = "postgresql") -> str:
    """
    Return the SQLAlchemy dialect name for ``session``.

    Falls back to ``default`` when the bound engine cannot be resolved.
    """
    bind = resolve_session_bind(session)
    dialect = getattr(bind, "dialect", None)
    return getattr(dialect, "name", None) or default


def nulls_last_order(column: Any, descending: bool, dialect_name: str) -> list[ColumnElement[Any]]:
    """
    ORDER BY clauses that put NULL keys after every non-NULL key.

    PostgreSQL sorts NULLs first on DESC, so the modifier is explicit there.
    Other dialects get a leading ``IS NULL`` flag column.
    """
    ordered = column.desc() if descending else column.asc()
    if dialect_name == "postgresql":
        return [ordered.nulls_last()]
    return [case((column.is_(None), 1), else_=0).asc(), ordered]
