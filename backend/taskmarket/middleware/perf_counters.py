# backend/taskmarket/middleware/perf_counters.py
from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
import logging
from typing import Awaitable, Callable, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from taskmarket.core.config import settings


@dataclass
class _PerfState:
    """Mutable request-scoped counters patched across worker threads."""

    db_queries: int = 0
    sql_statements: List[str] = field(default_factory=list)


_state_var: ContextVar[Optional[_PerfState]] = ContextVar("perf_state", default=None)

logger = logging.getLogger(__name__)


def perf_counters_enabled() -> bool:
    """Feature flag gate for perf counters."""
    return settings.perf_counters_enabled


def reset_counters() -> None:
    """Start a fresh counting window for the current context."""
    _state_var.set(_PerfState())


@dataclass
class PerfSnapshot:
    """Immutable snapshot of perf counters for external consumers."""

    db_queries: int
    sql_statements: List[str]


def snapshot() -> PerfSnapshot:
    """Return a snapshot of the current perf counters."""
    state = _state_var.get(None) or _PerfState()
    return PerfSnapshot(
        db_queries=state.db_queries,
        sql_statements=list(state.sql_statements),
    )


def inc_db_query(statement: str) -> None:
    """Record a database query in the active counting window, if any."""
    state = _state_var.get(None)
    if state is None:
        return
    state.db_queries += 1
    state.sql_statements.append(statement)


class PerfCounterMiddleware(BaseHTTPMiddleware):
    """Attach per-request DB query counts to HTTP responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if not perf_counters_enabled():
            return await call_next(request)

        reset_counters()
        state = _state_var.get()
        response = await call_next(request)

        response.headers["x-db-query-count"] = str(state.db_queries)
        logger.debug(
            "perf counters %s %s db=%s",
            request.method,
            request.url.path,
            state.db_queries,
        )
        request.state.query_count = state.db_queries
        return response


__all__ = [
    "PerfCounterMiddleware",
    "perf_counters_enabled",
    "reset_counters",
    "inc_db_query",
    "snapshot",
]
