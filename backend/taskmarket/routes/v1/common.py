# backend/taskmarket/routes/v1/common.py
"""Helpers shared by the v1 routers."""

import asyncio
from typing import Any, Callable, TypeVar

from ...core.exceptions import DomainException, raise_503_if_pool_exhaustion

R = TypeVar("R")


async def run_service(fn: Callable[..., R], *args: Any, **kwargs: Any) -> R:
    """
    Run a synchronous service call in a worker thread.

    Domain exceptions become HTTP errors; pool exhaustion becomes a 503.
    """
    try:
        return await asyncio.to_thread(fn, *args, **kwargs)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        raise
