"""
Prometheus metrics endpoint for monitoring infrastructure.

This is a PUBLIC endpoint (no authentication required) following
standard Prometheus practices. It exposes metrics collected from
the @measure_operation decorators throughout the application.
"""

import os
from time import monotonic
from typing import Optional, Tuple

from fastapi import APIRouter, Request, Response

from ..core.config import settings
from ..monitoring.prometheus_metrics import prometheus_metrics

router = APIRouter()

_CACHE_TTL_SECONDS = 1.0
_metrics_cache: Optional[Tuple[float, bytes]] = None


def _cache_enabled() -> bool:
    if os.getenv("PROMETHEUS_DISABLE_CACHE", "0").lower() in {"1", "true", "yes"}:
        return False
    return settings.environment != "test"


def _get_metrics_payload(*, force_refresh: bool = False) -> bytes:
    """Return the exposition payload, reusing one generated within the last second."""
    global _metrics_cache

    now = monotonic()
    if not _cache_enabled():
        return prometheus_metrics.get_metrics()

    if not force_refresh and _metrics_cache is not None:
        cached_ts, cached_payload = _metrics_cache
        if now - cached_ts < _CACHE_TTL_SECONDS:
            return cached_payload

    payload = prometheus_metrics.get_metrics()
    _metrics_cache = (now, payload)
    return payload


@router.get("/metrics", include_in_schema=False, response_class=Response, response_model=None)
async def get_prometheus_metrics(request: Request) -> Response:
    """
    Expose Prometheus metrics for scraping.

    Returns:
        Response with Prometheus exposition format (text/plain)
    """
    refresh_flag = request.query_params.get("refresh", "").lower() in {"1", "true", "yes"}
    return Response(
        content=_get_metrics_payload(force_refresh=refresh_flag),
        media_type=prometheus_metrics.get_content_type(),
        headers={
            "Cache-Control": "no-cache, no-store, must-revalidate",
            "Pragma": "no-cache",
            "Expires": "0",
        },
    )
