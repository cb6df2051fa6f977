"""
Prometheus metrics middleware for HTTP request tracking.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..monitoring.prometheus_metrics import prometheus_metrics


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for HTTP requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        # Normalize endpoint label to reduce cardinality (strip numeric IDs)
        # Example: /api/v1/bookings/123 -> /api/v1/bookings/:id
        path = "/".join(":id" if segment.isdigit() else segment for segment in request.url.path.split("/"))

        prometheus_metrics.track_http_request_start(method, path)
        start_time = time.time()
        try:
            response = await call_next(request)
            prometheus_metrics.record_http_request(
                method=method,
                endpoint=path,
                duration=time.time() - start_time,
                status_code=response.status_code,
            )
            return response
        finally:
            prometheus_metrics.track_http_request_end(method, path)
