# backend/taskmarket/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI

from .core.config import is_running_tests, settings
from .core.constants import BRAND_NAME
from .errors import register_error_handlers
from .middleware.perf_counters import PerfCounterMiddleware
from .middleware.prometheus_middleware import PrometheusMiddleware
from .routes import health, prometheus
from .routes.v1 import (
    bookings as bookings_v1,
    categories as categories_v1,
    locations as locations_v1,
    payments as payments_v1,
    reviews as reviews_v1,
    services as services_v1,
    taskers as taskers_v1,
    tasks as tasks_v1,
    users as users_v1,
    verifications as verifications_v1,
)

# Configure logging
logging.basicConfig(
    level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

API_TITLE = f"{BRAND_NAME} API"
API_DESCRIPTION = "Local services marketplace: taskers, tasks, bookings, payments and verification."


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")
    if is_running_tests():
        logger.info("Running under pytest (test mode active)")
    yield
    logger.info(f"{BRAND_NAME} API shutting down...")


def create_app() -> FastAPI:
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )
    register_error_handlers(app)

    # Middleware runs in reverse registration order
    app.add_middleware(PerfCounterMiddleware)
    app.add_middleware(PrometheusMiddleware)

    api_v1 = APIRouter(prefix=settings.api_prefix or "/api/v1")
    api_v1.include_router(taskers_v1.router, prefix="/taskers")
    api_v1.include_router(tasks_v1.router, prefix="/tasks")
    api_v1.include_router(categories_v1.router, prefix="/categories")
    api_v1.include_router(services_v1.router, prefix="/services")
    api_v1.include_router(bookings_v1.router, prefix="/bookings")
    api_v1.include_router(reviews_v1.router, prefix="/reviews")
    api_v1.include_router(payments_v1.router, prefix="/payments")
    api_v1.include_router(verifications_v1.router, prefix="/verifications")
    api_v1.include_router(locations_v1.router, prefix="/locations")
    api_v1.include_router(users_v1.router, prefix="/users")

    app.include_router(api_v1)
    app.include_router(health.router)
    app.include_router(prometheus.router)
    return app


app = create_app()
