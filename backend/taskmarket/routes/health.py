# backend/taskmarket/routes/health.py
"""
Health check endpoint.

Used by load balancers and uptime checks; reports database connectivity
without failing the request when the database is down.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..api.dependencies.database import get_db
from ..core.config import settings
from ..core.constants import BRAND_NAME
from ..schemas.base_responses import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(db: Session = Depends(get_db)) -> HealthResponse:
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
        status = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = "unavailable"
        status = "degraded"

    return HealthResponse(
        status=status,
        service=f"{BRAND_NAME} API",
        environment=settings.environment,
        database=database,
    )
