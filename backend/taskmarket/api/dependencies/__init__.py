# backend/taskmarket/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .database import get_db
from .services import (
    get_booking_service,
    get_catalog_service,
    get_category_service,
    get_location_service,
    get_payment_service,
    get_review_service,
    get_task_service,
    get_tasker_service,
    get_verification_service,
)

__all__ = [
    # Database
    "get_db",
    # Services
    "get_booking_service",
    "get_catalog_service",
    "get_category_service",
    "get_location_service",
    "get_payment_service",
    "get_review_service",
    "get_task_service",
    "get_tasker_service",
    "get_verification_service",
]
