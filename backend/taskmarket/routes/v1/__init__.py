# backend/taskmarket/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import (
    bookings,
    categories,
    locations,
    payments,
    reviews,
    services,
    taskers,
    tasks,
    users,
    verifications,
)

__all__ = [
    "bookings",
    "categories",
    "locations",
    "payments",
    "reviews",
    "services",
    "taskers",
    "tasks",
    "users",
    "verifications",
]
