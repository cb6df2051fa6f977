# backend/taskmarket/schemas/__init__.py
"""
Pydantic schemas for the TaskMarket platform.

Request bodies forbid unknown fields; responses are built from ORM rows.
"""

from .base_responses import DeleteResponse, HealthResponse, PaginatedResponse, SuccessResponse
from .search import TaskerSearchParams, TaskerSort, TaskSearchParams, TaskSort

__all__ = [
    "DeleteResponse",
    "HealthResponse",
    "PaginatedResponse",
    "SuccessResponse",
    "TaskSearchParams",
    "TaskSort",
    "TaskerSearchParams",
    "TaskerSort",
]
