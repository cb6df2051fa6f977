"""
Base response schemas for standardized API responses.

Every list endpoint returns the same pagination envelope.
"""

from datetime import datetime, timezone
import math
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """
    Standard paginated response for all list endpoints.
    """

    items: List[T] = Field(description="List of items")
    page: int = Field(default=1, description="Current page number", ge=1)
    limit: int = Field(default=20, description="Items per page", ge=1, le=100)
    total: int = Field(description="Total number of matching items")
    total_pages: int = Field(description="Number of pages at this limit")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"items": ["..."], "page": 1, "limit": 20, "total": 100, "total_pages": 5}
        }
    )


class SuccessResponse(BaseModel):
    """Standard success response for operations."""

    success: bool = Field(default=True, description="Operation success status")
    message: str = Field(description="Human-readable success message")
    data: Optional[Dict[str, Any]] = Field(default=None, description="Optional additional data")


class DeleteResponse(BaseModel):
    """Standard response for delete operations."""

    success: bool = Field(default=True, description="Deletion success status")
    message: str = Field(description="Human-readable deletion message")
    deleted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Deletion timestamp"
    )


class HealthResponse(BaseModel):
    status: str
    service: str
    environment: str
    database: str


def total_pages_for(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items at ``limit`` per page."""
    if total <= 0:
        return 0
    return math.ceil(total / limit)
