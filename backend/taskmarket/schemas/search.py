"""
Search parameter models for tasker and task discovery.

Values arrive already type-coerced from the HTTP layer. The validators
here only normalize: page is floored at 1, limit is clamped to
[1, MAX_PAGE_LIMIT], sort aliases are resolved and an unknown sort falls
back to the entity default instead of failing.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ..core.enums import SortOrder


class TaskerSort(str, Enum):
    RATING = "rating"
    COMPLETIONS = "completions"
    RATE = "rate"
    RESPONSE_TIME = "response_time"
    DISTANCE = "distance"
    CREATED_AT = "created_at"


class TaskSort(str, Enum):
    CREATED_AT = "created_at"
    NAME = "name"
    RATE = "rate"
    RATING = "rating"
    POPULAR = "popular"
    DISTANCE = "distance"


_SORT_ALIASES: Dict[str, str] = {
    "price": "rate",
    "newest": "created_at",
    "createdat": "created_at",
    "responsetime": "response_time",
}


def _normalize_sort_key(value: Any) -> str:
    raw = getattr(value, "value", value)
    key = str(raw or "").strip().lower().replace("-", "_")
    return _SORT_ALIASES.get(key.replace("_", ""), _SORT_ALIASES.get(key, key))


class _SearchParams(BaseModel):
    model_config = ConfigDict(validate_default=True)

    query: Optional[str] = Field(default=None, description="Case-insensitive substring")
    service_id: Optional[int] = None
    service_slug: Optional[str] = None
    category_id: Optional[int] = None
    category_slug: Optional[str] = None
    min_rate: Optional[int] = Field(default=None, description="Inclusive, minor currency units")
    max_rate: Optional[int] = Field(default=None, description="Inclusive, minor currency units")
    min_rating: Optional[float] = None
    location_id: Optional[int] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    radius: Optional[float] = Field(default=None, ge=0, description="Kilometers")
    include_inactive: bool = False
    order: SortOrder = SortOrder.DESC
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT

    @field_validator("query", "service_slug", "category_slug")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("order", mode="before")
    @classmethod
    def _normalize_order(cls, value: Any) -> Any:
        key = str(getattr(value, "value", value) or "").strip().lower()
        return key if key in (SortOrder.ASC.value, SortOrder.DESC.value) else SortOrder.DESC

    @field_validator("page", mode="before")
    @classmethod
    def _floor_page(cls, value: Any) -> int:
        if value is None:
            return DEFAULT_PAGE
        return max(int(value), 1)

    @field_validator("limit", mode="before")
    @classmethod
    def _clamp_limit(cls, value: Any) -> int:
        if value is None:
            return DEFAULT_PAGE_LIMIT
        return min(max(int(value), 1), MAX_PAGE_LIMIT)

    @property
    def has_geo_filter(self) -> bool:
        return self.latitude is not None and self.longitude is not None and self.radius is not None

    @property
    def has_rate_filter(self) -> bool:
        return self.min_rate is not None or self.max_rate is not None

    @property
    def descending(self) -> bool:
        return self.order == SortOrder.DESC


class TaskerSearchParams(_SearchParams):
    """Filters for tasker discovery. Default sort is rating, highest first."""

    DEFAULT_SORT: ClassVar[TaskerSort] = TaskerSort.RATING

    is_elite: Optional[bool] = None
    is_background_checked: Optional[bool] = None
    is_identity_verified: Optional[bool] = None
    sort: TaskerSort = TaskerSort.RATING

    @field_validator("sort", mode="before")
    @classmethod
    def _resolve_sort(cls, value: Any) -> TaskerSort:
        key = _normalize_sort_key(value)
        if key == "popular":
            key = TaskerSort.COMPLETIONS.value
        try:
            return TaskerSort(key)
        except ValueError:
            return cls.DEFAULT_SORT

    @property
    def has_skill_filter(self) -> bool:
        return (
            self.service_id is not None
            or self.service_slug is not None
            or self.category_id is not None
            or self.category_slug is not None
            or self.has_rate_filter
        )


class TaskSearchParams(_SearchParams):
    """Filters for task listings. Default sort is newest first."""

    DEFAULT_SORT: ClassVar[TaskSort] = TaskSort.CREATED_AT

    is_featured: Optional[bool] = None
    is_popular: Optional[bool] = None
    tasker_id: Optional[int] = None
    sort: TaskSort = TaskSort.CREATED_AT

    @field_validator("sort", mode="before")
    @classmethod
    def _resolve_sort(cls, value: Any) -> TaskSort:
        key = _normalize_sort_key(value)
        if key == "completions":
            key = TaskSort.POPULAR.value
        try:
            return TaskSort(key)
        except ValueError:
            return cls.DEFAULT_SORT
