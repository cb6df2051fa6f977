# backend/taskmarket/services/search/results.py
"""
Value objects passed between the two search phases.

``PageKeys`` is what ``select_page`` produces: the ordered primary keys of
one page plus the total match count. ``hydrate_children`` turns it into
hit objects, and the service wraps those in a ``SearchPage``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from ...schemas.base_responses import total_pages_for

T = TypeVar("T")


@dataclass(frozen=True)
class PageKeys:
    ids: Tuple[int, ...]
    total: int
    page: int
    limit: int
    distances: Dict[int, float] = field(default_factory=dict)

    @classmethod
    def empty(cls, page: int, limit: int) -> PageKeys:
        return cls(ids=(), total=0, page=page, limit=limit)

    def __bool__(self) -> bool:
        return bool(self.ids)


@dataclass
class TaskerSearchHit:
    tasker: Any
    skills: List[Any] = field(default_factory=list)
    portfolio: List[Any] = field(default_factory=list)
    distance_km: Optional[float] = None


@dataclass
class TaskSearchHit:
    task: Any
    questions: List[Any] = field(default_factory=list)
    faqs: List[Any] = field(default_factory=list)
    distance_km: Optional[float] = None


@dataclass
class SearchPage(Generic[T]):
    items: List[T]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total, self.limit)
