"""Tasker and task discovery: query assembly, distance and result types."""

from .distance import haversine_distance_km
from .query_spec import SearchQuerySpec
from .results import PageKeys, SearchPage, TaskerSearchHit, TaskSearchHit

__all__ = [
    "PageKeys",
    "SearchPage",
    "SearchQuerySpec",
    "TaskSearchHit",
    "TaskerSearchHit",
    "haversine_distance_km",
]
