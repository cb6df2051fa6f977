"""Rating aggregate helpers."""

from __future__ import annotations

from typing import Any, Optional, Tuple


def rolling_average(
    old_average: Optional[float], old_count: Optional[int], rating: float
) -> Tuple[float, int]:
    """
    Fold one new rating into a stored running average.

    Returns ``(new_average, new_count)``. A missing average or count is
    treated as zero, so the first rating becomes the average.
    """
    count = old_count or 0
    average = old_average or 0.0
    new_count = count + 1
    return (average * count + rating) / new_count, new_count


def apply_rating(entity: Any, rating: float) -> None:
    """Fold ``rating`` into ``entity.average_rating``/``total_reviews`` in place."""
    entity.average_rating, entity.total_reviews = rolling_average(
        entity.average_rating, entity.total_reviews, rating
    )
