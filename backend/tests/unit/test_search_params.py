"""Normalization rules for tasker and task search parameters."""

import pytest

from taskmarket.core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from taskmarket.core.enums import SortOrder
from taskmarket.schemas.search import TaskerSearchParams, TaskerSort, TaskSearchParams, TaskSort


def test_defaults():
    params = TaskerSearchParams()

    assert params.page == 1
    assert params.limit == DEFAULT_PAGE_LIMIT
    assert params.sort == TaskerSort.RATING
    assert params.order == SortOrder.DESC
    assert params.include_inactive is False
    assert TaskSearchParams().sort == TaskSort.CREATED_AT


@pytest.mark.parametrize("raw, expected", [(0, 1), (-4, 1), (3, 3), (None, 1)])
def test_page_is_floored_at_one(raw, expected):
    assert TaskerSearchParams(page=raw).page == expected


@pytest.mark.parametrize(
    "raw, expected",
    [(0, 1), (-1, 1), (50, 50), (MAX_PAGE_LIMIT + 1, MAX_PAGE_LIMIT), (10_000, MAX_PAGE_LIMIT)],
)
def test_limit_is_clamped(raw, expected):
    assert TaskSearchParams(limit=raw).limit == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("price", TaskerSort.RATE),
        ("newest", TaskerSort.CREATED_AT),
        ("createdAt", TaskerSort.CREATED_AT),
        ("response-time", TaskerSort.RESPONSE_TIME),
        ("popular", TaskerSort.COMPLETIONS),
        ("RATING", TaskerSort.RATING),
        ("bogus", TaskerSort.RATING),
        ("", TaskerSort.RATING),
    ],
)
def test_tasker_sort_aliases(raw, expected):
    assert TaskerSearchParams(sort=raw).sort == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("price", TaskSort.RATE),
        ("completions", TaskSort.POPULAR),
        ("name", TaskSort.NAME),
        ("response_time", TaskSort.CREATED_AT),
    ],
)
def test_task_sort_aliases(raw, expected):
    assert TaskSearchParams(sort=raw).sort == expected


def test_unknown_order_falls_back_to_desc():
    assert TaskerSearchParams(order="sideways").order == SortOrder.DESC
    assert TaskerSearchParams(order="ASC").descending is False


def test_blank_text_filters_become_none():
    params = TaskerSearchParams(query="  ", service_slug="", category_slug=" home ")

    assert params.query is None
    assert params.service_slug is None
    assert params.category_slug == "home"


def test_geo_filter_needs_all_three_values():
    assert TaskerSearchParams(latitude=6.5, longitude=3.3).has_geo_filter is False
    assert TaskerSearchParams(latitude=6.5, longitude=3.3, radius=10).has_geo_filter is True


def test_out_of_range_coordinates_are_rejected():
    with pytest.raises(ValueError):
        TaskerSearchParams(latitude=91, longitude=0, radius=1)


def test_rate_bounds_count_as_skill_filter():
    assert TaskerSearchParams().has_skill_filter is False
    assert TaskerSearchParams(min_rate=1000).has_skill_filter is True
    assert TaskerSearchParams(category_slug="home").has_skill_filter is True
