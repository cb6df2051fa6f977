"""Repository tests for two-phase tasker search."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import delete

from taskmarket.middleware.perf_counters import reset_counters, snapshot
from taskmarket.models.tasker import Tasker
from taskmarket.repositories.tasker_search_repository import TaskerSearchRepository
from taskmarket.schemas.search import TaskerSearchParams
from taskmarket.utils.geo import haversine_km

LAGOS = (6.5244, 3.3792)


@pytest.fixture
def repo(db):
    return TaskerSearchRepository(db)


def _search(repo, **params):
    keys = repo.select_page(TaskerSearchParams(**params))
    return keys, repo.hydrate_children(keys)


def test_pages_are_disjoint_and_ordered_by_id_on_ties(repo, seed):
    taskers = [seed.tasker(average_rating=4.5) for _ in range(5)]

    seen = []
    for page in (1, 2, 3):
        keys, hits = _search(repo, page=page, limit=2)
        assert keys.total == 5
        seen.extend(hit.tasker.id for hit in hits)

    assert seen == sorted(t.id for t in taskers)
    assert len(set(seen)) == 5


def test_page_past_the_end_is_empty_but_keeps_total(repo, seed):
    for _ in range(3):
        seed.tasker()

    keys, hits = _search(repo, page=5, limit=2)

    assert hits == []
    assert keys.total == 3
    assert keys.page == 5


def test_inactive_taskers_are_hidden_unless_requested(repo, seed):
    active = seed.tasker()
    inactive = seed.tasker(is_active=False)

    keys, _ = _search(repo)
    assert keys.ids == (active.id,)

    keys, _ = _search(repo, include_inactive=True)
    assert set(keys.ids) == {active.id, inactive.id}


def test_rating_sort_puts_unrated_taskers_last(repo, seed):
    unrated = seed.tasker()
    low = seed.tasker(average_rating=3.0)
    high = seed.tasker(average_rating=4.8)

    keys, _ = _search(repo, sort="rating", order="desc")
    assert keys.ids == (high.id, low.id, unrated.id)

    keys, _ = _search(repo, sort="rating", order="asc")
    assert keys.ids == (low.id, high.id, unrated.id)


def test_unknown_service_slug_returns_empty_page_after_one_query(repo, seed):
    seed.tasker()

    reset_counters()
    keys = repo.select_page(TaskerSearchParams(service_slug="no-such-service"))
    hits = repo.hydrate_children(keys)

    assert keys.total == 0
    assert hits == []
    assert snapshot().db_queries == 1


def test_slug_disagreeing_with_explicit_id_returns_empty_page(repo, seed):
    plumbing = seed.service("Plumbing")
    painting = seed.service("Painting")
    tasker = seed.tasker()
    seed.skill(tasker, plumbing)

    keys, _ = _search(repo, service_slug="plumbing", service_id=painting.id)
    assert keys.total == 0

    keys, _ = _search(repo, service_slug="plumbing", service_id=plumbing.id)
    assert keys.ids == (tasker.id,)


def test_service_filter_ignores_removed_skills(repo, seed):
    cleaning = seed.service("Home Cleaning")
    current = seed.tasker()
    former = seed.tasker()
    seed.skill(current, cleaning)
    seed.skill(former, cleaning, is_active=False)

    keys, _ = _search(repo, service_slug="home-cleaning")

    assert keys.ids == (current.id,)


def test_category_filter_matches_taskers_through_any_skill(repo, seed):
    home = seed.category("Home")
    outdoor = seed.category("Outdoor")
    cleaning = seed.service("Cleaning", category=home)
    ironing = seed.service("Ironing", category=home)
    mowing = seed.service("Mowing", category=outdoor)

    both = seed.tasker()
    seed.skill(both, cleaning)
    seed.skill(both, ironing)
    gardener = seed.tasker()
    seed.skill(gardener, mowing)

    keys, _ = _search(repo, category_slug="home")

    assert keys.ids == (both.id,)
    assert keys.total == 1


def test_rate_bounds_are_inclusive(repo, seed):
    service = seed.service()
    cheap = seed.tasker()
    mid = seed.tasker()
    pricey = seed.tasker()
    seed.skill(cheap, service, hourly_rate=200000)
    seed.skill(mid, service, hourly_rate=350000)
    seed.skill(pricey, service, hourly_rate=900000)

    keys, _ = _search(repo, min_rate=200000, max_rate=350000, sort="rate", order="asc")

    assert keys.ids == (cheap.id, mid.id)


def test_rate_sort_without_filters_keeps_taskers_without_skills_last(repo, seed):
    service = seed.service()
    other = seed.service()
    no_skills = seed.tasker()
    spread = seed.tasker()
    steady = seed.tasker()
    seed.skill(spread, service, hourly_rate=100000)
    seed.skill(spread, other, hourly_rate=800000)
    seed.skill(steady, service, hourly_rate=500000)

    keys, _ = _search(repo, sort="price", order="asc")
    assert keys.ids == (spread.id, steady.id, no_skills.id)

    keys, _ = _search(repo, sort="price", order="desc")
    assert keys.ids == (spread.id, steady.id, no_skills.id)
    assert keys.total == 3


def test_geo_radius_includes_nearby_and_excludes_far_taskers(repo, seed):
    near = seed.tasker(location=seed.location(latitude=6.6018, longitude=3.3515))
    far = seed.tasker(location=seed.location(latitude=9.0765, longitude=7.3986))
    seed.tasker(location=seed.location(latitude=None, longitude=None))
    seed.tasker()

    keys, hits = _search(repo, latitude=LAGOS[0], longitude=LAGOS[1], radius=25)

    assert keys.ids == (near.id,)
    expected = haversine_km(LAGOS[0], LAGOS[1], 6.6018, 3.3515)
    assert hits[0].distance_km == pytest.approx(expected, rel=1e-9)
    assert far.id not in keys.ids


def test_geo_radius_boundary_matches_python_haversine(repo, seed):
    point = (6.4550, 3.3941)
    tasker = seed.tasker(location=seed.location(latitude=point[0], longitude=point[1]))
    distance = haversine_km(LAGOS[0], LAGOS[1], *point)

    keys, _ = _search(repo, latitude=LAGOS[0], longitude=LAGOS[1], radius=distance + 1e-6)
    assert keys.ids == (tasker.id,)

    keys, _ = _search(repo, latitude=LAGOS[0], longitude=LAGOS[1], radius=distance - 1e-6)
    assert keys.ids == ()


def test_geo_search_skips_soft_deleted_locations(repo, seed):
    location = seed.location(deleted_at=datetime.now(timezone.utc))
    seed.tasker(location=location)

    keys, _ = _search(repo, latitude=LAGOS[0], longitude=LAGOS[1], radius=50)

    assert keys.total == 0


def test_distance_sort_orders_nearest_first(repo, seed):
    further = seed.tasker(location=seed.location(latitude=6.6500, longitude=3.3500))
    closer = seed.tasker(location=seed.location(latitude=6.5300, longitude=3.3800))

    keys, hits = _search(
        repo, latitude=LAGOS[0], longitude=LAGOS[1], radius=50, sort="distance", order="asc"
    )

    assert keys.ids == (closer.id, further.id)
    assert hits[0].distance_km < hits[1].distance_km


def test_hydration_uses_three_queries_and_keeps_page_order(repo, seed):
    service = seed.service()
    first = seed.tasker(average_rating=5.0)
    second = seed.tasker(average_rating=4.0)
    seed.skill(first, service)
    seed.skill(second, service)
    seed.portfolio_item(first)

    keys = repo.select_page(TaskerSearchParams(sort="rating"))

    reset_counters()
    hits = repo.hydrate_children(keys)

    assert snapshot().db_queries == 3
    assert [hit.tasker.id for hit in hits] == [first.id, second.id]


def test_hydration_returns_active_skills_and_ordered_portfolio(repo, seed):
    kept = seed.service("Cleaning")
    dropped = seed.service("Painting")
    tasker = seed.tasker()
    active_skill = seed.skill(tasker, kept)
    seed.skill(tasker, dropped, is_active=False)
    later = seed.portfolio_item(tasker, display_order=2)
    earlier = seed.portfolio_item(tasker, display_order=0)
    tie = seed.portfolio_item(tasker, display_order=2)

    _, hits = _search(repo)

    hit = hits[0]
    assert [skill.id for skill in hit.skills] == [active_skill.id]
    assert hit.skills[0].service.slug == "cleaning"
    assert [item.id for item in hit.portfolio] == [earlier.id, later.id, tie.id]
    assert hit.tasker.user is not None


def test_hydration_follows_page_order_not_id_order(repo, seed):
    service = seed.service()
    low = seed.tasker(average_rating=3.0)
    high = seed.tasker(average_rating=4.8)
    mid = seed.tasker(average_rating=4.0)
    seed.skill(high, service)
    one_piece = seed.portfolio_item(mid)
    many = [seed.portfolio_item(low, display_order=n) for n in (1, 0, 2)]
    low_skill = seed.skill(low, service)

    keys, hits = _search(repo, sort="rating", order="desc")

    assert keys.ids == (high.id, mid.id, low.id)
    assert [hit.tasker.id for hit in hits] == [high.id, mid.id, low.id]
    by_id = {hit.tasker.id: hit for hit in hits}
    assert by_id[high.id].portfolio == []
    assert len(by_id[high.id].skills) == 1
    assert by_id[mid.id].skills == []
    assert [item.id for item in by_id[mid.id].portfolio] == [one_piece.id]
    assert [item.id for item in by_id[low.id].portfolio] == [many[1].id, many[0].id, many[2].id]
    assert [skill.id for skill in by_id[low.id].skills] == [low_skill.id]


def test_hydration_skips_parent_removed_after_page_selection(repo, seed, db):
    first = seed.tasker(average_rating=4.9)
    gone = seed.tasker(average_rating=4.5)
    last = seed.tasker(average_rating=4.1)

    keys = repo.select_page(TaskerSearchParams(sort="rating"))
    assert keys.ids == (first.id, gone.id, last.id)

    db.execute(delete(Tasker).where(Tasker.id == gone.id))
    db.commit()

    hits = repo.hydrate_children(keys)

    assert [hit.tasker.id for hit in hits] == [first.id, last.id]
