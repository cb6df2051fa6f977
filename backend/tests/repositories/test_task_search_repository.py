"""Repository tests for two-phase task search."""

from __future__ import annotations

import pytest

from taskmarket.middleware.perf_counters import reset_counters, snapshot
from taskmarket.models.task import TaskFaq, TaskQuestion
from taskmarket.repositories.task_search_repository import TaskSearchRepository
from taskmarket.schemas.search import TaskSearchParams


@pytest.fixture
def repo(db):
    return TaskSearchRepository(db)


def _search(repo, **params):
    keys = repo.select_page(TaskSearchParams(**params))
    return keys, repo.hydrate_children(keys)


def test_default_listing_hides_inactive_tasks(repo, seed):
    service = seed.service()
    shown = seed.task(service)
    seed.task(service, is_active=False)

    keys, hits = _search(repo)

    assert keys.ids == (shown.id,)
    assert [hit.task.id for hit in hits] == [shown.id]


def test_query_matches_name_and_descriptions_case_insensitively(repo, seed):
    service = seed.service()
    by_name = seed.task(service, name="Deep Kitchen Clean")
    by_short = seed.task(service, name="Weekend help", short_description="kitchen and pantry")
    seed.task(service, name="Garden tidy")

    keys, _ = _search(repo, query="KITCHEN", sort="name", order="asc")

    assert keys.ids == (by_name.id, by_short.id)


def test_category_slug_filters_through_service(repo, seed):
    home = seed.category("Home")
    cleaning = seed.service("Cleaning", category=home)
    moving = seed.service("Moving")
    inside = seed.task(cleaning)
    seed.task(moving)

    keys, _ = _search(repo, category_slug="home")

    assert keys.ids == (inside.id,)


def test_missing_category_slug_short_circuits(repo, seed):
    seed.task(seed.service())

    reset_counters()
    keys, hits = _search(repo, category_slug="nowhere")

    assert keys.total == 0
    assert hits == []
    assert snapshot().db_queries == 1


def test_featured_and_tasker_filters(repo, seed):
    service = seed.service()
    tasker = seed.tasker()
    featured = seed.task(service, is_featured=True, tasker_id=tasker.id)
    seed.task(service, is_featured=True)
    seed.task(service, tasker_id=tasker.id)

    keys, _ = _search(repo, is_featured=True, tasker_id=tasker.id)

    assert keys.ids == (featured.id,)


def test_popular_sort_orders_by_completions(repo, seed):
    service = seed.service()
    quiet = seed.task(service, total_completed=1)
    busy = seed.task(service, total_completed=12)

    keys, _ = _search(repo, sort="popular", order="desc")

    assert keys.ids == (busy.id, quiet.id)


def test_base_rate_bounds(repo, seed):
    service = seed.service()
    seed.task(service, base_rate=100000)
    inside = seed.task(service, base_rate=300000)
    seed.task(service, base_rate=None)

    keys, _ = _search(repo, min_rate=200000, max_rate=300000)

    assert keys.ids == (inside.id,)


def test_geo_filter_uses_task_location(repo, seed):
    service = seed.service()
    near = seed.task(service, location_id=seed.location(latitude=6.53, longitude=3.38).id)
    seed.task(service, location_id=seed.location(latitude=9.07, longitude=7.40).id)

    keys, hits = _search(repo, latitude=6.5244, longitude=3.3792, radius=10)

    assert keys.ids == (near.id,)
    assert hits[0].distance_km is not None


def test_hydration_orders_questions_and_faqs(repo, seed, db):
    task = seed.task(seed.service())
    second = TaskQuestion(task_id=task.id, question="Do you have pets?", display_order=1)
    first = TaskQuestion(task_id=task.id, question="How many rooms?", display_order=0)
    faq = TaskFaq(task_id=task.id, question="Supplies?", answer="Bring your own.")
    db.add_all([second, first, faq])
    db.commit()

    _, hits = _search(repo)

    assert [q.id for q in hits[0].questions] == [first.id, second.id]
    assert [f.id for f in hits[0].faqs] == [faq.id]
    assert hits[0].task.service is not None
