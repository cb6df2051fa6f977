"""Tests for TaskerService profile, skill, portfolio and rating logic."""

import pytest

from taskmarket.core.exceptions import ConflictException, NotFoundException
from taskmarket.models.tasker import TaskerSkill
from taskmarket.schemas.search import TaskerSearchParams
from taskmarket.schemas.tasker import PortfolioItemCreate, SkillCreate, TaskerCreate, TaskerUpdate
from taskmarket.services.tasker_service import TaskerService


@pytest.fixture
def service(db):
    return TaskerService(db)


def test_create_tasker_for_existing_user(service, seed):
    user = seed.user(role="tasker")

    tasker = service.create_tasker(TaskerCreate(user_id=user.id, headline="Handyman"))

    assert tasker.id is not None
    assert tasker.user_id == user.id
    assert tasker.total_reviews == 0
    assert tasker.is_active is True


def test_create_tasker_twice_for_same_user_conflicts(service, seed):
    user = seed.user()
    service.create_tasker(TaskerCreate(user_id=user.id))

    with pytest.raises(ConflictException) as exc:
        service.create_tasker(TaskerCreate(user_id=user.id))

    assert exc.value.code == "TASKER_EXISTS"


def test_create_tasker_for_unknown_user(service):
    with pytest.raises(NotFoundException) as exc:
        service.create_tasker(TaskerCreate(user_id=999))

    assert exc.value.code == "USER_NOT_FOUND"


def test_update_tasker_only_writes_sent_fields(service, seed):
    tasker = seed.tasker(bio="Ten years of plumbing")

    updated = service.update_tasker(tasker.id, TaskerUpdate(is_elite=True))

    assert updated.is_elite is True
    assert updated.bio == "Ten years of plumbing"


def test_add_skill_then_duplicate_conflicts(service, seed):
    tasker = seed.tasker()
    cleaning = seed.service("Cleaning")

    skill = service.add_skill(tasker.id, SkillCreate(service_id=cleaning.id, hourly_rate=400000))
    assert skill.is_active is True

    with pytest.raises(ConflictException) as exc:
        service.add_skill(tasker.id, SkillCreate(service_id=cleaning.id, hourly_rate=450000))
    assert exc.value.code == "SKILL_EXISTS"


def test_removed_skill_is_reactivated_with_same_id(service, seed, db):
    tasker = seed.tasker()
    cleaning = seed.service("Cleaning")
    original = service.add_skill(tasker.id, SkillCreate(service_id=cleaning.id, hourly_rate=400000))

    service.remove_skill(tasker.id, original.id)
    assert service.list_skills(tasker.id) == []

    revived = service.add_skill(tasker.id, SkillCreate(service_id=cleaning.id, hourly_rate=550000))

    assert revived.id == original.id
    assert revived.is_active is True
    assert revived.hourly_rate == 550000
    assert db.query(TaskerSkill).filter(TaskerSkill.tasker_id == tasker.id).count() == 1


def test_remove_inactive_skill_is_not_found(service, seed):
    tasker = seed.tasker()
    skill = seed.skill(tasker, seed.service(), is_active=False)

    with pytest.raises(NotFoundException) as exc:
        service.remove_skill(tasker.id, skill.id)

    assert exc.value.code == "SKILL_NOT_FOUND"


def test_portfolio_items_append_after_current_last(service, seed):
    tasker = seed.tasker()
    seed.portfolio_item(tasker, display_order=4)

    item = service.add_portfolio_item(
        tasker.id, PortfolioItemCreate(title="Kitchen", image_url="https://img.example.com/k.jpg")
    )

    assert item.display_order == 5
    assert [p.display_order for p in service.list_portfolio(tasker.id)] == [4, 5]


@pytest.mark.parametrize(
    "average, count, rating, expected",
    [
        (4.0, 3, 5, 4.25),
        (None, 0, 4, 4.0),
        (3.0, 1, 4, 3.5),
        (None, 0, 3.5, 3.5),
        (4.0, 1, 4.5, 4.25),
    ],
)
def test_update_rating_folds_into_running_average(service, seed, average, count, rating, expected):
    tasker = seed.tasker(average_rating=average, total_reviews=count)

    updated = service.update_rating(tasker.id, rating)

    assert updated.average_rating == pytest.approx(expected)
    assert updated.total_reviews == count + 1


def test_update_rating_for_missing_tasker_returns_none(service):
    assert service.update_rating(12345, 5) is None


def test_top_taskers_are_active_elites_best_first(service, seed):
    good = seed.tasker(is_elite=True, average_rating=4.2)
    best = seed.tasker(is_elite=True, average_rating=4.9)
    seed.tasker(is_elite=True, average_rating=5.0, is_active=False)
    seed.tasker(average_rating=5.0)

    top = service.get_top_taskers()

    assert [t.id for t in top] == [best.id, good.id]


def test_search_taskers_wraps_page(service, seed):
    for _ in range(3):
        seed.tasker()

    result = service.search_taskers(TaskerSearchParams(limit=2))

    assert result.total == 3
    assert result.total_pages == 2
    assert len(result.items) == 2


def test_taskers_by_service(service, seed):
    plumbing = seed.service("Plumbing")
    plumber = seed.tasker()
    seed.skill(plumber, plumbing)
    seed.tasker()

    hits = service.get_taskers_by_service(plumbing.id)

    assert [hit.tasker.id for hit in hits] == [plumber.id]
