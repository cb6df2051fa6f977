"""Tests for UserService account management."""

import pytest
from sqlalchemy import select

from taskmarket.core.exceptions import ConflictException, NotFoundException
from taskmarket.models.location import Location
from taskmarket.schemas.user import UserCreate, UserUpdate
from taskmarket.services.user_service import UserService


@pytest.fixture
def service(db):
    return UserService(db)


def _create(service, email="Chidi@Example.com", **overrides):
    values = {"email": email, "first_name": "Chidi", "last_name": "Okafor"}
    values.update(overrides)
    return service.create_user(UserCreate(**values))


def test_create_stores_lowercased_email_and_default_role(service):
    user = _create(service)

    assert user.id is not None
    assert user.email == "chidi@example.com"
    assert user.role == "user"
    assert user.is_active is True


def test_duplicate_email_conflicts_case_insensitively(service):
    _create(service)

    with pytest.raises(ConflictException) as exc:
        _create(service, email="CHIDI@example.com")

    assert exc.value.code == "EMAIL_EXISTS"


def test_lookup_by_id_and_email(service):
    user = _create(service)

    assert service.get_user(user.id).id == user.id
    assert service.get_by_email(" Chidi@example.com ").id == user.id


def test_missing_user_is_not_found(service):
    with pytest.raises(NotFoundException) as exc:
        service.get_by_email("nobody@example.com")

    assert exc.value.code == "USER_NOT_FOUND"


def test_update_changes_only_given_fields(service):
    user = _create(service, phone="08030000000")

    updated = service.update_user(user.id, UserUpdate(first_name="Chioma"))

    assert updated.first_name == "Chioma"
    assert updated.phone == "08030000000"


def test_update_to_another_users_email_conflicts(service):
    _create(service, email="taken@example.com")
    user = _create(service, email="mine@example.com")

    with pytest.raises(ConflictException):
        service.update_user(user.id, UserUpdate(email="taken@example.com"))

    assert service.update_user(user.id, UserUpdate(email="mine@example.com")).email == "mine@example.com"


def test_list_filters_role_and_hides_inactive(service, seed):
    seed.user(role="tasker")
    seed.user(role="tasker", is_active=False)
    seed.user()

    taskers, total = service.list_users(role="tasker")
    everyone, everyone_total = service.list_users(include_inactive=True, limit=2)

    assert total == 1
    assert [u.role for u in taskers] == ["tasker"]
    assert everyone_total == 3
    assert len(everyone) == 2


def test_delete_cascades_to_dependents(service, seed, db):
    user = seed.user()
    seed.location(user)

    assert service.delete_user(user.id) is True

    with pytest.raises(NotFoundException):
        service.get_user(user.id)
    assert db.execute(select(Location).where(Location.user_id == user.id)).first() is None


def test_delete_missing_user_is_not_found(service):
    with pytest.raises(NotFoundException):
        service.delete_user(999)
