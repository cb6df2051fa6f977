"""Tests for LocationService."""

import pytest

from taskmarket.core.exceptions import NotFoundException
from taskmarket.schemas.location import LocationCreate
from taskmarket.services.location_service import LocationService


@pytest.fixture
def service(db):
    return LocationService(db)


def test_new_default_location_clears_previous_default(service, seed):
    user = seed.user()
    home = service.create_location(LocationCreate(user_id=user.id, label="home", latitude=6.5, longitude=3.4))
    work = service.create_location(LocationCreate(user_id=user.id, label="work", latitude=6.4, longitude=3.4))

    locations = {loc.id: loc for loc in service.list_for_user(user.id)}

    assert locations[work.id].is_default is True
    assert locations[home.id].is_default is False


def test_soft_deleted_locations_disappear_from_listing(service, seed):
    user = seed.user()
    location = service.create_location(LocationCreate(user_id=user.id))

    assert service.delete_location(location.id) is True
    assert service.list_for_user(user.id) == []

    with pytest.raises(NotFoundException):
        service.delete_location(location.id)


def test_location_for_unknown_user(service):
    with pytest.raises(NotFoundException) as exc:
        service.create_location(LocationCreate(user_id=321))

    assert exc.value.code == "USER_NOT_FOUND"
