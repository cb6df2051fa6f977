"""Tests for slug, rating and distance helpers."""

import pytest

from taskmarket.core.constants import MAX_SLUG_LENGTH
from taskmarket.utils.geo import haversine_km
from taskmarket.utils.ratings import rolling_average
from taskmarket.utils.slug import disambiguate, slugify


@pytest.mark.parametrize(
    "name, slug",
    [
        ("Home Cleaning", "home-cleaning"),
        ("  Home   Cleaning  ", "home-cleaning"),
        ("Home Cleaning & Laundry", "home-cleaning-and-laundry"),
        ("Plumbing/Repairs", "plumbing-repairs"),
        ("TV Mounting (55\"+)", "tv-mounting-55"),
        ("!!!", ""),
    ],
)
def test_slugify(name, slug):
    assert slugify(name) == slug


def test_slugify_truncates_without_trailing_dash():
    slug = slugify("word " * 100)

    assert len(slug) <= MAX_SLUG_LENGTH
    assert not slug.endswith("-")


def test_disambiguate_appends_id_within_length():
    assert disambiguate("home-cleaning", 42) == "home-cleaning-42"
    assert len(disambiguate("x" * MAX_SLUG_LENGTH, 12345)) == MAX_SLUG_LENGTH


@pytest.mark.parametrize(
    "average, count, rating, expected",
    [
        (4.0, 3, 5, (4.25, 4)),
        (None, None, 4, (4.0, 1)),
        (None, 0, 2, (2.0, 1)),
        (3.0, 1, 4, (3.5, 2)),
    ],
)
def test_rolling_average(average, count, rating, expected):
    new_average, new_count = rolling_average(average, count, rating)

    assert new_average == pytest.approx(expected[0])
    assert new_count == expected[1]


def test_haversine_known_distance():
    # Lagos to Abuja is roughly 525 km on the sphere.
    assert haversine_km(6.5244, 3.3792, 9.0765, 7.3986) == pytest.approx(525, abs=10)


def test_haversine_is_symmetric_and_zero_at_origin():
    assert haversine_km(6.5, 3.4, 6.5, 3.4) == 0
    assert haversine_km(6.5, 3.4, 7.1, 3.9) == pytest.approx(haversine_km(7.1, 3.9, 6.5, 3.4))
