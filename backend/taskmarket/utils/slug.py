"""Slug helpers shared by categories, services and tasks."""

from __future__ import annotations

import re

from taskmarket.core.constants import MAX_SLUG_LENGTH


def _normalize_text(raw: str) -> str:
    value = (raw or "").strip().lower()
    value = value.replace("&", " and ").replace("/", " ")
    value = re.sub(r"[^a-z0-9]+", " ", value)
    return value.strip()


def slugify(name: str) -> str:
    """
    Derive a URL-safe slug from a display name.

    >>> slugify("Home Cleaning & Laundry")
    'home-cleaning-and-laundry'
    """
    return _normalize_text(name).replace(" ", "-")[:MAX_SLUG_LENGTH].strip("-")


def disambiguate(slug: str, entity_id: int) -> str:
    """Suffix a colliding slug with the owning row's id."""
    suffix = f"-{entity_id}"
    return f"{slug[: MAX_SLUG_LENGTH - len(suffix)]}{suffix}"
