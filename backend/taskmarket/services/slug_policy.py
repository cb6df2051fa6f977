# backend/taskmarket/services/slug_policy.py
"""
Slug assignment for categories, services and tasks.

Create: the slug derived from the name (or the explicit slug) must be
free, otherwise the create fails with a conflict. Update: an explicit slug
that collides fails the same way, while a rename whose derived slug
collides falls back to ``"{slug}-{id}"``.
"""

from typing import Any, Optional

from ..core.exceptions import SlugConflictException, ValidationException
from ..repositories.base_repository import SluggedRepository
from ..utils.slug import disambiguate, slugify


def _derive(source: str) -> str:
    slug = slugify(source)
    if not slug:
        raise ValidationException(
            "Name must contain at least one letter or digit",
            code="INVALID_SLUG",
            details={"value": source},
        )
    return slug


def slug_for_create(
    repository: SluggedRepository, entity: str, name: str, explicit: Optional[str] = None
) -> str:
    slug = _derive(explicit or name)
    if repository.slug_taken(slug):
        raise SlugConflictException(entity, slug)
    return slug


def slug_for_update(
    repository: SluggedRepository,
    entity: str,
    row: Any,
    *,
    name: Optional[str] = None,
    explicit: Optional[str] = None,
) -> Optional[str]:
    """Return the slug ``row`` should carry after the update, or None to keep it."""
    if explicit is not None:
        slug = _derive(explicit)
        if slug == row.slug:
            return None
        if repository.slug_taken(slug, exclude_id=row.id):
            raise SlugConflictException(entity, slug)
        return slug

    if name is None or name == row.name:
        return None

    slug = _derive(name)
    if slug == row.slug:
        return None
    if repository.slug_taken(slug, exclude_id=row.id):
        return disambiguate(slug, row.id)
    return slug
