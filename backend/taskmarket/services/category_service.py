# backend/taskmarket/services/category_service.py
"""
Category Service Layer

Service categories group catalog services. Slugs follow the shared slug
policy; listing is active-only unless asked otherwise.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException, ValidationException
from ..models.category import ServiceCategory
from ..repositories.factory import RepositoryFactory
from ..schemas.category import CategoryCreate, CategoryUpdate
from .base import BaseService
from .slug_policy import slug_for_create, slug_for_update

logger = logging.getLogger(__name__)


class CategoryService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_category_repository(db)

    @BaseService.measure_operation("list_categories")
    def list_categories(
        self,
        *,
        include_inactive: bool = False,
        parent_id: Optional[int] = None,
        sort: str = "display_order",
        descending: bool = False,
    ) -> List[ServiceCategory]:
        return self.repository.list_categories(
            include_inactive=include_inactive, parent_id=parent_id, sort=sort, descending=descending
        )

    @BaseService.measure_operation("get_category")
    def get_category(self, category_id: int) -> ServiceCategory:
        return self.require(self.repository.get_by_id(category_id), "Category", category_id)

    @BaseService.measure_operation("get_category_by_slug")
    def get_by_slug(self, slug: str) -> ServiceCategory:
        category = self.repository.get_by_slug(slug)
        if category is None:
            raise NotFoundException(
                "Category not found", code="CATEGORY_NOT_FOUND", details={"slug": slug}
            )
        return category

    @BaseService.measure_operation("search_categories")
    def search_categories(self, term: str, *, include_inactive: bool = False) -> List[ServiceCategory]:
        term = (term or "").strip()
        if not term:
            return []
        return self.repository.search(term, include_inactive=include_inactive)

    @BaseService.measure_operation("create_category")
    def create_category(self, data: CategoryCreate) -> ServiceCategory:
        if data.parent_id is not None:
            self.get_category(data.parent_id)
        slug = slug_for_create(self.repository, "Category", data.name, data.slug)
        with self.transaction():
            category = self.repository.create(**data.model_dump(exclude={"slug"}), slug=slug)
        self.log_operation("create_category", category_id=category.id, slug=slug)
        return category

    @BaseService.measure_operation("update_category")
    def update_category(self, category_id: int, data: CategoryUpdate) -> ServiceCategory:
        category = self.get_category(category_id)
        changes = data.model_dump(exclude_unset=True, exclude={"slug"})

        parent_id = changes.get("parent_id")
        if parent_id is not None:
            if parent_id == category_id:
                raise ValidationException(
                    "A category cannot be its own parent", code="INVALID_PARENT"
                )
            self.get_category(parent_id)

        slug = slug_for_update(
            self.repository, "Category", category, name=data.name, explicit=data.slug
        )
        if slug is not None:
            changes["slug"] = slug

        with self.transaction():
            category = self.repository.update(category_id, **changes)
        return category

    @BaseService.measure_operation("delete_category")
    def delete_category(self, category_id: int) -> bool:
        """Hard delete. Services in the category keep existing with no category."""
        self.get_category(category_id)
        with self.transaction():
            deleted = self.repository.delete(category_id)
        self.log_operation("delete_category", category_id=category_id)
        return deleted

    @BaseService.measure_operation("toggle_category_active")
    def toggle_active(self, category_id: int) -> ServiceCategory:
        category = self.get_category(category_id)
        with self.transaction():
            category.is_active = not category.is_active
        return category
