# backend/taskmarket/repositories/category_repository.py
"""
Repository for service category data access.
"""

import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..models.category import ServiceCategory
from .base_repository import SluggedRepository

logger = logging.getLogger(__name__)

_CATEGORY_SORTS = {
    "display_order": ServiceCategory.display_order,
    "name": ServiceCategory.name,
    "created_at": ServiceCategory.created_at,
}


class CategoryRepository(SluggedRepository[ServiceCategory]):
    """Repository for ServiceCategory queries."""

    def __init__(self, db: Session) -> None:
        super().__init__(db, ServiceCategory)

    def list_categories(
        self,
        *,
        include_inactive: bool = False,
        parent_id: Optional[int] = None,
        sort: str = "display_order",
        descending: bool = False,
    ) -> List[ServiceCategory]:
        """
        List categories, active only unless ``include_inactive``.

        Unknown sort keys fall back to ``display_order``.
        """
        query = self.db.query(ServiceCategory)
        if not include_inactive:
            query = query.filter(ServiceCategory.is_active.is_(True))
        if parent_id is not None:
            query = query.filter(ServiceCategory.parent_id == parent_id)

        column = _CATEGORY_SORTS.get(sort, ServiceCategory.display_order)
        query = query.order_by(column.desc() if descending else column.asc(), ServiceCategory.id)
        return self._execute_query(query)

    def search(self, term: str, *, include_inactive: bool = False) -> List[ServiceCategory]:
        pattern = f"%{term}%"
        query = self.db.query(ServiceCategory).filter(
            or_(ServiceCategory.name.ilike(pattern), ServiceCategory.description.ilike(pattern))
        )
        if not include_inactive:
            query = query.filter(ServiceCategory.is_active.is_(True))
        return self._execute_query(query.order_by(ServiceCategory.display_order, ServiceCategory.id))
