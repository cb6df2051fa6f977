# backend/taskmarket/repositories/service_repository.py
"""
Repository for the service catalog.

Provides the filtered catalog listing and FAQ lookups.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, joinedload

from ..models.service import Service, ServiceFaq
from .base_repository import BaseRepository, SluggedRepository

logger = logging.getLogger(__name__)

_SERVICE_SORTS = {
    "popular": Service.total_bookings,
    "rating": Service.average_rating,
    "price": Service.base_price,
    "newest": Service.created_at,
    "name": Service.name,
    "display_order": Service.display_order,
}


class ServiceRepository(SluggedRepository[Service]):
    """Repository for catalog services."""

    def __init__(self, db: Session):
        super().__init__(db, Service)
        self.faqs = BaseRepository(db, ServiceFaq)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Service.category))

    def list_services(
        self,
        *,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        is_featured: Optional[bool] = None,
        is_popular: Optional[bool] = None,
        include_inactive: bool = False,
        sort: str = "display_order",
        descending: bool = False,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Service], int]:
        """Return one page of services and the total match count."""
        query = self.db.query(Service)
        if not include_inactive:
            query = query.filter(Service.is_active.is_(True))
        if category_id is not None:
            query = query.filter(Service.category_id == category_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Service.name.ilike(pattern), Service.description.ilike(pattern)))
        if is_featured is not None:
            query = query.filter(Service.is_featured.is_(is_featured))
        if is_popular is not None:
            query = query.filter(Service.is_popular.is_(is_popular))

        total = query.count()
        if total == 0:
            return [], 0

        column = _SERVICE_SORTS.get(sort, Service.display_order)
        items = self._execute_query(
            self._apply_eager_loading(query)
            .order_by(column.desc() if descending else column.asc(), Service.id)
            .offset(offset)
            .limit(limit)
        )
        return items, total

    def list_flagged(self, flag: str, limit: int) -> List[Service]:
        """Active services with ``is_featured`` / ``is_popular`` set."""
        column = getattr(Service, flag)
        return self._execute_query(
            self._apply_eager_loading(self.db.query(Service))
            .filter(Service.is_active.is_(True), column.is_(True))
            .order_by(Service.display_order, Service.id)
            .limit(limit)
        )

    def faqs_for(self, service_ids: Sequence[int]) -> Dict[int, List[ServiceFaq]]:
        return self.faqs.find_by_parent_ids(
            ServiceFaq.service_id, service_ids, ServiceFaq.display_order, ServiceFaq.id
        )

    def delete_faqs(self, service_id: int) -> int:
        return (
            self.db.query(ServiceFaq)
            .filter(ServiceFaq.service_id == service_id)
            .delete(synchronize_session=False)
        )
