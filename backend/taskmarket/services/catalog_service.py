# backend/taskmarket/services/catalog_service.py
"""
Catalog Service Layer

Catalog services are what taskers offer skills for and what tasks are
listed under. A service owns an ordered FAQ list that is replaced as a
whole on update.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException
from ..models.service import Service, ServiceFaq
from ..repositories.factory import RepositoryFactory
from ..schemas.service import ServiceCreate, ServiceFaqIn, ServiceUpdate
from ..utils.ratings import apply_rating
from .base import BaseService
from .slug_policy import slug_for_create, slug_for_update

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 8
POPULAR_LIMIT = 8


class CatalogService(BaseService):
    """Service layer for the service catalog."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_service_repository(db)
        self.category_repository = RepositoryFactory.create_category_repository(db)

    @BaseService.measure_operation("list_services")
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
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Service], int]:
        """One page of services plus the total match count."""
        return self.repository.list_services(
            category_id=category_id,
            search=(search or "").strip() or None,
            is_featured=is_featured,
            is_popular=is_popular,
            include_inactive=include_inactive,
            sort=sort,
            descending=descending,
            offset=(page - 1) * limit,
            limit=limit,
        )

    @BaseService.measure_operation("get_service")
    def get_service(self, service_id: int) -> Service:
        return self.require(self.repository.get_by_id(service_id), "Service", service_id)

    @BaseService.measure_operation("get_service_by_slug")
    def get_by_slug(self, slug: str) -> Service:
        service = self.repository.get_by_slug(slug)
        if service is None:
            raise NotFoundException("Service not found", code="SERVICE_NOT_FOUND", details={"slug": slug})
        return service

    @BaseService.measure_operation("get_service_faqs")
    def get_faqs(self, service_id: int) -> List[ServiceFaq]:
        return self.repository.faqs_for([service_id]).get(service_id, [])

    @BaseService.measure_operation("featured_services")
    def featured_services(self, limit: int = FEATURED_LIMIT) -> List[Service]:
        return self.repository.list_flagged("is_featured", limit)

    @BaseService.measure_operation("popular_services")
    def popular_services(self, limit: int = POPULAR_LIMIT) -> List[Service]:
        return self.repository.list_flagged("is_popular", limit)

    @BaseService.measure_operation("create_service")
    def create_service(self, data: ServiceCreate) -> Service:
        """Create a service and its FAQs in one transaction."""
        if data.category_id is not None:
            self.require(
                self.category_repository.get_by_id(data.category_id), "Category", data.category_id
            )
        slug = slug_for_create(self.repository, "Service", data.name, data.slug)

        with self.transaction():
            service = self.repository.create(
                **data.model_dump(exclude={"slug", "faqs"}), slug=slug
            )
            self._insert_faqs(service.id, data.faqs)

        self.log_operation("create_service", service_id=service.id, slug=slug)
        return service

    @BaseService.measure_operation("update_service")
    def update_service(self, service_id: int, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id)
        changes = data.model_dump(exclude_unset=True, exclude={"slug", "faqs"})
        if changes.get("category_id") is not None:
            self.require(
                self.category_repository.get_by_id(changes["category_id"]),
                "Category",
                changes["category_id"],
            )

        slug = slug_for_update(
            self.repository, "Service", service, name=data.name, explicit=data.slug
        )
        if slug is not None:
            changes["slug"] = slug

        with self.transaction():
            service = self.repository.update(service_id, **changes)
            if data.faqs is not None:
                self.repository.delete_faqs(service_id)
                self._insert_faqs(service_id, data.faqs)

        return service

    @BaseService.measure_operation("delete_service")
    def delete_service(self, service_id: int) -> bool:
        self.get_service(service_id)
        with self.transaction():
            self.repository.delete_faqs(service_id)
            deleted = self.repository.delete(service_id)
        self.log_operation("delete_service", service_id=service_id)
        return deleted

    @BaseService.measure_operation("toggle_service_active")
    def toggle_active(self, service_id: int) -> Service:
        service = self.get_service(service_id)
        with self.transaction():
            service.is_active = not service.is_active
        return service

    @BaseService.measure_operation("update_service_rating")
    def update_rating(self, service_id: int, rating: float) -> Optional[Service]:
        service = self.repository.get_by_id(service_id, load_relationships=False)
        if service is None:
            return None
        with self.transaction():
            apply_rating(service, rating)
        return service

    def _insert_faqs(self, service_id: int, faqs: Sequence[ServiceFaqIn]) -> None:
        for faq in faqs:
            self.repository.faqs.create(service_id=service_id, **faq.model_dump())
