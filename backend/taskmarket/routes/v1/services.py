# backend/taskmarket/routes/v1/services.py
"""
Service catalog routes - API v1

Endpoints:
    GET /                      → List services (paginated)
    GET /featured              → Featured services
    GET /popular               → Popular services
    GET /slug/{slug}           → Service with FAQs by slug
    POST /                     → Create a service with FAQs
    GET /{service_id}          → Service with FAQs
    PATCH /{service_id}        → Update a service (FAQs replaced when sent)
    DELETE /{service_id}       → Delete a service and its FAQs
    POST /{service_id}/toggle  → Flip is_active
    POST /{service_id}/rating  → Fold a rating into the average
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...api.dependencies.services import get_catalog_service
from ...core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ...schemas.base_responses import DeleteResponse, PaginatedResponse, total_pages_for
from ...schemas.review import RatingUpdate
from ...schemas.service import (
    ServiceCreate,
    ServiceDetailResponse,
    ServiceResponse,
    ServiceUpdate,
)
from ...services.catalog_service import CatalogService
from .common import run_service

router = APIRouter(tags=["services-v1"])


async def _detail(service: CatalogService, catalog_entry) -> ServiceDetailResponse:
    faqs = await run_service(service.get_faqs, catalog_entry.id)
    return ServiceDetailResponse.build(catalog_entry, faqs)


@router.get("", response_model=PaginatedResponse[ServiceResponse])
async def list_services(
    category_id: Optional[int] = Query(None),
    search: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    is_featured: Optional[bool] = Query(None),
    is_popular: Optional[bool] = Query(None),
    include_inactive: bool = Query(False),
    sort: str = Query("display_order", description="display_order, name, rating, price, popular or newest"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    service: CatalogService = Depends(get_catalog_service),
) -> PaginatedResponse[ServiceResponse]:
    items, total = await run_service(
        service.list_services,
        category_id=category_id,
        search=search,
        is_featured=is_featured,
        is_popular=is_popular,
        include_inactive=include_inactive,
        sort=sort,
        descending=order == "desc",
        page=page,
        limit=limit,
    )
    return PaginatedResponse[ServiceResponse](
        items=[ServiceResponse.model_validate(item) for item in items],
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages_for(total, limit),
    )


@router.get("/featured", response_model=List[ServiceResponse])
async def featured_services(
    limit: int = Query(8, ge=1, le=MAX_PAGE_LIMIT),
    service: CatalogService = Depends(get_catalog_service),
) -> List[ServiceResponse]:
    items = await run_service(service.featured_services, limit)
    return [ServiceResponse.model_validate(item) for item in items]


@router.get("/popular", response_model=List[ServiceResponse])
async def popular_services(
    limit: int = Query(8, ge=1, le=MAX_PAGE_LIMIT),
    service: CatalogService = Depends(get_catalog_service),
) -> List[ServiceResponse]:
    items = await run_service(service.popular_services, limit)
    return [ServiceResponse.model_validate(item) for item in items]


@router.get("/slug/{slug}", response_model=ServiceDetailResponse)
async def get_service_by_slug(
    slug: str, service: CatalogService = Depends(get_catalog_service)
) -> ServiceDetailResponse:
    entry = await run_service(service.get_by_slug, slug)
    return await _detail(service, entry)


@router.post("", response_model=ServiceDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    payload: ServiceCreate, service: CatalogService = Depends(get_catalog_service)
) -> ServiceDetailResponse:
    entry = await run_service(service.create_service, payload)
    return await _detail(service, entry)


@router.get("/{service_id}", response_model=ServiceDetailResponse)
async def get_service(
    service_id: int, service: CatalogService = Depends(get_catalog_service)
) -> ServiceDetailResponse:
    entry = await run_service(service.get_service, service_id)
    return await _detail(service, entry)


@router.patch("/{service_id}", response_model=ServiceDetailResponse)
async def update_service(
    service_id: int,
    payload: ServiceUpdate,
    service: CatalogService = Depends(get_catalog_service),
) -> ServiceDetailResponse:
    entry = await run_service(service.update_service, service_id, payload)
    return await _detail(service, entry)


@router.delete("/{service_id}", response_model=DeleteResponse)
async def delete_service(
    service_id: int, service: CatalogService = Depends(get_catalog_service)
) -> DeleteResponse:
    await run_service(service.delete_service, service_id)
    return DeleteResponse(message="Service deleted")


@router.post("/{service_id}/toggle", response_model=ServiceResponse)
async def toggle_service(
    service_id: int, service: CatalogService = Depends(get_catalog_service)
) -> ServiceResponse:
    entry = await run_service(service.toggle_active, service_id)
    return ServiceResponse.model_validate(entry)


@router.post("/{service_id}/rating", response_model=ServiceResponse)
async def rate_service(
    service_id: int,
    payload: RatingUpdate,
    service: CatalogService = Depends(get_catalog_service),
) -> ServiceResponse:
    entry = await run_service(service.update_rating, service_id, payload.rating)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return ServiceResponse.model_validate(entry)
