# backend/taskmarket/routes/v1/categories.py
"""
Category routes - API v1

Endpoints:
    GET /                       → List categories
    GET /search                 → Search categories by name
    GET /slug/{slug}            → Category by slug
    POST /                      → Create a category
    GET /{category_id}          → Category
    PATCH /{category_id}        → Update a category
    DELETE /{category_id}       → Delete a category
    POST /{category_id}/toggle  → Flip is_active
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies.services import get_category_service
from ...schemas.base_responses import DeleteResponse
from ...schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from ...services.category_service import CategoryService
from .common import run_service

router = APIRouter(tags=["categories-v1"])


@router.get("", response_model=List[CategoryResponse])
async def list_categories(
    include_inactive: bool = Query(False),
    parent_id: Optional[int] = Query(None),
    sort: str = Query("display_order", description="display_order, name or created_at"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    service: CategoryService = Depends(get_category_service),
) -> List[CategoryResponse]:
    categories = await run_service(
        service.list_categories,
        include_inactive=include_inactive,
        parent_id=parent_id,
        sort=sort,
        descending=order == "desc",
    )
    return [CategoryResponse.model_validate(category) for category in categories]


@router.get("/search", response_model=List[CategoryResponse])
async def search_categories(
    q: str = Query("", description="Case-insensitive substring of the name"),
    include_inactive: bool = Query(False),
    service: CategoryService = Depends(get_category_service),
) -> List[CategoryResponse]:
    categories = await run_service(service.search_categories, q, include_inactive=include_inactive)
    return [CategoryResponse.model_validate(category) for category in categories]


@router.get("/slug/{slug}", response_model=CategoryResponse)
async def get_category_by_slug(
    slug: str, service: CategoryService = Depends(get_category_service)
) -> CategoryResponse:
    category = await run_service(service.get_by_slug, slug)
    return CategoryResponse.model_validate(category)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate, service: CategoryService = Depends(get_category_service)
) -> CategoryResponse:
    category = await run_service(service.create_category, payload)
    return CategoryResponse.model_validate(category)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int, service: CategoryService = Depends(get_category_service)
) -> CategoryResponse:
    category = await run_service(service.get_category, category_id)
    return CategoryResponse.model_validate(category)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    payload: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    category = await run_service(service.update_category, category_id, payload)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", response_model=DeleteResponse)
async def delete_category(
    category_id: int, service: CategoryService = Depends(get_category_service)
) -> DeleteResponse:
    await run_service(service.delete_category, category_id)
    return DeleteResponse(message="Category deleted")


@router.post("/{category_id}/toggle", response_model=CategoryResponse)
async def toggle_category(
    category_id: int, service: CategoryService = Depends(get_category_service)
) -> CategoryResponse:
    category = await run_service(service.toggle_active, category_id)
    return CategoryResponse.model_validate(category)
