# backend/taskmarket/routes/v1/taskers.py
"""
Tasker routes - API v1

Versioned tasker endpoints under /api/v1/taskers.
All business logic delegated to TaskerService.

Endpoints:
    GET /                                  → Search taskers (paginated)
    GET /top                               → Elite taskers, best rated first
    GET /by-service/{service_id}           → Taskers offering a service
    GET /by-user/{user_id}                 → Profile for a user
    POST /                                 → Create a profile
    GET /{tasker_id}                       → Profile
    PATCH /{tasker_id}                     → Update a profile
    POST /{tasker_id}/rating               → Fold a rating into the average
    GET|POST /{tasker_id}/skills           → List / add skills
    PATCH|DELETE /{tasker_id}/skills/{id}  → Update / remove a skill
    GET|POST /{tasker_id}/portfolio        → List / add portfolio items
    PATCH|DELETE /{tasker_id}/portfolio/{id} → Update / remove a portfolio item
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...api.dependencies.services import get_tasker_service
from ...core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ...schemas.base_responses import DeleteResponse, PaginatedResponse
from ...schemas.review import RatingUpdate
from ...schemas.search import TaskerSearchParams
from ...schemas.tasker import (
    PortfolioItemCreate,
    PortfolioItemResponse,
    PortfolioItemUpdate,
    SkillCreate,
    SkillUpdate,
    TaskerCreate,
    TaskerResponse,
    TaskerSearchResult,
    TaskerSkillResponse,
    TaskerUpdate,
)
from ...services.tasker_service import TaskerService
from .common import run_service

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["taskers-v1"])


@router.get("", response_model=PaginatedResponse[TaskerSearchResult])
async def search_taskers(
    query: Optional[str] = Query(None, description="Matches headline or bio"),
    service_id: Optional[int] = Query(None),
    service_slug: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None),
    category_slug: Optional[str] = Query(None),
    min_rate: Optional[int] = Query(None, ge=0, description="Minor currency units"),
    max_rate: Optional[int] = Query(None, ge=0, description="Minor currency units"),
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    location_id: Optional[int] = Query(None),
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius: Optional[float] = Query(None, ge=0, description="Kilometers"),
    is_elite: Optional[bool] = Query(None),
    is_background_checked: Optional[bool] = Query(None),
    is_identity_verified: Optional[bool] = Query(None),
    include_inactive: bool = Query(False),
    sort: Optional[str] = Query(None, description="rating, completions, rate, response_time, distance, created_at"),
    order: Optional[str] = Query(None, description="asc or desc"),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_LIMIT),
    service: TaskerService = Depends(get_tasker_service),
) -> PaginatedResponse[TaskerSearchResult]:
    params = TaskerSearchParams(
        query=query,
        service_id=service_id,
        service_slug=service_slug,
        category_id=category_id,
        category_slug=category_slug,
        min_rate=min_rate,
        max_rate=max_rate,
        min_rating=min_rating,
        location_id=location_id,
        latitude=latitude,
        longitude=longitude,
        radius=radius,
        is_elite=is_elite,
        is_background_checked=is_background_checked,
        is_identity_verified=is_identity_verified,
        include_inactive=include_inactive,
        sort=sort,
        order=order,
        page=page,
        limit=limit,
    )
    result = await run_service(service.search_taskers, params)
    return PaginatedResponse[TaskerSearchResult](
        items=[TaskerSearchResult.from_hit(hit) for hit in result.items],
        page=result.page,
        limit=result.limit,
        total=result.total,
        total_pages=result.total_pages,
    )


@router.get("/top", response_model=List[TaskerResponse])
async def get_top_taskers(
    limit: int = Query(6, ge=1, le=MAX_PAGE_LIMIT),
    service: TaskerService = Depends(get_tasker_service),
) -> List[TaskerResponse]:
    taskers = await run_service(service.get_top_taskers, limit)
    return [TaskerResponse.model_validate(tasker) for tasker in taskers]


@router.get("/by-service/{service_id}", response_model=List[TaskerSearchResult])
async def get_taskers_by_service(
    service_id: int,
    limit: int = Query(10, ge=1, le=MAX_PAGE_LIMIT),
    service: TaskerService = Depends(get_tasker_service),
) -> List[TaskerSearchResult]:
    hits = await run_service(service.get_taskers_by_service, service_id, limit)
    return [TaskerSearchResult.from_hit(hit) for hit in hits]


@router.get("/by-user/{user_id}", response_model=TaskerResponse)
async def get_tasker_by_user(
    user_id: int, service: TaskerService = Depends(get_tasker_service)
) -> TaskerResponse:
    tasker = await run_service(service.get_by_user_id, user_id)
    return TaskerResponse.model_validate(tasker)


@router.post("", response_model=TaskerResponse, status_code=status.HTTP_201_CREATED)
async def create_tasker(
    payload: TaskerCreate, service: TaskerService = Depends(get_tasker_service)
) -> TaskerResponse:
    tasker = await run_service(service.create_tasker, payload)
    return TaskerResponse.model_validate(tasker)


@router.get("/{tasker_id}", response_model=TaskerResponse)
async def get_tasker(
    tasker_id: int, service: TaskerService = Depends(get_tasker_service)
) -> TaskerResponse:
    tasker = await run_service(service.get_tasker, tasker_id)
    return TaskerResponse.model_validate(tasker)


@router.patch("/{tasker_id}", response_model=TaskerResponse)
async def update_tasker(
    tasker_id: int,
    payload: TaskerUpdate,
    service: TaskerService = Depends(get_tasker_service),
) -> TaskerResponse:
    tasker = await run_service(service.update_tasker, tasker_id, payload)
    return TaskerResponse.model_validate(tasker)


@router.post("/{tasker_id}/rating", response_model=TaskerResponse)
async def rate_tasker(
    tasker_id: int,
    payload: RatingUpdate,
    service: TaskerService = Depends(get_tasker_service),
) -> TaskerResponse:
    tasker = await run_service(service.update_rating, tasker_id, payload.rating)
    if tasker is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tasker not found")
    return TaskerResponse.model_validate(tasker)


# Skills


@router.get("/{tasker_id}/skills", response_model=List[TaskerSkillResponse])
async def list_skills(
    tasker_id: int, service: TaskerService = Depends(get_tasker_service)
) -> List[TaskerSkillResponse]:
    skills = await run_service(service.list_skills, tasker_id)
    return [TaskerSkillResponse.model_validate(skill) for skill in skills]


@router.post(
    "/{tasker_id}/skills", response_model=TaskerSkillResponse, status_code=status.HTTP_201_CREATED
)
async def add_skill(
    tasker_id: int,
    payload: SkillCreate,
    service: TaskerService = Depends(get_tasker_service),
) -> TaskerSkillResponse:
    skill = await run_service(service.add_skill, tasker_id, payload)
    return TaskerSkillResponse.model_validate(skill)


@router.patch("/{tasker_id}/skills/{skill_id}", response_model=TaskerSkillResponse)
async def update_skill(
    tasker_id: int,
    skill_id: int,
    payload: SkillUpdate,
    service: TaskerService = Depends(get_tasker_service),
) -> TaskerSkillResponse:
    skill = await run_service(service.update_skill, tasker_id, skill_id, payload)
    return TaskerSkillResponse.model_validate(skill)


@router.delete("/{tasker_id}/skills/{skill_id}", response_model=DeleteResponse)
async def remove_skill(
    tasker_id: int,
    skill_id: int,
    service: TaskerService = Depends(get_tasker_service),
) -> DeleteResponse:
    await run_service(service.remove_skill, tasker_id, skill_id)
    return DeleteResponse(message="Skill removed")


# Portfolio


@router.get("/{tasker_id}/portfolio", response_model=List[PortfolioItemResponse])
async def list_portfolio(
    tasker_id: int, service: TaskerService = Depends(get_tasker_service)
) -> List[PortfolioItemResponse]:
    items = await run_service(service.list_portfolio, tasker_id)
    return [PortfolioItemResponse.model_validate(item) for item in items]


@router.post(
    "/{tasker_id}/portfolio",
    response_model=PortfolioItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_portfolio_item(
    tasker_id: int,
    payload: PortfolioItemCreate,
    service: TaskerService = Depends(get_tasker_service),
) -> PortfolioItemResponse:
    item = await run_service(service.add_portfolio_item, tasker_id, payload)
    return PortfolioItemResponse.model_validate(item)


@router.patch("/{tasker_id}/portfolio/{item_id}", response_model=PortfolioItemResponse)
async def update_portfolio_item(
    tasker_id: int,
    item_id: int,
    payload: PortfolioItemUpdate,
    service: TaskerService = Depends(get_tasker_service),
) -> PortfolioItemResponse:
    item = await run_service(service.update_portfolio_item, tasker_id, item_id, payload)
    return PortfolioItemResponse.model_validate(item)


@router.delete("/{tasker_id}/portfolio/{item_id}", response_model=DeleteResponse)
async def remove_portfolio_item(
    tasker_id: int,
    item_id: int,
    service: TaskerService = Depends(get_tasker_service),
) -> DeleteResponse:
    await run_service(service.remove_portfolio_item, tasker_id, item_id)
    return DeleteResponse(message="Portfolio item removed")
