# backend/taskmarket/routes/v1/reviews.py
"""
Review routes - API v1

Endpoints:
    POST /                        → Review a completed booking
    GET /tasker/{tasker_id}       → Reviews for a tasker (paginated)
"""

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies.services import get_review_service
from ...core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ...schemas.base_responses import PaginatedResponse, total_pages_for
from ...schemas.review import ReviewCreate, ReviewResponse
from ...services.review_service import ReviewService
from .common import run_service

router = APIRouter(tags=["reviews-v1"])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    payload: ReviewCreate, service: ReviewService = Depends(get_review_service)
) -> ReviewResponse:
    review = await run_service(service.create_review, payload)
    return ReviewResponse.model_validate(review)


@router.get("/tasker/{tasker_id}", response_model=PaginatedResponse[ReviewResponse])
async def list_tasker_reviews(
    tasker_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    service: ReviewService = Depends(get_review_service),
) -> PaginatedResponse[ReviewResponse]:
    items, total = await run_service(service.list_for_tasker, tasker_id, page=page, limit=limit)
    return PaginatedResponse[ReviewResponse](
        items=[ReviewResponse.model_validate(item) for item in items],
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages_for(total, limit),
    )
