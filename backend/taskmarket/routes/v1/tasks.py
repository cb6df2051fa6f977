# backend/taskmarket/routes/v1/tasks.py
"""
Task routes - API v1

Versioned task listing endpoints under /api/v1/tasks.

Endpoints:
    GET /                          → Search tasks (paginated)
    GET /slug/{slug}               → Task by slug
    GET /by-user/{user_id}         → Tasks posted by a user
    GET /by-service/{service_id}   → Active tasks for a service
    GET /by-tasker/{tasker_id}     → Tasks assigned to a tasker
    POST /                         → Create a task with questions and FAQs
    GET /{task_id}                 → Task with questions and FAQs
    PATCH /{task_id}               → Update a task
    DELETE /{task_id}              → Delete a task
    PATCH /{task_id}/status        → Change status
    POST /{task_id}/assign         → Assign a tasker
    POST /{task_id}/rating         → Fold a rating into the average
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...api.dependencies.services import get_task_service
from ...core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ...schemas.base_responses import DeleteResponse, PaginatedResponse
from ...schemas.review import RatingUpdate
from ...schemas.search import TaskSearchParams
from ...schemas.task import (
    TaskAssign,
    TaskCreate,
    TaskDetailResponse,
    TaskResponse,
    TaskStatusUpdate,
    TaskUpdate,
)
from ...services.task_service import TaskService
from .common import run_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks-v1"])


@router.get("", response_model=PaginatedResponse[TaskDetailResponse])
async def search_tasks(
    query: Optional[str] = Query(None, description="Matches name or description"),
    service_id: Optional[int] = Query(None),
    service_slug: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None),
    category_slug: Optional[str] = Query(None),
    tasker_id: Optional[int] = Query(None),
    min_rate: Optional[int] = Query(None, ge=0, description="Minor currency units"),
    max_rate: Optional[int] = Query(None, ge=0, description="Minor currency units"),
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    location_id: Optional[int] = Query(None),
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius: Optional[float] = Query(None, ge=0, description="Kilometers"),
    is_featured: Optional[bool] = Query(None),
    is_popular: Optional[bool] = Query(None),
    include_inactive: bool = Query(False),
    sort: Optional[str] = Query(None, description="created_at, name, rate, rating, popular, distance"),
    order: Optional[str] = Query(None, description="asc or desc"),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_LIMIT),
    service: TaskService = Depends(get_task_service),
) -> PaginatedResponse[TaskDetailResponse]:
    params = TaskSearchParams(
        query=query,
        service_id=service_id,
        service_slug=service_slug,
        category_id=category_id,
        category_slug=category_slug,
        tasker_id=tasker_id,
        min_rate=min_rate,
        max_rate=max_rate,
        min_rating=min_rating,
        location_id=location_id,
        latitude=latitude,
        longitude=longitude,
        radius=radius,
        is_featured=is_featured,
        is_popular=is_popular,
        include_inactive=include_inactive,
        sort=sort,
        order=order,
        page=page,
        limit=limit,
    )
    result = await run_service(service.search_tasks, params)
    return PaginatedResponse[TaskDetailResponse](
        items=[TaskDetailResponse.from_hit(hit) for hit in result.items],
        page=result.page,
        limit=result.limit,
        total=result.total,
        total_pages=result.total_pages,
    )


@router.get("/slug/{slug}", response_model=TaskDetailResponse)
async def get_task_by_slug(
    slug: str, service: TaskService = Depends(get_task_service)
) -> TaskDetailResponse:
    hit = await run_service(service.get_task_by_slug, slug)
    return TaskDetailResponse.from_hit(hit)


@router.get("/by-user/{user_id}", response_model=List[TaskResponse])
async def list_tasks_by_user(
    user_id: int,
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_LIMIT),
    service: TaskService = Depends(get_task_service),
) -> List[TaskResponse]:
    tasks = await run_service(service.list_by_user, user_id, limit)
    return [TaskResponse.model_validate(task) for task in tasks]


@router.get("/by-service/{service_id}", response_model=List[TaskResponse])
async def list_tasks_by_service(
    service_id: int,
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_LIMIT),
    service: TaskService = Depends(get_task_service),
) -> List[TaskResponse]:
    tasks = await run_service(service.list_by_service, service_id, limit)
    return [TaskResponse.model_validate(task) for task in tasks]


@router.get("/by-tasker/{tasker_id}", response_model=List[TaskResponse])
async def list_tasks_by_tasker(
    tasker_id: int,
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_LIMIT),
    service: TaskService = Depends(get_task_service),
) -> List[TaskResponse]:
    tasks = await run_service(service.list_by_tasker, tasker_id, limit)
    return [TaskResponse.model_validate(task) for task in tasks]


@router.post("", response_model=TaskDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate, service: TaskService = Depends(get_task_service)
) -> TaskDetailResponse:
    hit = await run_service(service.create_task, payload)
    return TaskDetailResponse.from_hit(hit)


@router.get("/{task_id}", response_model=TaskDetailResponse)
async def get_task(task_id: int, service: TaskService = Depends(get_task_service)) -> TaskDetailResponse:
    hit = await run_service(service.get_task, task_id)
    return TaskDetailResponse.from_hit(hit)


@router.patch("/{task_id}", response_model=TaskDetailResponse)
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    hit = await run_service(service.update_task, task_id, payload)
    return TaskDetailResponse.from_hit(hit)


@router.delete("/{task_id}", response_model=DeleteResponse)
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)) -> DeleteResponse:
    await run_service(service.delete_task, task_id)
    return DeleteResponse(message="Task deleted")


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: int,
    payload: TaskStatusUpdate,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task = await run_service(service.update_status, task_id, payload.status)
    return TaskResponse.model_validate(task)


@router.post("/{task_id}/assign", response_model=TaskResponse)
async def assign_tasker(
    task_id: int,
    payload: TaskAssign,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task = await run_service(service.assign_tasker, task_id, payload.tasker_id)
    return TaskResponse.model_validate(task)


@router.post("/{task_id}/rating", response_model=TaskResponse)
async def rate_task(
    task_id: int,
    payload: RatingUpdate,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task = await run_service(service.update_rating, task_id, payload.rating)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return TaskResponse.model_validate(task)
