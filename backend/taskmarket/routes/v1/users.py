# backend/taskmarket/routes/v1/users.py
"""
User account routes - API v1

Endpoints:
    GET /                   → Page through users
    GET /email/{email}      → Look a user up by email
    GET /{user_id}          → One user
    POST /                  → Create a user
    PATCH /{user_id}        → Update profile fields
    DELETE /{user_id}       → Delete a user and everything that references it
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies.services import get_user_service
from ...core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ...schemas.base_responses import DeleteResponse, PaginatedResponse, total_pages_for
from ...schemas.user import UserCreate, UserResponse, UserUpdate
from ...services.user_service import UserService
from .common import run_service

router = APIRouter(tags=["users-v1"])


@router.get("", response_model=PaginatedResponse[UserResponse])
async def list_users(
    role: Optional[str] = Query(None, description="user, tasker or admin"),
    include_inactive: bool = Query(False),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    service: UserService = Depends(get_user_service),
) -> PaginatedResponse[UserResponse]:
    items, total = await run_service(
        service.list_users, role=role, include_inactive=include_inactive, page=page, limit=limit
    )
    return PaginatedResponse[UserResponse](
        items=[UserResponse.model_validate(item) for item in items],
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages_for(total, limit),
    )


@router.get("/email/{email}", response_model=UserResponse)
async def get_user_by_email(email: str, service: UserService = Depends(get_user_service)) -> UserResponse:
    user = await run_service(service.get_by_email, email)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)) -> UserResponse:
    user = await run_service(service.get_user, user_id)
    return UserResponse.model_validate(user)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, service: UserService = Depends(get_user_service)) -> UserResponse:
    user = await run_service(service.create_user, payload)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int, payload: UserUpdate, service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await run_service(service.update_user, user_id, payload)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=DeleteResponse)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)) -> DeleteResponse:
    await run_service(service.delete_user, user_id)
    return DeleteResponse(message="User deleted")
