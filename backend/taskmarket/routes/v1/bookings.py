# backend/taskmarket/routes/v1/bookings.py
"""
Booking routes - API v1

Endpoints:
    GET /                               → Search bookings (paginated)
    GET /unread/{user_id}               → Unread message count for a user
    POST /                              → Create a booking
    GET /{booking_id}                   → Booking
    PATCH /{booking_id}                 → Update a booking
    POST /{booking_id}/cancel           → Cancel
    POST /{booking_id}/complete         → Complete (bumps completion counters)
    POST /{booking_id}/reschedule       → Move to a new time window
    GET /{booking_id}/messages          → Message thread
    POST /{booking_id}/messages         → Post a message
    POST /{booking_id}/messages/read    → Mark messages read for a reader
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ...api.dependencies.services import get_booking_service
from ...core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ...schemas.base_responses import PaginatedResponse, total_pages_for
from ...schemas.booking import (
    BookingCancel,
    BookingCreate,
    BookingMessageResponse,
    BookingReschedule,
    BookingResponse,
    BookingUpdate,
    MessageCreate,
    MessagesReadResponse,
    UnreadCountResponse,
)
from ...services.booking_service import BookingService
from .common import run_service

router = APIRouter(tags=["bookings-v1"])


@router.get("", response_model=PaginatedResponse[BookingResponse])
async def search_bookings(
    user_id: Optional[int] = Query(None),
    tasker_id: Optional[int] = Query(None),
    task_id: Optional[int] = Query(None),
    status_filter: Optional[List[str]] = Query(None, alias="status"),
    payment_status: Optional[List[str]] = Query(None),
    start_from: Optional[datetime] = Query(None),
    start_to: Optional[datetime] = Query(None),
    sort: str = Query("start_time", description="start_time, created_at or total_amount"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    service: BookingService = Depends(get_booking_service),
) -> PaginatedResponse[BookingResponse]:
    items, total = await run_service(
        service.search_bookings,
        user_id=user_id,
        tasker_id=tasker_id,
        task_id=task_id,
        statuses=status_filter,
        payment_statuses=payment_status,
        start_from=start_from,
        start_to=start_to,
        sort=sort,
        descending=order == "desc",
        page=page,
        limit=limit,
    )
    return PaginatedResponse[BookingResponse](
        items=[BookingResponse.model_validate(item) for item in items],
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages_for(total, limit),
    )


@router.get("/unread/{user_id}", response_model=UnreadCountResponse)
async def unread_message_count(
    user_id: int, service: BookingService = Depends(get_booking_service)
) -> UnreadCountResponse:
    unread = await run_service(service.unread_message_count, user_id)
    return UnreadCountResponse(user_id=user_id, unread=unread)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate, service: BookingService = Depends(get_booking_service)
) -> BookingResponse:
    booking = await run_service(service.create_booking, payload)
    return BookingResponse.model_validate(booking)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int, service: BookingService = Depends(get_booking_service)
) -> BookingResponse:
    booking = await run_service(service.get_booking, booking_id)
    return BookingResponse.model_validate(booking)


@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: int,
    payload: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    booking = await run_service(service.update_booking, booking_id, payload)
    return BookingResponse.model_validate(booking)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: int,
    payload: Optional[BookingCancel] = Body(None),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    booking = await run_service(service.cancel_booking, booking_id, payload)
    return BookingResponse.model_validate(booking)


@router.post("/{booking_id}/complete", response_model=BookingResponse)
async def complete_booking(
    booking_id: int, service: BookingService = Depends(get_booking_service)
) -> BookingResponse:
    booking = await run_service(service.complete_booking, booking_id)
    return BookingResponse.model_validate(booking)


@router.post("/{booking_id}/reschedule", response_model=BookingResponse)
async def reschedule_booking(
    booking_id: int,
    payload: BookingReschedule,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    booking = await run_service(service.reschedule_booking, booking_id, payload)
    return BookingResponse.model_validate(booking)


# Messages


@router.get("/{booking_id}/messages", response_model=List[BookingMessageResponse])
async def list_messages(
    booking_id: int, service: BookingService = Depends(get_booking_service)
) -> List[BookingMessageResponse]:
    messages = await run_service(service.list_messages, booking_id)
    return [BookingMessageResponse.model_validate(message) for message in messages]


@router.post(
    "/{booking_id}/messages",
    response_model=BookingMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_message(
    booking_id: int,
    payload: MessageCreate,
    service: BookingService = Depends(get_booking_service),
) -> BookingMessageResponse:
    message = await run_service(service.add_message, booking_id, payload)
    return BookingMessageResponse.model_validate(message)


@router.post("/{booking_id}/messages/read", response_model=MessagesReadResponse)
async def mark_messages_read(
    booking_id: int,
    reader_id: int = Query(..., description="User reading the thread"),
    service: BookingService = Depends(get_booking_service),
) -> MessagesReadResponse:
    updated = await run_service(service.mark_messages_read, booking_id, reader_id)
    return MessagesReadResponse(booking_id=booking_id, marked_read=updated)
