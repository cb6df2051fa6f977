"""
Booking and booking-message schemas.

``total_price`` and ``cancellation_fee`` are integers in minor currency
units. Status values are accepted as given; the booking lifecycle does not
enforce transitions.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from ..core.enums import BookingStatus, PaymentStatus
from .base import MinorUnits, ORMResponse, StrictModel


class BookingCreate(StrictModel):
    user_id: int
    tasker_id: int
    task_id: int
    tasker_skill_id: Optional[int] = None
    location_id: Optional[int] = None
    start_time: datetime
    end_time: datetime
    notes: Optional[str] = None
    total_price: Optional[MinorUnits] = Field(
        None, description="Computed from the skill hourly rate when omitted"
    )
    payment_method: Optional[str] = Field(None, max_length=20)
    metadata: Optional[Dict[str, Any]] = None


class BookingUpdate(StrictModel):
    status: Optional[BookingStatus] = None
    payment_status: Optional[PaymentStatus] = None
    payment_method: Optional[str] = Field(None, max_length=20)
    notes: Optional[str] = None
    location_id: Optional[int] = None
    total_price: Optional[MinorUnits] = None
    metadata: Optional[Dict[str, Any]] = None


class BookingCancel(StrictModel):
    reason: Optional[str] = None
    cancellation_fee: Optional[MinorUnits] = None


class BookingReschedule(StrictModel):
    start_time: datetime
    end_time: datetime

    @model_validator(mode="after")
    def _end_after_start(self) -> "BookingReschedule":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class MessageCreate(StrictModel):
    sender_id: int
    message: str = Field(..., min_length=1)
    attachments: Optional[List[str]] = None


class BookingResponse(ORMResponse):
    id: int
    user_id: int
    tasker_id: int
    task_id: Optional[int] = None
    tasker_skill_id: Optional[int] = None
    location_id: Optional[int] = None
    start_time: datetime
    end_time: datetime
    status: str
    notes: Optional[str] = None
    total_price: Optional[int] = None
    payment_status: str
    payment_method: Optional[str] = None
    extra_metadata: Optional[Dict[str, Any]] = Field(None, serialization_alias="metadata")
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    cancellation_fee: Optional[int] = None
    completed_at: Optional[datetime] = None
    is_rescheduled: bool
    created_at: datetime


class BookingMessageResponse(ORMResponse):
    id: int
    booking_id: int
    sender_id: int
    message: str
    attachments: Optional[List[str]] = None
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime


class MessagesReadResponse(BaseModel):
    booking_id: int
    marked_read: int


class UnreadCountResponse(BaseModel):
    user_id: int
    unread: int
