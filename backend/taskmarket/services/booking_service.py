# backend/taskmarket/services/booking_service.py
"""
Booking Service Layer

Handles booking creation and pricing, filtered listing, the lifecycle
actions (cancel, complete, reschedule) and booking messages.

Status values are stored as given. The lifecycle does not enforce a
transition table; only verifications do.
"""

from datetime import datetime, timezone
import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from ..core.enums import BookingStatus, PaymentStatus
from ..core.exceptions import BusinessRuleException, NotFoundException, ValidationException
from ..models.booking import Booking, BookingMessage
from ..models.task import Task
from ..models.tasker import TaskerSkill
from ..repositories.factory import RepositoryFactory
from ..schemas.booking import (
    BookingCancel,
    BookingCreate,
    BookingReschedule,
    BookingUpdate,
    MessageCreate,
)
from .base import BaseService

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600


def price_for_duration(hourly_rate: int, start_time: datetime, end_time: datetime) -> int:
    """Hourly rate times booked hours, rounded to whole minor units."""
    hours = (end_time - start_time).total_seconds() / SECONDS_PER_HOUR
    return int(round(hourly_rate * hours))


class BookingService(BaseService):
    """
    Service layer for booking operations.

    Centralizes business logic for:
    - Booking creation with price calculation
    - Filtered booking listing
    - Cancel / complete / reschedule
    - Booking messages and unread counts
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_booking_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.tasker_repository = RepositoryFactory.create_tasker_repository(db)
        self.task_repository = RepositoryFactory.create_task_repository(db)
        self.location_repository = RepositoryFactory.create_location_repository(db)

    @BaseService.measure_operation("create_booking")
    def create_booking(self, data: BookingCreate) -> Booking:
        """
        Create a pending, unpaid booking.

        When ``total_price`` is omitted it is the hourly rate of the booked
        skill (or of the tasker's active skill for the task's service, or
        the task's base rate) times the booked hours.

        Raises:
            NotFoundException: If the user, tasker, task, skill or location is missing
            ValidationException: If the end time is not after the start time
        """
        if data.end_time <= data.start_time:
            raise ValidationException(
                "Booking end time must be after start time",
                code="INVALID_TIME_RANGE",
                details={"start_time": data.start_time.isoformat(), "end_time": data.end_time.isoformat()},
            )

        self.require(self.user_repository.get_by_id(data.user_id), "User", data.user_id)
        self.require(
            self.tasker_repository.get_by_id(data.tasker_id, load_relationships=False),
            "Tasker",
            data.tasker_id,
        )
        task = self.require(
            self.task_repository.get_by_id(data.task_id, load_relationships=False), "Task", data.task_id
        )
        if data.location_id is not None:
            self.require(
                self.location_repository.get_active(data.location_id), "Location", data.location_id
            )

        skill = self._resolve_skill(data.tasker_id, data.tasker_skill_id, task)
        total_price = data.total_price
        if total_price is None:
            rate = skill.hourly_rate if skill is not None else task.base_rate
            if rate is not None:
                total_price = price_for_duration(rate, data.start_time, data.end_time)

        values = data.model_dump(exclude={"metadata", "total_price", "tasker_skill_id"})
        with self.transaction():
            booking = self.repository.create(
                **values,
                tasker_skill_id=skill.id if skill is not None else None,
                total_price=total_price,
                extra_metadata=data.metadata,
                status=BookingStatus.PENDING.value,
                payment_status=PaymentStatus.UNPAID.value,
            )

        self.log_operation(
            "create_booking", booking_id=booking.id, tasker_id=data.tasker_id, total_price=total_price
        )
        return booking

    def _resolve_skill(
        self, tasker_id: int, skill_id: Optional[int], task: Task
    ) -> Optional[TaskerSkill]:
        if skill_id is not None:
            skill = self._active_skill(tasker_id, skill_id)
            if skill is None:
                raise NotFoundException(
                    "Skill not found", code="SKILL_NOT_FOUND", details={"id": skill_id}
                )
            return skill
        skill = self.tasker_repository.find_skill_for_service(tasker_id, task.service_id)
        return skill if skill is not None and skill.is_active else None

    def _active_skill(self, tasker_id: int, skill_id: int) -> Optional[TaskerSkill]:
        skill = self.tasker_repository.get_skill(tasker_id, skill_id)
        return skill if skill is not None and skill.is_active else None

    @BaseService.measure_operation("get_booking")
    def get_booking(self, booking_id: int) -> Booking:
        return self.require(self.repository.get_by_id(booking_id), "Booking", booking_id)

    @BaseService.measure_operation("search_bookings")
    def search_bookings(
        self,
        *,
        user_id: Optional[int] = None,
        tasker_id: Optional[int] = None,
        task_id: Optional[int] = None,
        statuses: Optional[Sequence[str]] = None,
        payment_statuses: Optional[Sequence[str]] = None,
        start_from: Optional[datetime] = None,
        start_to: Optional[datetime] = None,
        sort: str = "start_time",
        descending: bool = True,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Booking], int]:
        """One page of bookings matching the filters, plus the total count."""
        return self.repository.search(
            user_id=user_id,
            tasker_id=tasker_id,
            task_id=task_id,
            statuses=statuses,
            payment_statuses=payment_statuses,
            start_from=start_from,
            start_to=start_to,
            sort=sort,
            descending=descending,
            offset=(page - 1) * limit,
            limit=limit,
        )

    @BaseService.measure_operation("update_booking")
    def update_booking(self, booking_id: int, data: BookingUpdate) -> Booking:
        self.get_booking(booking_id)
        changes = data.model_dump(exclude_unset=True)
        if "metadata" in changes:
            changes["extra_metadata"] = changes.pop("metadata")
        with self.transaction():
            booking = self.repository.update(booking_id, **changes)
        self.log_operation("update_booking", booking_id=booking_id, fields=sorted(changes))
        return booking

    @BaseService.measure_operation("cancel_booking")
    def cancel_booking(self, booking_id: int, data: Optional[BookingCancel] = None) -> Booking:
        booking = self.get_booking(booking_id)
        data = data or BookingCancel()
        with self.transaction():
            booking.status = BookingStatus.CANCELLED.value
            booking.cancelled_at = datetime.now(timezone.utc)
            booking.cancellation_reason = data.reason
            booking.cancellation_fee = data.cancellation_fee
        self.log_operation("cancel_booking", booking_id=booking_id)
        return booking

    @BaseService.measure_operation("complete_booking")
    def complete_booking(self, booking_id: int) -> Booking:
        """Mark completed and bump the tasker's (and task's) completion counters together."""
        booking = self.get_booking(booking_id)
        tasker = self.require(
            self.tasker_repository.get_by_id(booking.tasker_id, load_relationships=False),
            "Tasker",
            booking.tasker_id,
        )
        task = (
            self.task_repository.get_by_id(booking.task_id, load_relationships=False)
            if booking.task_id is not None
            else None
        )

        with self.transaction():
            booking.status = BookingStatus.COMPLETED.value
            booking.completed_at = datetime.now(timezone.utc)
            tasker.total_tasks_completed = (tasker.total_tasks_completed or 0) + 1
            if task is not None:
                task.total_completed = (task.total_completed or 0) + 1

        self.log_operation("complete_booking", booking_id=booking_id, tasker_id=tasker.id)
        return booking

    @BaseService.measure_operation("reschedule_booking")
    def reschedule_booking(self, booking_id: int, data: BookingReschedule) -> Booking:
        booking = self.get_booking(booking_id)
        if booking.status in (BookingStatus.CANCELLED.value, BookingStatus.COMPLETED.value):
            raise BusinessRuleException(
                f"Cannot reschedule a {booking.status} booking",
                code="BOOKING_CLOSED",
                details={"booking_id": booking_id, "status": booking.status},
            )
        with self.transaction():
            booking.start_time = data.start_time
            booking.end_time = data.end_time
            booking.status = BookingStatus.RESCHEDULED.value
            booking.is_rescheduled = True
        self.log_operation("reschedule_booking", booking_id=booking_id)
        return booking

    # Messages

    @BaseService.measure_operation("list_booking_messages")
    def list_messages(self, booking_id: int) -> List[BookingMessage]:
        self.get_booking(booking_id)
        return self.repository.list_messages(booking_id)

    @BaseService.measure_operation("add_booking_message")
    def add_message(self, booking_id: int, data: MessageCreate) -> BookingMessage:
        """Post a message on a booking. Only the customer or the tasker may post."""
        booking = self.get_booking(booking_id)
        participants = {booking.user_id, booking.tasker.user_id if booking.tasker else None}
        if data.sender_id not in participants:
            raise BusinessRuleException(
                "Only booking participants can post messages",
                code="NOT_A_PARTICIPANT",
                details={"booking_id": booking_id, "sender_id": data.sender_id},
            )
        with self.transaction():
            message = self.repository.messages.create(booking_id=booking_id, **data.model_dump())
        return message

    @BaseService.measure_operation("mark_booking_messages_read")
    def mark_messages_read(self, booking_id: int, reader_id: int) -> int:
        """Mark messages received by ``reader_id`` on the booking as read; returns how many."""
        self.get_booking(booking_id)
        with self.transaction():
            updated = self.repository.mark_messages_read(booking_id, reader_id)
        return updated

    @BaseService.measure_operation("unread_message_count")
    def unread_message_count(self, user_id: int) -> int:
        return self.repository.unread_message_count(user_id)
