# backend/taskmarket/repositories/booking_repository.py
"""
Booking Repository for the TaskMarket platform.

Implements the filtered booking listing and message queries used by
BookingService.
"""

from datetime import datetime, timezone
import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Query, Session, joinedload

from ..models.booking import Booking, BookingMessage
from ..models.tasker import Tasker
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

_BOOKING_SORTS = {
    "start_time": Booking.start_time,
    "created_at": Booking.created_at,
    "total_amount": Booking.total_price,
}


class BookingRepository(BaseRepository[Booking]):
    def __init__(self, db: Session):
        super().__init__(db, Booking)
        self.messages = BaseRepository(db, BookingMessage)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Booking.user), joinedload(Booking.tasker), joinedload(Booking.task))

    def _filtered(
        self,
        *,
        user_id: Optional[int] = None,
        tasker_id: Optional[int] = None,
        task_id: Optional[int] = None,
        statuses: Optional[Sequence[str]] = None,
        payment_statuses: Optional[Sequence[str]] = None,
        start_from: Optional[datetime] = None,
        start_to: Optional[datetime] = None,
    ) -> Query:
        query = self.db.query(Booking)
        if user_id is not None:
            query = query.filter(Booking.user_id == user_id)
        if tasker_id is not None:
            query = query.filter(Booking.tasker_id == tasker_id)
        if task_id is not None:
            query = query.filter(Booking.task_id == task_id)
        if statuses:
            query = query.filter(Booking.status.in_(list(statuses)))
        if payment_statuses:
            query = query.filter(Booking.payment_status.in_(list(payment_statuses)))
        if start_from is not None:
            query = query.filter(Booking.start_time >= start_from)
        if start_to is not None:
            query = query.filter(Booking.start_time <= start_to)
        return query

    def search(
        self,
        *,
        sort: str = "start_time",
        descending: bool = True,
        offset: int = 0,
        limit: int = 20,
        **filters,
    ) -> Tuple[List[Booking], int]:
        """One page of bookings plus the unpaginated count."""
        query = self._filtered(**filters)
        total = query.count()
        if total == 0:
            return [], 0
        column = _BOOKING_SORTS.get(sort, Booking.start_time)
        items = self._execute_query(
            self._apply_eager_loading(query)
            .order_by(column.desc() if descending else column.asc(), Booking.id)
            .offset(offset)
            .limit(limit)
        )
        return items, total

    def count_filtered(self, **filters) -> int:
        return self._filtered(**filters).count()

    # Messages

    def list_messages(self, booking_id: int) -> List[BookingMessage]:
        return self._execute_query(
            self.db.query(BookingMessage)
            .filter(BookingMessage.booking_id == booking_id)
            .order_by(BookingMessage.created_at, BookingMessage.id)
        )

    def mark_messages_read(self, booking_id: int, reader_id: int) -> int:
        """Mark messages the reader received on a booking as read."""
        return (
            self.db.query(BookingMessage)
            .filter(
                BookingMessage.booking_id == booking_id,
                BookingMessage.sender_id != reader_id,
                BookingMessage.is_read.is_(False),
            )
            .update(
                {BookingMessage.is_read: True, BookingMessage.read_at: datetime.now(timezone.utc)},
                synchronize_session="fetch",
            )
        )

    def unread_message_count(self, user_id: int) -> int:
        """Unread messages sent to ``user_id`` on bookings they take part in."""
        participant_tasker_ids = select(Tasker.id).where(Tasker.user_id == user_id)
        query = (
            self.db.query(func.count(BookingMessage.id))
            .join(Booking, BookingMessage.booking_id == Booking.id)
            .filter(
                BookingMessage.is_read.is_(False),
                BookingMessage.sender_id != user_id,
                or_(Booking.user_id == user_id, Booking.tasker_id.in_(participant_tasker_ids)),
            )
        )
        return int(self._execute_scalar(query) or 0)
