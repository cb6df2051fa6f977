# backend/taskmarket/models/booking.py
"""
Booking models for the TaskMarket platform.

A booking links a user, a tasker and a task over a time range. Status
values are plain strings from ``BookingStatus``; transitions between them
are not enforced at this layer.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from ..core.enums import BookingStatus, PaymentStatus
from ..database import Base


class Booking(Base):
    """
    Attributes:
        id: Primary key
        user_id: Customer
        tasker_id / task_id / tasker_skill_id: What was booked and from whom
        location_id: Where the work happens
        start_time / end_time: Scheduled window
        status: Booking lifecycle status
        total_price / cancellation_fee: Minor currency units
        payment_status: Mirrors the latest gateway status
    """

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tasker_id = Column(Integer, ForeignKey("taskers.id", ondelete="CASCADE"), nullable=False, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True, index=True)
    tasker_skill_id = Column(Integer, ForeignKey("tasker_skills.id", ondelete="SET NULL"), nullable=True)
    location_id = Column(Integer, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True)

    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    notes = Column(Text, nullable=True)
    total_price = Column(Integer, nullable=True)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.UNPAID.value)
    payment_method = Column(String(20), nullable=True)
    extra_metadata = Column("metadata", JSON, nullable=True)

    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    cancellation_fee = Column(Integer, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    is_rescheduled = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User")
    tasker = relationship("Tasker")
    task = relationship("Task")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_bookings_time_order"),
        Index("idx_bookings_tasker_start", "tasker_id", "start_time"),
    )

    def __repr__(self) -> str:
        return f"<Booking {self.id} {self.status}>"


class BookingMessage(Base):
    __tablename__ = "booking_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    attachments = Column(JSON, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
