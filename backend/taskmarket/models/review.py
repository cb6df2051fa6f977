# backend/taskmarket/models/review.py
"""
Review model.

Design notes:
- One review per booking (DB unique constraint)
- Rating is 1-5 with one decimal place; aggregates on taskers and tasks are rolled
  forward when the review is created, never recomputed from this table
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship

from ..database import Base


class Review(Base):
    """
    Per-booking review submitted by a customer.
    """

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, unique=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tasker_id = Column(Integer, ForeignKey("taskers.id", ondelete="CASCADE"), nullable=False, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True, index=True)

    rating = Column(Numeric(3, 1, asdecimal=False), nullable=False)
    comment = Column(Text, nullable=True)
    response = Column(Text, nullable=True)
    response_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User")

    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),)
