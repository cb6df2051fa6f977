# backend/taskmarket/models/task.py
"""
Task listing models.

A task is a listing a tasker offers for one catalog service. Questions and
FAQs are ordered child collections owned exclusively by the task and
replaced wholesale on update.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..core.enums import TaskStatus
from ..database import Base


class Task(Base):
    """
    Attributes:
        id: Primary key
        name / slug: Display name and unique URL identifier
        tasker_id / user_id / service_id / location_id: Ownership and placement
        status: pending, accepted, rejected or completed
        base_rate: Hourly rate in minor currency units
        average_rating / total_reviews: Rolling rating aggregate
        total_completed: Completion counter used by the "popular" sort
        is_active / is_featured / is_popular: Listing flags
    """

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    short_description = Column(Text, nullable=True)
    tasker_id = Column(Integer, ForeignKey("taskers.id", ondelete="SET NULL"), nullable=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True, index=True)
    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value)
    base_rate = Column(Integer, nullable=True)
    required_equipment = Column(JSON, nullable=True)
    required_skills = Column(JSON, nullable=True)
    extra_metadata = Column("metadata", JSON, nullable=True)
    preferred_datetime = Column(DateTime(timezone=True), nullable=True)
    average_rating = Column(Float, nullable=True)
    total_reviews = Column(Integer, nullable=False, default=0)
    total_completed = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_popular = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    service = relationship("Service")
    location = relationship("Location")
    tasker = relationship("Tasker")

    def __repr__(self) -> str:
        status = " (inactive)" if not self.is_active else ""
        return f"<Task {self.slug}{status}>"


class TaskQuestion(Base):
    __tablename__ = "task_questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default="text")
    options = Column(JSON, nullable=True)
    is_required = Column(Boolean, nullable=False, default=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))


class TaskFaq(Base):
    __tablename__ = "task_faqs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))
