# backend/taskmarket/models/tasker.py
"""
Tasker profile models for the TaskMarket platform.

A tasker extends a User (one-to-one) with marketplace attributes. The
profile is never hard-deleted; ``is_active`` hides it from search.

Classes:
    Tasker: Profile with rating, completion and verification data
    TaskerSkill: (tasker, service) pairing with an hourly rate
    TaskerPortfolioItem: Ordered portfolio entries
"""

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from ..database import Base


class Tasker(Base):
    """
    Model representing a tasker's profile.

    Attributes:
        id: Primary key
        user_id: Owning user (unique, one profile per user)
        headline / bio: Free text matched by search
        location_id: Optional base location used for distance search
        average_rating: Rolling average, NULL until the first review
        total_reviews: Number of reviews folded into the average
        total_tasks_completed: Completion counter
        response_time: Average response time in minutes
        background_checked / identity_verified: Verification flags
        is_elite: Elite status, drives the "top taskers" listing
        is_active: Soft-delete flag

    Business Rules:
        - Each user can have at most one tasker profile
        - Skills are soft-deleted and reactivated, never duplicated
    """

    __tablename__ = "taskers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    headline = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    profile_photo = Column(String(512), nullable=True)
    cover_photo = Column(String(512), nullable=True)
    gallery = Column(JSON, nullable=True)
    location_id = Column(Integer, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True, index=True)
    work_radius = Column(Integer, nullable=True)
    availability = Column(JSON, nullable=True)
    languages = Column(JSON, nullable=True)
    education = Column(JSON, nullable=True)
    work_experience = Column(JSON, nullable=True)

    # Aggregates
    average_rating = Column(Float, nullable=True)
    total_reviews = Column(Integer, nullable=False, default=0)
    total_tasks_completed = Column(Integer, nullable=False, default=0)
    response_rate = Column(Float, nullable=True)
    response_time = Column(Integer, nullable=True)
    completion_rate = Column(Float, nullable=True)

    # Verification flags
    background_checked = Column(Boolean, nullable=False, default=False)
    identity_verified = Column(Boolean, nullable=False, default=False)
    phone_verified = Column(Boolean, nullable=False, default=False)
    email_verified = Column(Boolean, nullable=False, default=False)
    bvn_verified = Column(Boolean, nullable=False, default=False)
    nin_verified = Column(Boolean, nullable=False, default=False)

    is_elite = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    last_seen = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="tasker")
    location = relationship("Location")

    __table_args__ = (
        Index("idx_taskers_active_rating", "is_active", "average_rating"),
    )

    def __repr__(self) -> str:
        status = " (inactive)" if not self.is_active else ""
        return f"<Tasker {self.id} user={self.user_id}{status}>"


class TaskerSkill(Base):
    """
    A tasker's offering of one catalog service.

    ``hourly_rate`` is in minor currency units. At most one active row per
    (tasker, service); re-adding a removed skill reactivates the same row.
    """

    __tablename__ = "tasker_skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tasker_id = Column(Integer, ForeignKey("taskers.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
    hourly_rate = Column(Integer, nullable=False)
    quick_pitch = Column(Text, nullable=True)
    experience = Column(Text, nullable=True)
    experience_years = Column(Integer, nullable=True)
    has_equipment = Column(Boolean, nullable=False, default=False)
    equipment_description = Column(Text, nullable=True)
    is_quick_assign = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    service = relationship("Service")

    __table_args__ = (
        Index("idx_tasker_skills_tasker_service", "tasker_id", "service_id"),
    )

    def __repr__(self) -> str:
        status = " (inactive)" if not self.is_active else ""
        return f"<TaskerSkill tasker={self.tasker_id} service={self.service_id} {self.hourly_rate}/hr{status}>"


class TaskerPortfolioItem(Base):
    __tablename__ = "tasker_portfolio"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tasker_id = Column(Integer, ForeignKey("taskers.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="SET NULL"), nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(512), nullable=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))
