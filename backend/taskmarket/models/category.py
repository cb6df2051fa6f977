# backend/taskmarket/models/category.py
"""
Service category model.

Categories group catalog services (Cleaning, Moving, Repairs...). Each one
has a unique slug and may point at a parent category.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class ServiceCategory(Base):
    """
    Model representing a service category.

    Attributes:
        id: Primary key
        name: Display name (e.g., "Home Cleaning")
        slug: URL-friendly identifier (e.g., "home-cleaning")
        description: Optional description of the category
        parent_id: Optional parent category
        display_order: Order for UI display (lower numbers first)
        is_active: Inactive categories are hidden from listings by default
    """

    __tablename__ = "service_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    icon = Column(String(255), nullable=True)
    image = Column(String(512), nullable=True)
    parent_id = Column(Integer, ForeignKey("service_categories.id", ondelete="SET NULL"), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    parent = relationship("ServiceCategory", remote_side=[id])
    services = relationship("Service", back_populates="category")

    def __repr__(self) -> str:
        """String representation."""
        return f"<ServiceCategory {self.name} ({self.slug})>"
