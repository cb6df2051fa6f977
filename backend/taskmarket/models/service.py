# backend/taskmarket/models/service.py
"""
Catalog service models.

1. Service - bookable service type within a category (e.g. "Deep Cleaning")
2. ServiceFaq - ordered FAQ entries attached to a service

Prices are integers in minor currency units.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class Service(Base):
    """
    Model representing a catalog service.

    Attributes:
        id: Primary key
        category_id: Owning category
        name / slug: Display name and unique URL identifier
        base_price: Indicative price in minor units
        average_rating / total_reviews: Rolling rating aggregate
        is_active / is_popular / is_featured: Listing flags
    """

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("service_categories.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    icon = Column(String(255), nullable=True)
    image = Column(String(512), nullable=True)
    tags = Column(JSON, nullable=True)
    base_price = Column(Integer, nullable=True)
    average_rating = Column(Float, nullable=True)
    total_reviews = Column(Integer, nullable=False, default=0)
    total_bookings = Column(Integer, nullable=False, default=0)
    display_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    is_popular = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    category = relationship("ServiceCategory", back_populates="services")

    def __repr__(self) -> str:
        """String representation."""
        status = " (inactive)" if not self.is_active else ""
        return f"<Service {self.name}{status}>"


class ServiceFaq(Base):
    __tablename__ = "service_faqs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))
