"""
Catalog service schemas.

``base_price`` is an integer in minor currency units.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from .base import MinorUnits, ORMResponse, StrictModel
from .category import CategoryResponse


class ServiceFaqIn(StrictModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    display_order: int = Field(0, ge=0)


class ServiceCreate(StrictModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255, description="Derived from name when omitted")
    category_id: Optional[int] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    image: Optional[str] = None
    tags: Optional[List[str]] = None
    base_price: Optional[MinorUnits] = None
    display_order: int = Field(0, ge=0)
    is_active: bool = True
    is_popular: bool = False
    is_featured: bool = False
    faqs: List[ServiceFaqIn] = Field(default_factory=list)


class ServiceUpdate(StrictModel):
    """Partial update. A present ``faqs`` list replaces all existing FAQs."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    category_id: Optional[int] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    image: Optional[str] = None
    tags: Optional[List[str]] = None
    base_price: Optional[MinorUnits] = None
    display_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    is_popular: Optional[bool] = None
    is_featured: Optional[bool] = None
    faqs: Optional[List[ServiceFaqIn]] = None


class ServiceFaqResponse(ORMResponse):
    id: int
    question: str
    answer: str
    display_order: int


class ServiceResponse(ORMResponse):
    id: int
    category_id: Optional[int] = None
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None
    image: Optional[str] = None
    tags: Optional[List[str]] = None
    base_price: Optional[int] = None
    average_rating: Optional[float] = None
    total_reviews: int
    total_bookings: int
    display_order: int
    is_active: bool
    is_popular: bool
    is_featured: bool
    created_at: datetime
    category: Optional[CategoryResponse] = None


class ServiceDetailResponse(ServiceResponse):
    faqs: List[ServiceFaqResponse] = Field(default_factory=list)

    @classmethod
    def build(cls, service: Any, faqs: List[Any]) -> "ServiceDetailResponse":
        result = cls.model_validate(service)
        return result.model_copy(
            update={"faqs": [ServiceFaqResponse.model_validate(faq) for faq in faqs]}
        )
