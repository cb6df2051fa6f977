"""Service category schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import ORMResponse, StrictModel


class CategoryCreate(StrictModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255, description="Derived from name when omitted")
    description: Optional[str] = None
    icon: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[int] = None
    display_order: int = Field(0, ge=0)
    is_active: bool = True


class CategoryUpdate(StrictModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[int] = None
    display_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class CategoryResponse(ORMResponse):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[int] = None
    display_order: int
    is_active: bool
    created_at: datetime
