"""Pydantic schemas for saved user locations."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .base import ORMResponse


class LocationBase(BaseModel):
    label: str = Field("home", max_length=50, description="home|work|other")
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    is_default: bool = True


class LocationCreate(LocationBase):
    user_id: int


class LocationResponse(ORMResponse, LocationBase):
    id: int
    user_id: int
    created_at: datetime


class LocationListResponse(BaseModel):
    items: List[LocationResponse]
    total: int
