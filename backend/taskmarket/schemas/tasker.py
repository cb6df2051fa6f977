"""
Tasker profile, skill and portfolio schemas.

Hourly rates are integers in minor currency units.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..services.search.results import TaskerSearchHit
from .base import MinorUnits, ORMResponse, StrictModel
from .location import LocationResponse


class TaskerProfileFields(BaseModel):
    headline: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None
    profile_photo: Optional[str] = None
    cover_photo: Optional[str] = None
    gallery: Optional[List[str]] = None
    location_id: Optional[int] = None
    work_radius: Optional[int] = Field(None, ge=0, description="Kilometers")
    availability: Optional[Dict[str, Any]] = None
    languages: Optional[List[str]] = None
    education: Optional[List[Dict[str, Any]]] = None
    work_experience: Optional[List[Dict[str, Any]]] = None


class TaskerCreate(TaskerProfileFields):
    user_id: int


class TaskerUpdate(TaskerProfileFields):
    """Partial update. Only fields present in the request are written."""

    response_time: Optional[int] = Field(None, ge=0, description="Minutes")
    response_rate: Optional[float] = Field(None, ge=0, le=100)
    completion_rate: Optional[float] = Field(None, ge=0, le=100)
    background_checked: Optional[bool] = None
    phone_verified: Optional[bool] = None
    email_verified: Optional[bool] = None
    is_elite: Optional[bool] = None
    is_active: Optional[bool] = None


class SkillCreate(StrictModel):
    service_id: int
    hourly_rate: MinorUnits
    quick_pitch: Optional[str] = None
    experience: Optional[str] = None
    experience_years: Optional[int] = Field(None, ge=0)
    has_equipment: bool = False
    equipment_description: Optional[str] = None
    is_quick_assign: bool = False


class SkillUpdate(StrictModel):
    hourly_rate: Optional[MinorUnits] = None
    quick_pitch: Optional[str] = None
    experience: Optional[str] = None
    experience_years: Optional[int] = Field(None, ge=0)
    has_equipment: Optional[bool] = None
    equipment_description: Optional[str] = None
    is_quick_assign: Optional[bool] = None


class PortfolioItemCreate(StrictModel):
    title: str = Field(..., min_length=1, max_length=255)
    image_url: str
    description: Optional[str] = None
    service_id: Optional[int] = None
    display_order: Optional[int] = Field(None, ge=0, description="Appended last when omitted")


class PortfolioItemUpdate(StrictModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    image_url: Optional[str] = None
    description: Optional[str] = None
    service_id: Optional[int] = None
    display_order: Optional[int] = Field(None, ge=0)


class UserSummary(ORMResponse):
    id: int
    first_name: str
    last_name: str
    avatar_url: Optional[str] = None


class ServiceSummary(ORMResponse):
    id: int
    name: str
    slug: str


class TaskerSkillResponse(ORMResponse):
    id: int
    tasker_id: int
    service_id: int
    hourly_rate: int
    quick_pitch: Optional[str] = None
    experience: Optional[str] = None
    experience_years: Optional[int] = None
    has_equipment: bool
    is_quick_assign: bool
    is_active: bool
    service: Optional[ServiceSummary] = None


class PortfolioItemResponse(ORMResponse):
    id: int
    tasker_id: int
    service_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    image_url: str
    display_order: int


class TaskerResponse(ORMResponse, TaskerProfileFields):
    id: int
    user_id: int
    average_rating: Optional[float] = None
    total_reviews: int
    total_tasks_completed: int
    response_rate: Optional[float] = None
    response_time: Optional[int] = None
    completion_rate: Optional[float] = None
    background_checked: bool
    identity_verified: bool
    is_elite: bool
    is_active: bool
    created_at: datetime
    user: Optional[UserSummary] = None
    location: Optional[LocationResponse] = None


class TaskerSearchResult(TaskerResponse):
    """A search hit: the profile plus its active skills and portfolio."""

    skills: List[TaskerSkillResponse] = Field(default_factory=list)
    portfolio: List[PortfolioItemResponse] = Field(default_factory=list)
    distance_km: Optional[float] = Field(None, description="Present when a geographic filter is applied")

    @classmethod
    def from_hit(cls, hit: TaskerSearchHit) -> "TaskerSearchResult":
        result = cls.model_validate(hit.tasker)
        return result.model_copy(
            update={
                "skills": [TaskerSkillResponse.model_validate(skill) for skill in hit.skills],
                "portfolio": [PortfolioItemResponse.model_validate(item) for item in hit.portfolio],
                "distance_km": hit.distance_km,
            }
        )
