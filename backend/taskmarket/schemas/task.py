"""
Task listing schemas.

Questions and FAQs on update follow replace-collection semantics: items
with an ``id`` are updated, items without one are inserted, and existing
items not present in the list are deleted. Omitting the list leaves the
collection untouched.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..core.enums import TaskStatus
from ..services.search.results import TaskSearchHit
from .base import MinorUnits, ORMResponse, StrictModel
from .location import LocationResponse
from .tasker import ServiceSummary


class TaskQuestionIn(StrictModel):
    id: Optional[int] = None
    question: str = Field(..., min_length=1)
    type: str = Field("text", max_length=20)
    options: Optional[List[str]] = None
    is_required: bool = False
    display_order: int = Field(0, ge=0)


class TaskFaqIn(StrictModel):
    id: Optional[int] = None
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    display_order: int = Field(0, ge=0)


class TaskCreate(StrictModel):
    name: str = Field(..., min_length=1, max_length=255)
    user_id: int
    service_id: int
    tasker_id: Optional[int] = None
    location_id: Optional[int] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    base_rate: Optional[MinorUnits] = None
    required_equipment: Optional[List[str]] = None
    required_skills: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None
    preferred_datetime: Optional[datetime] = None
    is_featured: bool = False
    is_popular: bool = False
    questions: List[TaskQuestionIn] = Field(default_factory=list)
    faqs: List[TaskFaqIn] = Field(default_factory=list)


class TaskUpdate(StrictModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    service_id: Optional[int] = None
    location_id: Optional[int] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    base_rate: Optional[MinorUnits] = None
    required_equipment: Optional[List[str]] = None
    required_skills: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None
    preferred_datetime: Optional[datetime] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_popular: Optional[bool] = None
    questions: Optional[List[TaskQuestionIn]] = None
    faqs: Optional[List[TaskFaqIn]] = None


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskAssign(BaseModel):
    tasker_id: int


class TaskQuestionResponse(ORMResponse):
    id: int
    question: str
    type: str
    options: Optional[List[str]] = None
    is_required: bool
    display_order: int


class TaskFaqResponse(ORMResponse):
    id: int
    question: str
    answer: str
    display_order: int


class TaskResponse(ORMResponse):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    short_description: Optional[str] = None
    tasker_id: Optional[int] = None
    user_id: int
    service_id: int
    location_id: Optional[int] = None
    status: str
    base_rate: Optional[int] = None
    required_equipment: Optional[List[str]] = None
    required_skills: Optional[List[str]] = None
    extra_metadata: Optional[Dict[str, Any]] = Field(None, serialization_alias="metadata")
    preferred_datetime: Optional[datetime] = None
    average_rating: Optional[float] = None
    total_reviews: int
    total_completed: int
    is_active: bool
    is_featured: bool
    is_popular: bool
    created_at: datetime
    service: Optional[ServiceSummary] = None
    location: Optional[LocationResponse] = None


class TaskDetailResponse(TaskResponse):
    questions: List[TaskQuestionResponse] = Field(default_factory=list)
    faqs: List[TaskFaqResponse] = Field(default_factory=list)
    distance_km: Optional[float] = None

    @classmethod
    def build(
        cls,
        task: Any,
        questions: List[Any],
        faqs: List[Any],
        distance_km: Optional[float] = None,
    ) -> "TaskDetailResponse":
        result = cls.model_validate(task)
        return result.model_copy(
            update={
                "questions": [TaskQuestionResponse.model_validate(q) for q in questions],
                "faqs": [TaskFaqResponse.model_validate(f) for f in faqs],
                "distance_km": distance_km,
            }
        )

    @classmethod
    def from_hit(cls, hit: TaskSearchHit) -> "TaskDetailResponse":
        return cls.build(hit.task, hit.questions, hit.faqs, hit.distance_km)
