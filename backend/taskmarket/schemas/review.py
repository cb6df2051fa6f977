from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.functional_validators import field_validator

from ..core.constants import MAX_RATING, MIN_RATING
from .base import ORMResponse
from .tasker import UserSummary


class ReviewCreate(BaseModel):
    booking_id: int
    rating: float = Field(..., ge=MIN_RATING, le=MAX_RATING)
    comment: Optional[str] = Field(None, max_length=2000)

    @field_validator("comment")
    @classmethod
    def _clean_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None


class RatingUpdate(BaseModel):
    rating: float = Field(..., ge=MIN_RATING, le=MAX_RATING)


class ReviewResponse(ORMResponse):
    id: int
    booking_id: int
    user_id: int
    tasker_id: int
    task_id: Optional[int] = None
    rating: float
    comment: Optional[str] = None
    response: Optional[str] = None
    created_at: datetime
    user: Optional[UserSummary] = None
