"""User account schemas. Credentials live with the auth subsystem."""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from ..core.enums import RoleName
from .base import ORMResponse, StrictModel


class UserCreate(StrictModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    avatar_url: Optional[str] = Field(None, max_length=512)
    role: RoleName = RoleName.USER

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserUpdate(StrictModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    avatar_url: Optional[str] = Field(None, max_length=512)
    role: Optional[RoleName] = None
    is_active: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().lower() if v is not None else v


class UserResponse(ORMResponse):
    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    role: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
