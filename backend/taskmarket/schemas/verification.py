"""Identity verification schemas."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from ..core.enums import VerificationStatus, VerificationType
from .base import ORMResponse, StrictModel


class VerificationCreate(StrictModel):
    tasker_id: int
    type: VerificationType
    identifier: str = Field(..., min_length=1, max_length=50)
    document_front: Optional[str] = None
    document_back: Optional[str] = None
    selfie_with_document: Optional[str] = None
    verification_provider: Optional[str] = Field(None, max_length=50)
    metadata: Optional[Dict[str, Any]] = None


class VerificationStatusUpdate(StrictModel):
    status: VerificationStatus
    message: Optional[str] = None
    rejection_reason: Optional[str] = None
    performed_by: Optional[int] = None
    verification_reference: Optional[str] = Field(None, max_length=100)


class VerificationLogCreate(StrictModel):
    message: str = Field(..., min_length=1)
    performed_by: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None


class VerificationLogResponse(ORMResponse):
    id: int
    verification_id: int
    status: str
    message: Optional[str] = None
    performed_by: Optional[int] = None
    created_at: datetime


class VerificationResponse(ORMResponse):
    id: int
    tasker_id: int
    user_id: int
    type: str
    identifier: str
    status: str
    verified_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    document_front: Optional[str] = None
    document_back: Optional[str] = None
    selfie_with_document: Optional[str] = None
    verification_provider: Optional[str] = None
    verification_reference: Optional[str] = None
    created_at: datetime
    logs: List[VerificationLogResponse] = Field(default_factory=list)

    @classmethod
    def build(cls, verification: Any, logs: List[Any]) -> "VerificationResponse":
        result = cls.model_validate(verification)
        return result.model_copy(
            update={"logs": [VerificationLogResponse.model_validate(log) for log in logs]}
        )
