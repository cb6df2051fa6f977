"""
Payment and payout schemas.

The gateway itself is an external collaborator. These schemas carry the
reference handed to it and the plain status strings it reports back.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..core.enums import PayoutStatus
from .base import MinorUnits, ORMResponse, StrictModel


class PaymentInitialize(StrictModel):
    booking_id: int
    amount: Optional[MinorUnits] = Field(None, description="Defaults to the booking total")
    payment_type: str = Field("card", max_length=50)
    description: Optional[str] = None


class GatewayStatusUpdate(BaseModel):
    """Status report from the payment gateway, e.g. ``success``/``failed``/``reversed``."""

    status: str = Field(..., min_length=1)
    gateway_reference: Optional[str] = None
    gateway_response: Optional[Dict[str, Any]] = None


class PaymentResponse(ORMResponse):
    id: int
    booking_id: int
    user_id: int
    tasker_id: Optional[int] = None
    amount: int
    currency: str
    status: str
    payment_type: str
    reference: str
    gateway_reference: Optional[str] = None
    description: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: datetime


class PayoutCreate(StrictModel):
    tasker_id: int
    amount: MinorUnits
    payout_method: str = Field("bank_transfer", max_length=50)
    description: Optional[str] = None
    payment_ids: Optional[List[int]] = None


class PayoutStatusUpdate(StrictModel):
    status: PayoutStatus
    gateway_reference: Optional[str] = None
    failure_reason: Optional[str] = None


class PayoutResponse(ORMResponse):
    id: int
    tasker_id: int
    amount: int
    currency: str
    status: str
    payout_method: str
    description: Optional[str] = None
    gateway_reference: Optional[str] = None
    failure_reason: Optional[str] = None
    payment_ids: Optional[List[int]] = None
    created_at: datetime
