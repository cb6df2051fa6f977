# backend/taskmarket/models/payment.py
"""
Payment and payout models.

Gateway integration lives outside this service. Rows here record the
reference handed to the gateway and the plain status strings it reports
back. Amounts are integers in minor currency units.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from ..core.constants import CURRENCY_CODE
from ..core.enums import PaymentStatus, PayoutStatus
from ..database import Base


class Payment(Base):
    """
    Attributes:
        reference: Unique reference shared with the gateway
        status: pending, paid, failed or refunded
        gateway_response: Last raw payload reported by the gateway
    """

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tasker_id = Column(Integer, ForeignKey("taskers.id", ondelete="SET NULL"), nullable=True, index=True)
    amount = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False, default=CURRENCY_CODE)
    status = Column(String(20), nullable=False, default=PaymentStatus.PENDING.value)
    payment_type = Column(String(50), nullable=False, default="card")
    reference = Column(String(100), nullable=False, unique=True, index=True)
    gateway_reference = Column(String(255), nullable=True)
    gateway_response = Column(JSON, nullable=True)
    description = Column(Text, nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"<Payment {self.reference} {self.amount} {self.status}>"


class Payout(Base):
    __tablename__ = "payouts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tasker_id = Column(Integer, ForeignKey("taskers.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False, default=CURRENCY_CODE)
    status = Column(String(20), nullable=False, default=PayoutStatus.PENDING.value)
    payout_method = Column(String(50), nullable=False, default="bank_transfer")
    description = Column(Text, nullable=True)
    gateway_reference = Column(String(255), nullable=True)
    failure_reason = Column(Text, nullable=True)
    payment_ids = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))
