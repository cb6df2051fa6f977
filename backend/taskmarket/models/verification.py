# backend/taskmarket/models/verification.py
"""
Identity verification models.

Unlike bookings, verification status changes are audited: every transition
writes a ``VerificationLog`` row in the same transaction.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from ..core.enums import VerificationStatus
from ..database import Base


class Verification(Base):
    """
    Attributes:
        type: bvn, nin, id_card, passport or drivers_license
        identifier: Document number as submitted
        status: pending, in_review, verified or rejected
        document_front / document_back / selfie_with_document: Upload URLs
    """

    __tablename__ = "verifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tasker_id = Column(Integer, ForeignKey("taskers.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    identifier = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default=VerificationStatus.PENDING.value)
    verified_at = Column(DateTime(timezone=True), nullable=True)
    rejection_reason = Column(Text, nullable=True)
    document_front = Column(String(512), nullable=True)
    document_back = Column(String(512), nullable=True)
    selfie_with_document = Column(String(512), nullable=True)
    extra_metadata = Column("metadata", JSON, nullable=True)
    verification_provider = Column(String(50), nullable=True)
    verification_reference = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"<Verification {self.id} {self.type} {self.status}>"


class VerificationLog(Base):
    __tablename__ = "verification_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    verification_id = Column(
        Integer, ForeignKey("verifications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status = Column(String(20), nullable=False)
    message = Column(Text, nullable=True)
    performed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
