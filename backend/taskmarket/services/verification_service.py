# backend/taskmarket/services/verification_service.py
"""
Verification Service Layer

Identity verification requests and their audited status changes.

Allowed transitions:
    pending   -> in_review, rejected
    in_review -> verified, rejected
    verified  -> (none)
    rejected  -> pending

Every accepted transition writes a log row, and reaching ``verified`` sets
the tasker's ``identity_verified`` flag, all in one transaction.
"""

from datetime import datetime, timezone
import logging
from typing import Dict, FrozenSet, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.enums import VerificationStatus
from ..core.exceptions import ConflictException, InvalidStatusTransitionException
from ..models.verification import Verification, VerificationLog
from ..repositories.factory import RepositoryFactory
from ..schemas.verification import (
    VerificationCreate,
    VerificationLogCreate,
    VerificationStatusUpdate,
)
from .base import BaseService

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    VerificationStatus.PENDING.value: frozenset(
        {VerificationStatus.IN_REVIEW.value, VerificationStatus.REJECTED.value}
    ),
    VerificationStatus.IN_REVIEW.value: frozenset(
        {VerificationStatus.VERIFIED.value, VerificationStatus.REJECTED.value}
    ),
    VerificationStatus.VERIFIED.value: frozenset(),
    VerificationStatus.REJECTED.value: frozenset({VerificationStatus.PENDING.value}),
}

OPEN_STATUSES = (VerificationStatus.PENDING.value, VerificationStatus.IN_REVIEW.value)

SUBMITTED_MESSAGE = "Verification request submitted"


def can_transition(current: str, new: str) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())


class VerificationService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_verification_repository(db)
        self.tasker_repository = RepositoryFactory.create_tasker_repository(db)

    @BaseService.measure_operation("list_verifications")
    def list_verifications(
        self,
        *,
        tasker_id: Optional[int] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Tuple[Verification, List[VerificationLog]]], int]:
        """One page of verifications, each paired with its logs (loaded in one batch)."""
        items, total = self.repository.list_verifications(
            tasker_id=tasker_id, status=status, type=type, offset=(page - 1) * limit, limit=limit
        )
        logs = self.repository.logs_for([item.id for item in items])
        return [(item, logs.get(item.id, [])) for item in items], total

    @BaseService.measure_operation("get_verification")
    def get_verification(self, verification_id: int) -> Verification:
        return self.require(self.repository.get_by_id(verification_id), "Verification", verification_id)

    @BaseService.measure_operation("list_verifications_for_tasker")
    def list_for_tasker(self, tasker_id: int) -> List[Tuple[Verification, List[VerificationLog]]]:
        items = self.repository.find_by(tasker_id=tasker_id)
        logs = self.repository.logs_for([item.id for item in items])
        return [(item, logs.get(item.id, [])) for item in items]

    @BaseService.measure_operation("has_verified_document")
    def has_verified_document(self, tasker_id: int, type: Optional[str] = None) -> bool:
        return self.repository.has_verified(tasker_id, type)

    @BaseService.measure_operation("create_verification")
    def create_verification(self, data: VerificationCreate) -> Verification:
        """
        Submit a verification for a tasker.

        Raises:
            NotFoundException: If the tasker does not exist
            ConflictException: If a verification of the same type is still open
        """
        tasker = self.require(
            self.tasker_repository.get_by_id(data.tasker_id, load_relationships=False),
            "Tasker",
            data.tasker_id,
        )
        if self.repository.find_open_of_type(tasker.id, data.type, OPEN_STATUSES) is not None:
            raise ConflictException(
                "A verification of this type is already in progress",
                code="VERIFICATION_IN_PROGRESS",
                details={"tasker_id": tasker.id, "type": data.type},
            )

        with self.transaction():
            verification = self.repository.create(
                **data.model_dump(exclude={"metadata"}),
                user_id=tasker.user_id,
                status=VerificationStatus.PENDING.value,
                extra_metadata=data.metadata,
            )
            self.repository.logs.create(
                verification_id=verification.id,
                status=VerificationStatus.PENDING.value,
                message=SUBMITTED_MESSAGE,
                performed_by=tasker.user_id,
            )

        self.log_operation("create_verification", verification_id=verification.id, type=data.type)
        return verification

    @BaseService.measure_operation("update_verification_status")
    def update_status(self, verification_id: int, data: VerificationStatusUpdate) -> Verification:
        """
        Move a verification to a new status.

        Raises:
            NotFoundException: If the verification does not exist
            InvalidStatusTransitionException: If the transition is not allowed
        """
        verification = self.get_verification(verification_id)
        current = verification.status
        new = VerificationStatus(data.status).value
        if not can_transition(current, new):
            raise InvalidStatusTransitionException(current, new)

        tasker = self.tasker_repository.get_by_id(verification.tasker_id, load_relationships=False)

        with self.transaction():
            verification.status = new
            if new == VerificationStatus.VERIFIED.value:
                verification.verified_at = datetime.now(timezone.utc)
                if tasker is not None:
                    tasker.identity_verified = True
            if new == VerificationStatus.REJECTED.value:
                verification.rejection_reason = data.rejection_reason
            if data.verification_reference is not None:
                verification.verification_reference = data.verification_reference
            self.repository.logs.create(
                verification_id=verification.id,
                status=new,
                message=data.message or f"Status changed from {current} to {new}",
                performed_by=data.performed_by,
            )

        self.log_operation(
            "update_verification_status", verification_id=verification_id, old=current, new=new
        )
        return verification

    @BaseService.measure_operation("add_verification_log")
    def add_log(self, verification_id: int, data: VerificationLogCreate) -> VerificationLog:
        """Append a note at the verification's current status."""
        verification = self.get_verification(verification_id)
        with self.transaction():
            log = self.repository.logs.create(
                verification_id=verification.id,
                status=verification.status,
                message=data.message,
                performed_by=data.performed_by,
                extra_metadata=data.metadata,
            )
        return log

    @BaseService.measure_operation("get_verification_logs")
    def get_logs(self, verification_id: int) -> List[VerificationLog]:
        self.get_verification(verification_id)
        return self.repository.logs_for([verification_id]).get(verification_id, [])
