# backend/taskmarket/repositories/verification_repository.py
"""Repository for identity verifications and their audit logs."""

from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from ..models.verification import Verification, VerificationLog
from .base_repository import BaseRepository


class VerificationRepository(BaseRepository[Verification]):
    def __init__(self, db: Session):
        super().__init__(db, Verification)
        self.logs = BaseRepository(db, VerificationLog)

    def list_verifications(
        self,
        *,
        tasker_id: Optional[int] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Verification], int]:
        query = self.db.query(Verification)
        if tasker_id is not None:
            query = query.filter(Verification.tasker_id == tasker_id)
        if status is not None:
            query = query.filter(Verification.status == status)
        if type is not None:
            query = query.filter(Verification.type == type)
        total = query.count()
        if total == 0:
            return [], 0
        items = self._execute_query(
            query.order_by(Verification.created_at.desc(), Verification.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return items, total

    def find_open_of_type(self, tasker_id: int, type: str, statuses: Sequence[str]) -> Optional[Verification]:
        """An existing verification of ``type`` still in one of ``statuses``."""
        return (
            self.db.query(Verification)
            .filter(
                Verification.tasker_id == tasker_id,
                Verification.type == type,
                Verification.status.in_(list(statuses)),
            )
            .first()
        )

    def has_verified(self, tasker_id: int, type: Optional[str] = None) -> bool:
        criteria = {"tasker_id": tasker_id, "status": "verified"}
        if type is not None:
            criteria["type"] = type
        return self.exists(**criteria)

    def logs_for(self, verification_ids: Sequence[int]) -> Dict[int, List[VerificationLog]]:
        """Batch-load logs for many verifications, newest first."""
        return self.logs.find_by_parent_ids(
            VerificationLog.verification_id,
            verification_ids,
            VerificationLog.created_at.desc(),
            VerificationLog.id.desc(),
        )
