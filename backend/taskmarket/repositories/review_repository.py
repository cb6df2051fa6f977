# backend/taskmarket/repositories/review_repository.py
"""Repository for booking reviews."""

from typing import List, Tuple

from sqlalchemy.orm import Session, joinedload

from ..models.review import Review
from .base_repository import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    def __init__(self, db: Session):
        super().__init__(db, Review)

    def exists_for_booking(self, booking_id: int) -> bool:
        return self.exists(booking_id=booking_id)

    def list_for_tasker(self, tasker_id: int, *, offset: int = 0, limit: int = 20) -> Tuple[List[Review], int]:
        query = self.db.query(Review).filter(Review.tasker_id == tasker_id)
        total = query.count()
        if total == 0:
            return [], 0
        items = self._execute_query(
            query.options(joinedload(Review.user))
            .order_by(Review.created_at.desc(), Review.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return items, total
