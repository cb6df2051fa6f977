# backend/taskmarket/services/review_service.py
"""
Review Service Layer

One review per completed booking. Creating a review folds its rating into
the tasker's and the task's running averages in the same transaction.
"""

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from ..core.enums import BookingStatus
from ..core.exceptions import BusinessRuleException, ConflictException
from ..models.review import Review
from ..repositories.factory import RepositoryFactory
from ..schemas.review import ReviewCreate
from ..utils.ratings import apply_rating
from .base import BaseService

logger = logging.getLogger(__name__)


class ReviewService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_review_repository(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.tasker_repository = RepositoryFactory.create_tasker_repository(db)
        self.task_repository = RepositoryFactory.create_task_repository(db)

    @BaseService.measure_operation("create_review")
    def create_review(self, data: ReviewCreate) -> Review:
        """
        Review a completed booking.

        Raises:
            NotFoundException: If the booking does not exist
            BusinessRuleException: If the booking is not completed
            ConflictException: If the booking already has a review
        """
        booking = self.require(
            self.booking_repository.get_by_id(data.booking_id, load_relationships=False),
            "Booking",
            data.booking_id,
        )
        if booking.status != BookingStatus.COMPLETED.value:
            raise BusinessRuleException(
                "Only completed bookings can be reviewed",
                code="BOOKING_NOT_COMPLETED",
                details={"booking_id": booking.id, "status": booking.status},
            )
        if self.repository.exists_for_booking(booking.id):
            raise ConflictException(
                "Booking has already been reviewed",
                code="REVIEW_EXISTS",
                details={"booking_id": booking.id},
            )

        tasker = self.tasker_repository.get_by_id(booking.tasker_id, load_relationships=False)
        task = (
            self.task_repository.get_by_id(booking.task_id, load_relationships=False)
            if booking.task_id is not None
            else None
        )

        with self.transaction():
            review = self.repository.create(
                booking_id=booking.id,
                user_id=booking.user_id,
                tasker_id=booking.tasker_id,
                task_id=booking.task_id,
                rating=data.rating,
                comment=data.comment,
            )
            if tasker is not None:
                apply_rating(tasker, data.rating)
            if task is not None:
                apply_rating(task, data.rating)

        self.log_operation(
            "create_review", review_id=review.id, booking_id=booking.id, rating=data.rating
        )
        return review

    @BaseService.measure_operation("list_reviews_for_tasker")
    def list_for_tasker(self, tasker_id: int, *, page: int = 1, limit: int = 20) -> Tuple[List[Review], int]:
        return self.repository.list_for_tasker(tasker_id, offset=(page - 1) * limit, limit=limit)
