# backend/taskmarket/repositories/factory.py
"""
Repository Factory for the TaskMarket platform.

Provides centralized creation of repository instances, ensuring
consistent initialization and dependency injection.
"""

from sqlalchemy.orm import Session

from .booking_repository import BookingRepository
from .category_repository import CategoryRepository
from .location_repository import LocationRepository
from .payment_repository import PaymentRepository
from .review_repository import ReviewRepository
from .service_repository import ServiceRepository
from .task_repository import TaskRepository
from .task_search_repository import TaskSearchRepository
from .tasker_repository import TaskerRepository
from .tasker_search_repository import TaskerSearchRepository
from .user_repository import UserRepository
from .verification_repository import VerificationRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation so services never construct
    repositories with a session other than their own.
    """

    @staticmethod
    def create_user_repository(db: Session) -> UserRepository:
        return UserRepository(db)

    @staticmethod
    def create_location_repository(db: Session) -> LocationRepository:
        return LocationRepository(db)

    @staticmethod
    def create_category_repository(db: Session) -> CategoryRepository:
        return CategoryRepository(db)

    @staticmethod
    def create_service_repository(db: Session) -> ServiceRepository:
        return ServiceRepository(db)

    @staticmethod
    def create_tasker_repository(db: Session) -> TaskerRepository:
        return TaskerRepository(db)

    @staticmethod
    def create_tasker_search_repository(db: Session) -> TaskerSearchRepository:
        return TaskerSearchRepository(db)

    @staticmethod
    def create_task_repository(db: Session) -> TaskRepository:
        return TaskRepository(db)

    @staticmethod
    def create_task_search_repository(db: Session) -> TaskSearchRepository:
        return TaskSearchRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> BookingRepository:
        return BookingRepository(db)

    @staticmethod
    def create_review_repository(db: Session) -> ReviewRepository:
        return ReviewRepository(db)

    @staticmethod
    def create_payment_repository(db: Session) -> PaymentRepository:
        return PaymentRepository(db)

    @staticmethod
    def create_verification_repository(db: Session) -> VerificationRepository:
        return VerificationRepository(db)
