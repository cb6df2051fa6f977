# backend/taskmarket/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Each factory builds a service bound to the request's database session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.booking_service import BookingService
from ...services.catalog_service import CatalogService
from ...services.category_service import CategoryService
from ...services.location_service import LocationService
from ...services.payment_service import PaymentService
from ...services.review_service import ReviewService
from ...services.task_service import TaskService
from ...services.tasker_service import TaskerService
from ...services.user_service import UserService
from ...services.verification_service import VerificationService
from .database import get_db


def get_tasker_service(db: Session = Depends(get_db)) -> TaskerService:
    return TaskerService(db)


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(db)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    return PaymentService(db)


def get_verification_service(db: Session = Depends(get_db)) -> VerificationService:
    return VerificationService(db)


def get_location_service(db: Session = Depends(get_db)) -> LocationService:
    return LocationService(db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)
