"""
Database models for the TaskMarket platform.

The models are organized by functionality:
- Users and saved locations
- Service catalog (categories, services, FAQs)
- Tasker profiles, skills and portfolio
- Task listings with questions and FAQs
- Bookings, messages, reviews
- Payments, payouts and identity verification
"""

from .booking import Booking, BookingMessage
from .category import ServiceCategory
from .location import Location
from .payment import Payment, Payout
from .review import Review
from .service import Service, ServiceFaq
from .task import Task, TaskFaq, TaskQuestion
from .tasker import Tasker, TaskerPortfolioItem, TaskerSkill
from .user import User
from .verification import Verification, VerificationLog

__all__ = [
    "Booking",
    "BookingMessage",
    "Location",
    "Payment",
    "Payout",
    "Review",
    "Service",
    "ServiceCategory",
    "ServiceFaq",
    "Task",
    "TaskFaq",
    "TaskQuestion",
    "Tasker",
    "TaskerPortfolioItem",
    "TaskerSkill",
    "User",
    "Verification",
    "VerificationLog",
]
