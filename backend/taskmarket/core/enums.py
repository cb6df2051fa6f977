# backend/taskmarket/core/enums.py
"""
Core enums for the TaskMarket platform.

Values are stored as plain strings in the database, so every enum here
subclasses ``str`` and can be compared directly with column values.
"""

from enum import Enum


class RoleName(str, Enum):
    """Account roles supplied by the auth subsystem."""

    USER = "user"
    TASKER = "tasker"
    ADMIN = "admin"


class BookingStatus(str, Enum):
    """Booking lifecycle statuses. Transitions are not enforced."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"
    REJECTED = "rejected"


class PaymentStatus(str, Enum):
    """Payment state mirrored on bookings and payment rows."""

    UNPAID = "unpaid"
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PayoutStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    PAID = "paid"
    FAILED = "failed"


class TaskStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


class VerificationType(str, Enum):
    BVN = "bvn"
    NIN = "nin"
    ID_CARD = "id_card"
    PASSPORT = "passport"
    DRIVERS_LICENSE = "drivers_license"


class VerificationStatus(str, Enum):
    PENDING = "pending"
    IN_REVIEW = "in_review"
    VERIFIED = "verified"
    REJECTED = "rejected"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
