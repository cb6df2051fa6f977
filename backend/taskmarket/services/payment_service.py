# backend/taskmarket/services/payment_service.py
"""
Payment Service Layer

Records payments and payouts. The gateway is an external collaborator:
this service issues the reference a payment is initialized with and
applies the plain status string the gateway later reports for it.
"""

from datetime import datetime, timezone
import logging
from typing import Dict, List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from ..core.enums import PaymentStatus, PayoutStatus
from ..core.exceptions import BusinessRuleException, NotFoundException, ValidationException
from ..models.payment import Payment, Payout
from ..repositories.factory import RepositoryFactory
from ..schemas.payment import GatewayStatusUpdate, PaymentInitialize, PayoutCreate, PayoutStatusUpdate
from .base import BaseService

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "TM"

# Gateway status string -> stored payment status
GATEWAY_STATUS_MAP: Dict[str, PaymentStatus] = {
    "success": PaymentStatus.PAID,
    "successful": PaymentStatus.PAID,
    "paid": PaymentStatus.PAID,
    "failed": PaymentStatus.FAILED,
    "failure": PaymentStatus.FAILED,
    "abandoned": PaymentStatus.FAILED,
    "reversed": PaymentStatus.REFUNDED,
    "refunded": PaymentStatus.REFUNDED,
    "pending": PaymentStatus.PENDING,
    "processing": PaymentStatus.PENDING,
}


def map_gateway_status(raw: str) -> PaymentStatus:
    status = GATEWAY_STATUS_MAP.get((raw or "").strip().lower())
    if status is None:
        raise ValidationException(
            f"Unknown gateway status: {raw}", code="UNKNOWN_GATEWAY_STATUS", details={"status": raw}
        )
    return status


def generate_reference(booking_id: int) -> str:
    return f"{REFERENCE_PREFIX}-{booking_id}-{uuid4().hex[:12].upper()}"


class PaymentService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_payment_repository(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.tasker_repository = RepositoryFactory.create_tasker_repository(db)

    @BaseService.measure_operation("initialize_payment")
    def initialize_payment(self, data: PaymentInitialize) -> Payment:
        """
        Create a pending payment for a booking and return it with its reference.

        The amount defaults to the booking total. The booking's payment
        status moves to ``pending``.
        """
        booking = self.require(
            self.booking_repository.get_by_id(data.booking_id, load_relationships=False),
            "Booking",
            data.booking_id,
        )
        if booking.payment_status == PaymentStatus.PAID.value:
            raise BusinessRuleException(
                "Booking is already paid", code="BOOKING_ALREADY_PAID", details={"booking_id": booking.id}
            )

        amount = data.amount if data.amount is not None else booking.total_price
        if amount is None:
            raise ValidationException(
                "Payment amount is required when the booking has no total price",
                code="AMOUNT_REQUIRED",
                details={"booking_id": booking.id},
            )

        with self.transaction():
            payment = self.repository.create(
                booking_id=booking.id,
                user_id=booking.user_id,
                tasker_id=booking.tasker_id,
                amount=amount,
                status=PaymentStatus.PENDING.value,
                payment_type=data.payment_type,
                reference=generate_reference(booking.id),
                description=data.description,
            )
            booking.payment_status = PaymentStatus.PENDING.value

        self.log_operation("initialize_payment", reference=payment.reference, booking_id=booking.id)
        return payment

    @BaseService.measure_operation("apply_gateway_status")
    def apply_gateway_status(self, reference: str, data: GatewayStatusUpdate) -> Payment:
        """
        Apply a gateway-reported status to the payment and mirror it on the booking.

        ``success`` becomes ``paid``, ``failed`` becomes ``failed`` and
        ``reversed`` becomes ``refunded``.
        """
        payment = self.get_by_reference(reference)
        status = map_gateway_status(data.status)
        booking = self.booking_repository.get_by_id(payment.booking_id, load_relationships=False)

        with self.transaction():
            payment.status = status.value
            if data.gateway_reference is not None:
                payment.gateway_reference = data.gateway_reference
            if data.gateway_response is not None:
                payment.gateway_response = data.gateway_response
            if status == PaymentStatus.PAID and payment.paid_at is None:
                payment.paid_at = datetime.now(timezone.utc)
            if booking is not None:
                booking.payment_status = status.value

        self.log_operation(
            "apply_gateway_status", reference=reference, gateway_status=data.status, status=status.value
        )
        return payment

    @BaseService.measure_operation("get_payment_by_reference")
    def get_by_reference(self, reference: str) -> Payment:
        payment = self.repository.get_by_reference(reference)
        if payment is None:
            raise NotFoundException(
                "Payment not found", code="PAYMENT_NOT_FOUND", details={"reference": reference}
            )
        return payment

    @BaseService.measure_operation("list_payments_for_booking")
    def list_for_booking(self, booking_id: int) -> List[Payment]:
        return self.repository.list_for_booking(booking_id)

    # Payouts

    @BaseService.measure_operation("request_payout")
    def request_payout(self, data: PayoutCreate) -> Payout:
        self.require(
            self.tasker_repository.get_by_id(data.tasker_id, load_relationships=False),
            "Tasker",
            data.tasker_id,
        )
        with self.transaction():
            payout = self.repository.payouts.create(
                **data.model_dump(), status=PayoutStatus.PENDING.value
            )
        self.log_operation("request_payout", payout_id=payout.id, tasker_id=data.tasker_id)
        return payout

    @BaseService.measure_operation("update_payout_status")
    def update_payout_status(self, payout_id: int, data: PayoutStatusUpdate) -> Payout:
        self.require(self.repository.payouts.get_by_id(payout_id), "Payout", payout_id)
        with self.transaction():
            payout = self.repository.payouts.update(payout_id, **data.model_dump(exclude_unset=True))
        return payout

    @BaseService.measure_operation("list_payouts")
    def list_payouts(self, tasker_id: int, status: Optional[str] = None) -> List[Payout]:
        return self.repository.list_payouts(tasker_id, status)
