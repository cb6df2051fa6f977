"""Tests for ReviewService and PaymentService."""

import re

import pytest

from taskmarket.core.enums import BookingStatus, PaymentStatus, PayoutStatus
from taskmarket.core.exceptions import (
    BusinessRuleException,
    ConflictException,
    NotFoundException,
    ValidationException,
)
from taskmarket.models.booking import Booking
from taskmarket.schemas.payment import (
    GatewayStatusUpdate,
    PaymentInitialize,
    PayoutCreate,
    PayoutStatusUpdate,
)
from taskmarket.schemas.review import ReviewCreate
from taskmarket.services.payment_service import PaymentService, map_gateway_status
from taskmarket.services.review_service import ReviewService


@pytest.fixture
def make_booking(seed, db, booking_window):
    def _make(status=BookingStatus.PENDING.value, total_price=800000, tasker=None, task=None):
        customer = seed.user()
        tasker = tasker or seed.tasker()
        task = task or seed.task(seed.service())
        start, end = booking_window
        booking = Booking(
            user_id=customer.id,
            tasker_id=tasker.id,
            task_id=task.id,
            start_time=start,
            end_time=end,
            status=status,
            total_price=total_price,
        )
        db.add(booking)
        db.commit()
        return booking

    return _make


class TestReviews:
    def test_review_updates_tasker_and_task_averages(self, db, seed, make_booking):
        tasker = seed.tasker(average_rating=4.0, total_reviews=3)
        task = seed.task(seed.service())
        booking = make_booking(status=BookingStatus.COMPLETED.value, tasker=tasker, task=task)

        review = ReviewService(db).create_review(ReviewCreate(booking_id=booking.id, rating=5))

        assert review.tasker_id == tasker.id
        assert review.user_id == booking.user_id
        assert tasker.average_rating == pytest.approx(4.25)
        assert tasker.total_reviews == 4
        assert task.average_rating == pytest.approx(5.0)
        assert task.total_reviews == 1

    def test_fractional_rating_is_stored_and_averaged(self, db, seed, make_booking):
        tasker = seed.tasker()
        booking = make_booking(status=BookingStatus.COMPLETED.value, tasker=tasker)

        review = ReviewService(db).create_review(ReviewCreate(booking_id=booking.id, rating=3.5))

        db.refresh(review)
        assert review.rating == pytest.approx(3.5)
        assert tasker.average_rating == pytest.approx(3.5)
        assert tasker.total_reviews == 1

    def test_only_completed_bookings_can_be_reviewed(self, db, make_booking):
        booking = make_booking(status=BookingStatus.CONFIRMED.value)

        with pytest.raises(BusinessRuleException) as exc:
            ReviewService(db).create_review(ReviewCreate(booking_id=booking.id, rating=4))

        assert exc.value.code == "BOOKING_NOT_COMPLETED"

    def test_second_review_for_booking_conflicts(self, db, make_booking):
        booking = make_booking(status=BookingStatus.COMPLETED.value)
        service = ReviewService(db)
        service.create_review(ReviewCreate(booking_id=booking.id, rating=4))

        with pytest.raises(ConflictException) as exc:
            service.create_review(ReviewCreate(booking_id=booking.id, rating=2))

        assert exc.value.code == "REVIEW_EXISTS"

    def test_rating_outside_scale_is_rejected(self):
        with pytest.raises(ValueError):
            ReviewCreate(booking_id=1, rating=6)

    def test_list_for_tasker_pages(self, db, seed, make_booking):
        tasker = seed.tasker()
        service = ReviewService(db)
        for rating in (3, 4, 5):
            booking = make_booking(status=BookingStatus.COMPLETED.value, tasker=tasker)
            service.create_review(ReviewCreate(booking_id=booking.id, rating=rating))

        items, total = service.list_for_tasker(tasker.id, page=1, limit=2)

        assert total == 3
        assert len(items) == 2


class TestGatewayMapping:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("success", PaymentStatus.PAID),
            ("SUCCESS", PaymentStatus.PAID),
            ("failed", PaymentStatus.FAILED),
            ("abandoned", PaymentStatus.FAILED),
            ("reversed", PaymentStatus.REFUNDED),
            ("pending", PaymentStatus.PENDING),
        ],
    )
    def test_known_statuses(self, raw, expected):
        assert map_gateway_status(raw) == expected

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationException) as exc:
            map_gateway_status("exploded")

        assert exc.value.code == "UNKNOWN_GATEWAY_STATUS"


class TestPayments:
    def test_initialize_defaults_to_booking_total(self, db, make_booking):
        booking = make_booking(total_price=750000)

        payment = PaymentService(db).initialize_payment(PaymentInitialize(booking_id=booking.id))

        assert payment.amount == 750000
        assert payment.currency == "NGN"
        assert payment.status == PaymentStatus.PENDING.value
        assert re.fullmatch(rf"TM-{booking.id}-[0-9A-F]{{12}}", payment.reference)
        assert booking.payment_status == PaymentStatus.PENDING.value

    def test_initialize_without_any_amount_fails(self, db, make_booking):
        booking = make_booking(total_price=None)

        with pytest.raises(ValidationException) as exc:
            PaymentService(db).initialize_payment(PaymentInitialize(booking_id=booking.id))

        assert exc.value.code == "AMOUNT_REQUIRED"

    def test_paid_booking_cannot_be_charged_again(self, db, make_booking):
        booking = make_booking()
        service = PaymentService(db)
        payment = service.initialize_payment(PaymentInitialize(booking_id=booking.id))
        service.apply_gateway_status(payment.reference, GatewayStatusUpdate(status="success"))

        with pytest.raises(BusinessRuleException) as exc:
            service.initialize_payment(PaymentInitialize(booking_id=booking.id))

        assert exc.value.code == "BOOKING_ALREADY_PAID"

    def test_gateway_success_marks_payment_and_booking_paid(self, db, make_booking):
        booking = make_booking()
        service = PaymentService(db)
        payment = service.initialize_payment(PaymentInitialize(booking_id=booking.id))

        updated = service.apply_gateway_status(
            payment.reference,
            GatewayStatusUpdate(status="success", gateway_reference="PSK_123", gateway_response={"ok": True}),
        )

        assert updated.status == PaymentStatus.PAID.value
        assert updated.paid_at is not None
        assert updated.gateway_reference == "PSK_123"
        assert booking.payment_status == PaymentStatus.PAID.value

    def test_gateway_reversal_refunds(self, db, make_booking):
        booking = make_booking()
        service = PaymentService(db)
        payment = service.initialize_payment(PaymentInitialize(booking_id=booking.id))

        service.apply_gateway_status(payment.reference, GatewayStatusUpdate(status="reversed"))

        assert booking.payment_status == PaymentStatus.REFUNDED.value

    def test_unknown_reference_is_not_found(self, db):
        with pytest.raises(NotFoundException):
            PaymentService(db).apply_gateway_status("TM-0-NOPE", GatewayStatusUpdate(status="success"))

    def test_payout_lifecycle(self, db, seed):
        tasker = seed.tasker()
        service = PaymentService(db)

        payout = service.request_payout(PayoutCreate(tasker_id=tasker.id, amount=2000000))
        assert payout.status == PayoutStatus.PENDING.value

        service.update_payout_status(payout.id, PayoutStatusUpdate(status=PayoutStatus.PAID))

        assert [p.id for p in service.list_payouts(tasker.id, status="paid")] == [payout.id]
        assert service.list_payouts(tasker.id, status="failed") == []
