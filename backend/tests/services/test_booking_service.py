"""Tests for BookingService pricing, lifecycle and messages."""

from datetime import timedelta

import pytest

from taskmarket.core.enums import BookingStatus, PaymentStatus
from taskmarket.core.exceptions import BusinessRuleException, NotFoundException, ValidationException
from taskmarket.schemas.booking import (
    BookingCancel,
    BookingCreate,
    BookingReschedule,
    BookingUpdate,
    MessageCreate,
)
from taskmarket.services.booking_service import BookingService, price_for_duration


@pytest.fixture
def service(db):
    return BookingService(db)


@pytest.fixture
def parties(seed):
    """A customer, a tasker with an active cleaning skill and a cleaning task."""
    customer = seed.user()
    cleaning = seed.service("Cleaning")
    tasker = seed.tasker()
    skill = seed.skill(tasker, cleaning, hourly_rate=400000)
    task = seed.task(cleaning, user=customer, base_rate=250000)
    return customer, tasker, skill, task


def _booking(service, parties, window, **extra):
    customer, tasker, _, task = parties
    start, end = window
    return service.create_booking(
        BookingCreate(
            user_id=customer.id,
            tasker_id=tasker.id,
            task_id=task.id,
            start_time=start,
            end_time=end,
            **extra,
        )
    )


def test_price_for_duration_rounds_to_minor_units(booking_window):
    start, _ = booking_window

    assert price_for_duration(400000, start, start + timedelta(minutes=90)) == 600000
    assert price_for_duration(333333, start, start + timedelta(minutes=20)) == 111111


def test_new_booking_is_pending_unpaid_and_priced_from_skill(service, parties, booking_window):
    _, _, skill, _ = parties

    booking = _booking(service, parties, booking_window)

    assert booking.status == BookingStatus.PENDING.value
    assert booking.payment_status == PaymentStatus.UNPAID.value
    assert booking.tasker_skill_id == skill.id
    assert booking.total_price == 800000


def test_explicit_price_is_kept(service, parties, booking_window):
    booking = _booking(service, parties, booking_window, total_price=123400)

    assert booking.total_price == 123400


def test_price_falls_back_to_task_rate_without_active_skill(service, parties, booking_window, db):
    _, _, skill, _ = parties
    skill.is_active = False
    db.commit()

    booking = _booking(service, parties, booking_window)

    assert booking.tasker_skill_id is None
    assert booking.total_price == 500000


def test_end_before_start_is_rejected(service, parties, booking_window):
    start, end = booking_window

    with pytest.raises(ValidationException) as exc:
        _booking(service, parties, (end, start))

    assert exc.value.code == "INVALID_TIME_RANGE"


def test_unknown_skill_is_not_found(service, parties, booking_window):
    with pytest.raises(NotFoundException) as exc:
        _booking(service, parties, booking_window, tasker_skill_id=9999)

    assert exc.value.code == "SKILL_NOT_FOUND"


def test_cancel_records_reason_and_fee(service, parties, booking_window):
    booking = _booking(service, parties, booking_window)

    cancelled = service.cancel_booking(booking.id, BookingCancel(reason="Sick", cancellation_fee=5000))

    assert cancelled.status == BookingStatus.CANCELLED.value
    assert cancelled.cancelled_at is not None
    assert cancelled.cancellation_reason == "Sick"
    assert cancelled.cancellation_fee == 5000


def test_cancel_without_body(service, parties, booking_window):
    booking = _booking(service, parties, booking_window)

    assert service.cancel_booking(booking.id).status == "cancelled"


def test_complete_bumps_tasker_and_task_counters(service, parties, booking_window):
    _, tasker, _, task = parties
    booking = _booking(service, parties, booking_window)

    completed = service.complete_booking(booking.id)

    assert completed.status == BookingStatus.COMPLETED.value
    assert completed.completed_at is not None
    assert tasker.total_tasks_completed == 1
    assert task.total_completed == 1


def test_reschedule_moves_window(service, parties, booking_window):
    booking = _booking(service, parties, booking_window)
    start, end = booking_window

    moved = service.reschedule_booking(
        booking.id,
        BookingReschedule(start_time=start + timedelta(days=1), end_time=end + timedelta(days=1)),
    )

    assert moved.status == BookingStatus.RESCHEDULED.value
    assert moved.is_rescheduled is True
    assert moved.start_time.day == start.day + 1


def test_closed_booking_cannot_be_rescheduled(service, parties, booking_window):
    booking = _booking(service, parties, booking_window)
    service.cancel_booking(booking.id)
    start, end = booking_window

    with pytest.raises(BusinessRuleException) as exc:
        service.reschedule_booking(booking.id, BookingReschedule(start_time=start, end_time=end))

    assert exc.value.code == "BOOKING_CLOSED"


def test_update_booking_maps_metadata(service, parties, booking_window):
    booking = _booking(service, parties, booking_window)

    updated = service.update_booking(
        booking.id, BookingUpdate(status=BookingStatus.CONFIRMED, metadata={"gate": "B"})
    )

    assert updated.status == "confirmed"
    assert updated.extra_metadata == {"gate": "B"}


def test_search_filters_by_status(service, parties, booking_window):
    customer, _, _, _ = parties
    first = _booking(service, parties, booking_window)
    second = _booking(service, parties, booking_window)
    service.cancel_booking(second.id)

    items, total = service.search_bookings(user_id=customer.id, statuses=["pending"])

    assert total == 1
    assert [b.id for b in items] == [first.id]


def test_only_participants_can_post_messages(service, parties, booking_window, seed):
    booking = _booking(service, parties, booking_window)
    stranger = seed.user()

    with pytest.raises(BusinessRuleException) as exc:
        service.add_message(booking.id, MessageCreate(sender_id=stranger.id, message="Hi"))

    assert exc.value.code == "NOT_A_PARTICIPANT"


def test_unread_counts_and_mark_read(service, parties, booking_window):
    customer, tasker, _, _ = parties
    booking = _booking(service, parties, booking_window)
    service.add_message(booking.id, MessageCreate(sender_id=customer.id, message="On my way?"))
    service.add_message(booking.id, MessageCreate(sender_id=customer.id, message="Gate code 1234"))
    service.add_message(booking.id, MessageCreate(sender_id=tasker.user_id, message="Yes"))

    assert service.unread_message_count(tasker.user_id) == 2
    assert service.unread_message_count(customer.id) == 1

    assert service.mark_messages_read(booking.id, tasker.user_id) == 2
    assert service.unread_message_count(tasker.user_id) == 0
    assert service.unread_message_count(customer.id) == 1
    assert len(service.list_messages(booking.id)) == 3
