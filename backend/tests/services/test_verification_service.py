"""Tests for VerificationService status transitions and logs."""

import pytest

from taskmarket.core.enums import VerificationStatus, VerificationType
from taskmarket.core.exceptions import ConflictException, InvalidStatusTransitionException, NotFoundException
from taskmarket.schemas.verification import (
    VerificationCreate,
    VerificationLogCreate,
    VerificationStatusUpdate,
)
from taskmarket.services.verification_service import VerificationService, can_transition


@pytest.fixture
def service(db):
    return VerificationService(db)


@pytest.fixture
def tasker(seed):
    return seed.tasker()


def _submit(service, tasker, type=VerificationType.NIN):
    return service.create_verification(
        VerificationCreate(tasker_id=tasker.id, type=type, identifier="12345678901")
    )


def _move(service, verification, status, **extra):
    return service.update_status(verification.id, VerificationStatusUpdate(status=status, **extra))


@pytest.mark.parametrize(
    "current, new, allowed",
    [
        ("pending", "in_review", True),
        ("pending", "rejected", True),
        ("pending", "verified", False),
        ("in_review", "verified", True),
        ("verified", "rejected", False),
        ("rejected", "pending", True),
        ("rejected", "verified", False),
    ],
)
def test_transition_table(current, new, allowed):
    assert can_transition(current, new) is allowed


def test_submission_starts_pending_with_a_log(service, tasker):
    verification = _submit(service, tasker)

    assert verification.status == VerificationStatus.PENDING.value
    assert verification.user_id == tasker.user_id
    logs = service.get_logs(verification.id)
    assert [log.message for log in logs] == ["Verification request submitted"]


def test_second_open_submission_of_same_type_conflicts(service, tasker):
    _submit(service, tasker)

    with pytest.raises(ConflictException) as exc:
        _submit(service, tasker)

    assert exc.value.code == "VERIFICATION_IN_PROGRESS"


def test_other_document_types_can_run_in_parallel(service, tasker):
    _submit(service, tasker, VerificationType.NIN)
    other = _submit(service, tasker, VerificationType.BVN)

    assert other.type == "bvn"


def test_verified_marks_tasker_identity(service, tasker):
    verification = _submit(service, tasker)
    _move(service, verification, VerificationStatus.IN_REVIEW)

    verified = _move(service, verification, VerificationStatus.VERIFIED, verification_reference="REF-9")

    assert verified.verified_at is not None
    assert verified.verification_reference == "REF-9"
    assert tasker.identity_verified is True
    assert service.has_verified_document(tasker.id, "nin") is True
    assert service.has_verified_document(tasker.id, "passport") is False
    assert len(service.get_logs(verification.id)) == 3


def test_skipping_review_is_rejected(service, tasker):
    verification = _submit(service, tasker)

    with pytest.raises(InvalidStatusTransitionException) as exc:
        _move(service, verification, VerificationStatus.VERIFIED)

    assert exc.value.code == "INVALID_STATUS_TRANSITION"
    assert exc.value.status_code == 409


def test_rejection_stores_reason_and_allows_resubmission(service, tasker):
    verification = _submit(service, tasker)

    rejected = _move(service, verification, VerificationStatus.REJECTED, rejection_reason="Blurry photo")
    assert rejected.rejection_reason == "Blurry photo"

    resubmitted = _submit(service, tasker)
    assert resubmitted.id != verification.id


def test_add_log_uses_current_status(service, tasker):
    verification = _submit(service, tasker)
    _move(service, verification, VerificationStatus.IN_REVIEW)

    log = service.add_log(verification.id, VerificationLogCreate(message="Called provider"))

    assert log.status == VerificationStatus.IN_REVIEW.value


def test_listing_pairs_items_with_logs(service, tasker, seed):
    _submit(service, tasker)
    _submit(service, seed.tasker())

    items, total = service.list_verifications(tasker_id=tasker.id)

    assert total == 1
    verification, logs = items[0]
    assert verification.tasker_id == tasker.id
    assert len(logs) == 1


def test_unknown_tasker_is_not_found(service):
    with pytest.raises(NotFoundException):
        service.create_verification(
            VerificationCreate(tasker_id=404, type=VerificationType.PASSPORT, identifier="A1")
        )
