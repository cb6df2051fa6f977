"""Service operation timing is exported through the Prometheus registry."""

import pytest

from taskmarket.core.exceptions import NotFoundException
from taskmarket.monitoring.prometheus_metrics import REGISTRY
from taskmarket.services.user_service import UserService


def _sample(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_measured_operations_count_successes_and_errors(db, seed):
    service = UserService(db)
    user = seed.user()
    ok_before = _sample(
        "taskmarket_service_operations_total", service="UserService", operation="get_user", status="success"
    )
    err_before = _sample(
        "taskmarket_errors_total",
        service="UserService",
        operation="get_user",
        error_type="NotFoundException",
    )

    service.get_user(user.id)
    with pytest.raises(NotFoundException):
        service.get_user(user.id + 1000)

    assert _sample(
        "taskmarket_service_operations_total", service="UserService", operation="get_user", status="success"
    ) == ok_before + 1
    assert _sample(
        "taskmarket_errors_total",
        service="UserService",
        operation="get_user",
        error_type="NotFoundException",
    ) == err_before + 1
