"""Tests for the route helper that runs services off the event loop."""

from fastapi import HTTPException
import pytest

from taskmarket.core.exceptions import ConflictException, NotFoundException
from taskmarket.routes.v1.common import run_service


@pytest.mark.asyncio
async def test_returns_service_result():
    def add(a, b, *, scale=1):
        return (a + b) * scale

    assert await run_service(add, 2, 3, scale=10) == 50


@pytest.mark.asyncio
async def test_domain_errors_become_http_errors_with_code():
    def missing():
        raise NotFoundException("Tasker not found", code="TASKER_NOT_FOUND", details={"id": 7})

    with pytest.raises(HTTPException) as exc:
        await run_service(missing)

    assert exc.value.status_code == 404
    assert exc.value.detail["code"] == "TASKER_NOT_FOUND"
    assert exc.value.detail["message"] == "Tasker not found"


@pytest.mark.asyncio
async def test_conflicts_map_to_409():
    def clash():
        raise ConflictException("Slug taken", code="SLUG_CONFLICT")

    with pytest.raises(HTTPException) as exc:
        await run_service(clash)

    assert exc.value.status_code == 409


@pytest.mark.asyncio
async def test_other_errors_propagate():
    def boom():
        raise RuntimeError("unexpected")

    with pytest.raises(RuntimeError):
        await run_service(boom)


@pytest.mark.asyncio
async def test_pool_exhaustion_becomes_503():
    def starved():
        raise RuntimeError("QueuePool limit of size 10 overflow 5 reached, connection timed out")

    with pytest.raises(HTTPException) as exc:
        await run_service(starved)

    assert exc.value.status_code == 503
    assert exc.value.headers["Retry-After"] == "2"
