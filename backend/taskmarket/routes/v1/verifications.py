# backend/taskmarket/routes/v1/verifications.py
"""
Verification routes - API v1

Endpoints:
    GET /                              → List verifications (paginated)
    POST /                             → Submit a verification
    GET /tasker/{tasker_id}            → Verifications for a tasker
    GET /tasker/{tasker_id}/verified   → Whether the tasker holds a verified document
    GET /{verification_id}             → Verification with its logs
    PATCH /{verification_id}/status    → Move to a new status
    GET /{verification_id}/logs        → Audit log
    POST /{verification_id}/logs       → Append a note
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies.services import get_verification_service
from ...core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ...schemas.base_responses import PaginatedResponse, total_pages_for
from ...schemas.verification import (
    VerificationCreate,
    VerificationLogCreate,
    VerificationLogResponse,
    VerificationResponse,
    VerificationStatusUpdate,
)
from ...services.verification_service import VerificationService
from .common import run_service

router = APIRouter(tags=["verifications-v1"])


@router.get("", response_model=PaginatedResponse[VerificationResponse])
async def list_verifications(
    tasker_id: Optional[int] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    type: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    service: VerificationService = Depends(get_verification_service),
) -> PaginatedResponse[VerificationResponse]:
    pairs, total = await run_service(
        service.list_verifications,
        tasker_id=tasker_id,
        status=status_filter,
        type=type,
        page=page,
        limit=limit,
    )
    return PaginatedResponse[VerificationResponse](
        items=[VerificationResponse.build(item, logs) for item, logs in pairs],
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages_for(total, limit),
    )


@router.post("", response_model=VerificationResponse, status_code=status.HTTP_201_CREATED)
async def create_verification(
    payload: VerificationCreate,
    service: VerificationService = Depends(get_verification_service),
) -> VerificationResponse:
    verification = await run_service(service.create_verification, payload)
    logs = await run_service(service.get_logs, verification.id)
    return VerificationResponse.build(verification, logs)


@router.get("/tasker/{tasker_id}", response_model=List[VerificationResponse])
async def list_tasker_verifications(
    tasker_id: int, service: VerificationService = Depends(get_verification_service)
) -> List[VerificationResponse]:
    pairs = await run_service(service.list_for_tasker, tasker_id)
    return [VerificationResponse.build(item, logs) for item, logs in pairs]


@router.get("/tasker/{tasker_id}/verified")
async def has_verified_document(
    tasker_id: int,
    type: Optional[str] = Query(None),
    service: VerificationService = Depends(get_verification_service),
) -> Dict[str, bool]:
    verified = await run_service(service.has_verified_document, tasker_id, type)
    return {"verified": verified}


@router.get("/{verification_id}", response_model=VerificationResponse)
async def get_verification(
    verification_id: int, service: VerificationService = Depends(get_verification_service)
) -> VerificationResponse:
    verification = await run_service(service.get_verification, verification_id)
    logs = await run_service(service.get_logs, verification_id)
    return VerificationResponse.build(verification, logs)


@router.patch("/{verification_id}/status", response_model=VerificationResponse)
async def update_verification_status(
    verification_id: int,
    payload: VerificationStatusUpdate,
    service: VerificationService = Depends(get_verification_service),
) -> VerificationResponse:
    verification = await run_service(service.update_status, verification_id, payload)
    logs = await run_service(service.get_logs, verification_id)
    return VerificationResponse.build(verification, logs)


@router.get("/{verification_id}/logs", response_model=List[VerificationLogResponse])
async def get_verification_logs(
    verification_id: int, service: VerificationService = Depends(get_verification_service)
) -> List[VerificationLogResponse]:
    logs = await run_service(service.get_logs, verification_id)
    return [VerificationLogResponse.model_validate(log) for log in logs]


@router.post(
    "/{verification_id}/logs",
    response_model=VerificationLogResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_verification_log(
    verification_id: int,
    payload: VerificationLogCreate,
    service: VerificationService = Depends(get_verification_service),
) -> VerificationLogResponse:
    log = await run_service(service.add_log, verification_id, payload)
    return VerificationLogResponse.model_validate(log)
