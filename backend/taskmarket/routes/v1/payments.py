# backend/taskmarket/routes/v1/payments.py
"""
Payment routes - API v1

The gateway itself is out of process. Clients initialize a payment here,
hand the returned reference to the gateway, and the gateway's status is
later posted back against that reference.

Endpoints:
    POST /initialize                   → Pending payment with a fresh reference
    GET /reference/{reference}         → Payment by reference
    POST /reference/{reference}/status → Apply a gateway status
    GET /booking/{booking_id}          → Payments for a booking
    POST /payouts                      → Request a payout
    PATCH /payouts/{payout_id}         → Update payout status
    GET /payouts/tasker/{tasker_id}    → Payouts for a tasker
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies.services import get_payment_service
from ...schemas.payment import (
    GatewayStatusUpdate,
    PaymentInitialize,
    PaymentResponse,
    PayoutCreate,
    PayoutResponse,
    PayoutStatusUpdate,
)
from ...services.payment_service import PaymentService
from .common import run_service

router = APIRouter(tags=["payments-v1"])


@router.post("/initialize", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def initialize_payment(
    payload: PaymentInitialize, service: PaymentService = Depends(get_payment_service)
) -> PaymentResponse:
    payment = await run_service(service.initialize_payment, payload)
    return PaymentResponse.model_validate(payment)


@router.get("/reference/{reference}", response_model=PaymentResponse)
async def get_payment(
    reference: str, service: PaymentService = Depends(get_payment_service)
) -> PaymentResponse:
    payment = await run_service(service.get_by_reference, reference)
    return PaymentResponse.model_validate(payment)


@router.post("/reference/{reference}/status", response_model=PaymentResponse)
async def apply_gateway_status(
    reference: str,
    payload: GatewayStatusUpdate,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentResponse:
    payment = await run_service(service.apply_gateway_status, reference, payload)
    return PaymentResponse.model_validate(payment)


@router.get("/booking/{booking_id}", response_model=List[PaymentResponse])
async def list_booking_payments(
    booking_id: int, service: PaymentService = Depends(get_payment_service)
) -> List[PaymentResponse]:
    payments = await run_service(service.list_for_booking, booking_id)
    return [PaymentResponse.model_validate(payment) for payment in payments]


@router.post("/payouts", response_model=PayoutResponse, status_code=status.HTTP_201_CREATED)
async def request_payout(
    payload: PayoutCreate, service: PaymentService = Depends(get_payment_service)
) -> PayoutResponse:
    payout = await run_service(service.request_payout, payload)
    return PayoutResponse.model_validate(payout)


@router.patch("/payouts/{payout_id}", response_model=PayoutResponse)
async def update_payout_status(
    payout_id: int,
    payload: PayoutStatusUpdate,
    service: PaymentService = Depends(get_payment_service),
) -> PayoutResponse:
    payout = await run_service(service.update_payout_status, payout_id, payload)
    return PayoutResponse.model_validate(payout)


@router.get("/payouts/tasker/{tasker_id}", response_model=List[PayoutResponse])
async def list_payouts(
    tasker_id: int,
    status_filter: Optional[str] = Query(None, alias="status"),
    service: PaymentService = Depends(get_payment_service),
) -> List[PayoutResponse]:
    payouts = await run_service(service.list_payouts, tasker_id, status_filter)
    return [PayoutResponse.model_validate(payout) for payout in payouts]
