"""Cancellation router — recompute scenarios and expose the static rate tables."""

from datetime import datetime

from fastapi import APIRouter, HTTPException, Query

from app.data.payment_methods import PAYMENT_METHODS, UnknownPaymentMethodError, get_payment_method
from app.data.travel_classes import CLASS_NAMES, FLAT_RATES
from app.schemas.cancellation import (
    CancellationAnalysis,
    PaymentMethodResponse,
    ScenarioRequest,
    TravelClassResponse,
)
from app.services.cancellation_service import cancellation_service, payment_method_response

router = APIRouter()


@router.post("/cancellation/scenarios", response_model=CancellationAnalysis)
async def compute_cancellation_scenarios(body: ScenarioRequest):
    """Rebuild every scenario for a reservation the client already holds."""
    try:
        method = get_payment_method(body.payment_method)
    except UnknownPaymentMethodError as e:
        raise HTTPException(status_code=400, detail=str(e))

    now = body.now or datetime.now()
    return cancellation_service.analyze(body.reservation.to_snapshot(), method, now, body.sort)


@router.get("/payment-methods", response_model=list[PaymentMethodResponse])
async def list_payment_methods(amount: float | None = Query(None, ge=0)):
    """Payment methods in display order, with deductions for `amount` when given."""
    return [payment_method_response(m, amount) for m in PAYMENT_METHODS]


@router.get("/classes", response_model=list[TravelClassResponse])
async def list_travel_classes():
    return [
        TravelClassResponse(code=code, name=CLASS_NAMES.get(code, code), flat_rate=rate)
        for code, rate in FLAT_RATES.items()
    ]
