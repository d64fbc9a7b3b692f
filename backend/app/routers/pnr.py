"""PNR router — upstream status passthrough and cancellation analysis by PNR."""

import logging
from datetime import datetime
from typing import Literal

from fastapi import APIRouter, HTTPException, Path, Query

from app.data.payment_methods import DEFAULT_PAYMENT_METHOD, UnknownPaymentMethodError, get_payment_method
from app.schemas.cancellation import CancellationAnalysis
from app.services.cancellation_service import cancellation_service
from app.services.irctc_client import PNRLookupError, irctc_client
from app.services.reservation import ReservationDataError

logger = logging.getLogger(__name__)

router = APIRouter()

PNR_PATTERN = r"^\d{10}$"


@router.get("/{pnr_number}")
async def get_pnr_status(
    pnr_number: str = Path(..., pattern=PNR_PATTERN),
):
    """Raw PNR status as returned by the upstream provider."""
    try:
        return await irctc_client.get_pnr_status(pnr_number)
    except PNRLookupError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/{pnr_number}/cancellation", response_model=CancellationAnalysis)
async def get_cancellation_analysis(
    pnr_number: str = Path(..., pattern=PNR_PATTERN),
    payment_method: str = Query(DEFAULT_PAYMENT_METHOD.code),
    sort: Literal["checkpoint", "display"] = Query("checkpoint"),
):
    """Fetch a PNR and compute refund scenarios for the selected payment method."""
    try:
        method = get_payment_method(payment_method)
    except UnknownPaymentMethodError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        snapshot = await irctc_client.fetch_reservation(pnr_number)
    except PNRLookupError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ReservationDataError as e:
        logger.warning(f"PNR {pnr_number} returned unusable data: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return cancellation_service.analyze(snapshot, method, datetime.now(), sort)
