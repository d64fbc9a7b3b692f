"""Cancellation service — ties a reservation, payment method and clock reading into one analysis."""

import logging
from datetime import datetime

from app.data.payment_methods import PaymentMethod, charges, total_with_charges
from app.data.travel_classes import class_full_name
from app.schemas.cancellation import (
    CancellationAnalysis,
    PassengerSchema,
    PaymentMethodResponse,
    ReservationResponse,
    ScenarioResponse,
)
from app.services.cancellation_advisor import advise
from app.services.cancellation_calculator import best_scenario, recompute, sort_for_display
from app.services.reservation import ReservationSnapshot

logger = logging.getLogger(__name__)


def payment_method_response(method: PaymentMethod, amount: float | None = None) -> PaymentMethodResponse:
    if amount is None:
        return PaymentMethodResponse(code=method.code, name=method.name)
    return PaymentMethodResponse(
        code=method.code,
        name=method.name,
        deduction=charges(amount, method),
        total=total_with_charges(amount, method),
    )


def reservation_response(snapshot: ReservationSnapshot) -> ReservationResponse:
    return ReservationResponse(
        pnr=snapshot.pnr,
        train_number=snapshot.train_number,
        train_name=snapshot.train_name,
        source=snapshot.source,
        destination=snapshot.destination,
        travel_class=snapshot.travel_class,
        travel_class_name=class_full_name(snapshot.travel_class),
        fare=snapshot.fare,
        departure_time=snapshot.departure_time,
        booking_time=snapshot.booking_time,
        passenger_count=snapshot.passenger_count,
        passengers=[PassengerSchema.model_validate(p) for p in snapshot.passengers],
    )


class CancellationService:
    def analyze(
        self,
        snapshot: ReservationSnapshot,
        method: PaymentMethod,
        now: datetime,
        sort: str = "checkpoint",
    ) -> CancellationAnalysis:
        """Scenarios and advice for one clock reading; `now` is shared by both."""
        scenarios = recompute(snapshot, method, now)
        best = best_scenario(scenarios)
        if sort == "display":
            scenarios = sort_for_display(scenarios)

        advice = advise(snapshot.booking_time, snapshot.departure_time, now)
        logger.info(
            f"Cancellation analysis for PNR {snapshot.pnr or '-'}: method={method.code} "
            f"best={best.offset_hours if best else None}h"
        )
        return CancellationAnalysis(
            reservation=reservation_response(snapshot),
            payment_method=payment_method_response(method, snapshot.fare),
            evaluated_at=now,
            advice=advice,
            scenarios=[ScenarioResponse.model_validate(s) for s in scenarios],
            best_scenario=ScenarioResponse.model_validate(best) if best else None,
        )


cancellation_service = CancellationService()
