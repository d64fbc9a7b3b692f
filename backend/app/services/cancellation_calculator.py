"""Cancellation calculator — refund scenarios at fixed checkpoints before departure.

For each checkpoint (4h, 12h, 48h, 72h before departure) the calculator
applies the IRCTC charge tiers:

    gap <= 4h           full fare
    4h  < gap <= 12h    max(50% of fare, flat rate x passengers)
    12h < gap <= 48h    max(25% of fare, flat rate x passengers)
    gap > 48h           flat rate x passengers

Two refund figures are reported per scenario. `refund` is fare minus charge.
`net_refund` also withholds the payment gateway deduction (computed on the full
fare) and is the figure used to pick the best time to cancel.

Best time is the upcoming checkpoint with the highest `net_refund`. When the
deduction floors several net refunds to the same value, the higher `refund`
wins; a full tie goes to the checkpoint nearest departure.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from app.data.payment_methods import PaymentMethod, charges
from app.data.travel_classes import flat_rate
from app.services.reservation import ReservationSnapshot

logger = logging.getLogger(__name__)

# (hours before departure, description), nearest to departure first
CHECKPOINTS: tuple[tuple[int, str], ...] = (
    (4, "Less than 4 hours before departure"),
    (12, "Between 4 and 12 hours before departure"),
    (48, "Between 12 and 48 hours before departure"),
    (72, "48 hours or more before departure"),
)


@dataclass
class CancellationScenario:
    description: str
    offset_hours: int
    checkpoint_time: datetime
    cancellation_charge: float
    refund: float
    payment_deduction: float
    net_refund: float
    is_past: bool
    is_best_time: bool = False


def hours_between(later: datetime, earlier: datetime) -> int:
    """Whole hours from `earlier` to `later`, truncated toward zero."""
    return int((later - earlier).total_seconds() / 3600)


def cancellation_charge(
    fare: float, gap_hours: int, flat_rate_per_passenger: float, passenger_count: int
) -> float:
    minimum = flat_rate_per_passenger * passenger_count
    if gap_hours <= 4:
        return fare
    if gap_hours <= 12:
        return max(0.5 * fare, minimum)
    if gap_hours <= 48:
        return max(0.25 * fare, minimum)
    return minimum


def _mark_best_time(scenarios: list[CancellationScenario]) -> None:
    best: CancellationScenario | None = None
    for scenario in scenarios:
        scenario.is_best_time = False
        if scenario.is_past:
            continue
        if best is None or (scenario.net_refund, scenario.refund) > (best.net_refund, best.refund):
            best = scenario
    if best is not None:
        best.is_best_time = True


def compute_scenarios(
    reservation: ReservationSnapshot,
    payment_method: PaymentMethod,
    now: datetime,
) -> list[CancellationScenario]:
    """Build all checkpoint scenarios for a reservation, in checkpoint order."""
    fare = reservation.fare
    rate = flat_rate(reservation.travel_class)
    deduction = charges(fare, payment_method)

    scenarios = []
    for offset, description in CHECKPOINTS:
        checkpoint_time = reservation.departure_time - timedelta(hours=offset)
        gap = hours_between(reservation.departure_time, checkpoint_time)
        charge = cancellation_charge(fare, gap, rate, reservation.passenger_count)
        scenarios.append(CancellationScenario(
            description=description,
            offset_hours=offset,
            checkpoint_time=checkpoint_time,
            cancellation_charge=charge,
            refund=max(fare - charge, 0.0),
            payment_deduction=deduction,
            net_refund=max(fare - charge - deduction, 0.0),
            is_past=checkpoint_time < now,
        ))

    _mark_best_time(scenarios)
    logger.debug(
        f"PNR {reservation.pnr}: {len(scenarios)} scenarios, class={reservation.travel_class} "
        f"flat_rate={rate} method={payment_method.code} deduction={deduction:.2f}"
    )
    return scenarios


def recompute(
    reservation: ReservationSnapshot,
    payment_method: PaymentMethod,
    now: datetime,
) -> list[CancellationScenario]:
    """Full rebuild; call whenever the reservation or payment method changes."""
    return compute_scenarios(reservation, payment_method, now)


def refresh_timing(
    scenarios: list[CancellationScenario], now: datetime
) -> list[CancellationScenario]:
    """Re-evaluate past flags and the best time for a new clock reading.

    Money figures are carried over unchanged; the input list is not modified.
    """
    refreshed = [replace(s, is_past=s.checkpoint_time < now) for s in scenarios]
    _mark_best_time(refreshed)
    return refreshed


def sort_for_display(scenarios: list[CancellationScenario]) -> list[CancellationScenario]:
    """Best time first, then upcoming checkpoints by net refund, past ones last."""
    return sorted(
        scenarios,
        key=lambda s: (
            not s.is_best_time,
            s.is_past,
            0.0 if s.is_past else -s.net_refund,
        ),
    )


def best_scenario(scenarios: list[CancellationScenario]) -> CancellationScenario | None:
    return next((s for s in scenarios if s.is_best_time), None)
