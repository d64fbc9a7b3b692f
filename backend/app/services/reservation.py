"""Reservation snapshot — normalized PNR record consumed by the refund engine.

The upstream PNR API returns loosely typed strings (fare as text, dates as
dd-mm-YYYY). `parse_reservation` turns that record into an immutable
`ReservationSnapshot` and fails fast on anything the calculator cannot trust.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)

JOURNEY_DATE_FORMAT = "%d-%m-%Y"
DEPARTURE_FORMAT = f"{JOURNEY_DATE_FORMAT} %H:%M"
BOOKING_FORMATS = (f"{JOURNEY_DATE_FORMAT} %H:%M:%S", DEPARTURE_FORMAT, JOURNEY_DATE_FORMAT)


class ReservationDataError(ValueError):
    """Raised when a PNR record is missing fields or carries unparseable values."""


@dataclass(frozen=True)
class Passenger:
    serial_number: int
    booking_status: str
    current_status: str
    coach: str | None = None
    berth: int | None = None


@dataclass(frozen=True)
class ReservationSnapshot:
    pnr: str
    train_number: str
    train_name: str
    source: str
    destination: str
    travel_class: str
    fare: float
    departure_time: datetime
    booking_time: datetime
    passengers: tuple[Passenger, ...]

    @property
    def passenger_count(self) -> int:
        # Every listed passenger counts, whatever their status
        return len(self.passengers)


def _require(data: dict, key: str) -> Any:
    value = data.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ReservationDataError(f"PNR record is missing '{key}'")
    return value


def parse_departure(journey_date: str, departure_time: str) -> datetime:
    """Combine journey date (dd-mm-YYYY) and departure time (HH:MM) into a local datetime."""
    raw = f"{journey_date.strip()} {departure_time.strip()}"
    try:
        return datetime.strptime(raw, DEPARTURE_FORMAT)
    except ValueError as e:
        raise ReservationDataError(f"Unparseable departure '{raw}': {e}") from e


def parse_booking(booking_date: str) -> datetime:
    """Parse the booking timestamp; a bare date means midnight."""
    raw = booking_date.strip()
    for fmt in BOOKING_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    raise ReservationDataError(f"Unparseable booking date '{raw}'")


def parse_fare(value: Any) -> float:
    try:
        fare = float(str(value).replace(",", "").strip())
    except ValueError as e:
        raise ReservationDataError(f"Fare '{value}' is not a number") from e
    if not math.isfinite(fare):
        raise ReservationDataError(f"Fare must be a finite amount, got {value}")
    if fare < 0:
        raise ReservationDataError(f"Fare must be non-negative, got {fare}")
    return fare


def _parse_passenger(index: int, raw: dict) -> Passenger:
    serial = raw.get("Number") or raw.get("SerialNumber") or index + 1
    coach = raw.get("Coach")
    berth = raw.get("Berth")
    try:
        berth = int(berth) if berth not in (None, "", 0) else None
    except (TypeError, ValueError):
        berth = None
    try:
        serial = int(serial)
    except (TypeError, ValueError) as e:
        raise ReservationDataError(
            f"Passenger {index + 1} has invalid serial number '{serial}'"
        ) from e
    return Passenger(
        serial_number=serial,
        booking_status=str(raw.get("BookingStatus") or raw.get("BookingStatusNew") or ""),
        current_status=str(raw.get("CurrentStatus") or raw.get("CurrentStatusNew") or ""),
        coach=str(coach) if coach else None,
        berth=berth,
    )


def parse_reservation(data: dict) -> ReservationSnapshot:
    """Normalize the `data` object of an IRCTC PNR status response."""
    passengers_raw = data.get("PassengerStatus")
    if not isinstance(passengers_raw, list) or not passengers_raw:
        raise ReservationDataError("PNR record has no passengers")

    passengers = tuple(
        _parse_passenger(i, p) for i, p in enumerate(passengers_raw) if isinstance(p, dict)
    )
    if len(passengers) != len(passengers_raw):
        raise ReservationDataError("PNR record has malformed passenger entries")

    snapshot = ReservationSnapshot(
        pnr=str(data.get("Pnr") or data.get("PNR") or ""),
        train_number=str(data.get("TrainNo") or ""),
        train_name=str(data.get("TrainName") or ""),
        source=str(data.get("From") or data.get("SourceStation") or ""),
        destination=str(data.get("To") or data.get("DestinationStation") or ""),
        travel_class=str(_require(data, "Class")).strip().upper(),
        fare=parse_fare(_require(data, "BookingFare")),
        departure_time=parse_departure(
            str(_require(data, "Doj")), str(_require(data, "DepartureTime"))
        ),
        booking_time=parse_booking(str(_require(data, "BookingDate"))),
        passengers=passengers,
    )
    logger.debug(
        f"Parsed PNR {snapshot.pnr}: class={snapshot.travel_class} fare={snapshot.fare} "
        f"passengers={snapshot.passenger_count} departure={snapshot.departure_time}"
    )
    return snapshot
