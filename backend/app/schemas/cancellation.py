from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.data.payment_methods import DEFAULT_PAYMENT_METHOD
from app.services.reservation import Passenger, ReservationSnapshot


def _require_local_time(value: datetime | None) -> datetime | None:
    # Times are local wall-clock readings; offsets cannot be compared with them
    if value is not None and value.tzinfo is not None:
        raise ValueError("expected a local time without a UTC offset")
    return value


class PassengerSchema(BaseModel):
    serial_number: int
    booking_status: str = ""
    current_status: str = ""
    coach: str | None = None
    berth: int | None = None

    model_config = {"from_attributes": True}


class ReservationInput(BaseModel):
    """Client-held reservation snapshot, resubmitted when inputs change."""
    pnr: str = ""
    train_number: str = ""
    train_name: str = ""
    source: str = ""
    destination: str = ""
    travel_class: str
    fare: float = Field(ge=0, allow_inf_nan=False)
    departure_time: datetime
    booking_time: datetime
    passengers: list[PassengerSchema] = Field(min_length=1)

    @field_validator("departure_time", "booking_time")
    @classmethod
    def check_local_times(cls, value: datetime) -> datetime:
        return _require_local_time(value)

    def to_snapshot(self) -> ReservationSnapshot:
        return ReservationSnapshot(
            pnr=self.pnr,
            train_number=self.train_number,
            train_name=self.train_name,
            source=self.source,
            destination=self.destination,
            travel_class=self.travel_class.strip().upper(),
            fare=self.fare,
            departure_time=self.departure_time,
            booking_time=self.booking_time,
            passengers=tuple(Passenger(**p.model_dump()) for p in self.passengers),
        )


class ReservationResponse(BaseModel):
    pnr: str
    train_number: str
    train_name: str
    source: str
    destination: str
    travel_class: str
    travel_class_name: str
    fare: float
    departure_time: datetime
    booking_time: datetime
    passenger_count: int
    passengers: list[PassengerSchema]


class ScenarioRequest(BaseModel):
    reservation: ReservationInput
    payment_method: str = DEFAULT_PAYMENT_METHOD.code
    now: datetime | None = None
    sort: Literal["checkpoint", "display"] = "checkpoint"

    @field_validator("now")
    @classmethod
    def check_local_now(cls, value: datetime | None) -> datetime | None:
        return _require_local_time(value)


class ScenarioResponse(BaseModel):
    description: str
    offset_hours: int
    checkpoint_time: datetime
    cancellation_charge: float
    refund: float
    payment_deduction: float
    net_refund: float
    is_past: bool
    is_best_time: bool

    model_config = {"from_attributes": True}


class PaymentMethodResponse(BaseModel):
    code: str
    name: str
    deduction: float | None = None
    total: float | None = None


class TravelClassResponse(BaseModel):
    code: str
    name: str
    flat_rate: float


class CancellationAnalysis(BaseModel):
    reservation: ReservationResponse
    payment_method: PaymentMethodResponse
    evaluated_at: datetime
    advice: str
    scenarios: list[ScenarioResponse]
    best_scenario: ScenarioResponse | None = None
