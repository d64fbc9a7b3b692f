from datetime import datetime

import pytest

from app.services.reservation import ReservationDataError, parse_reservation


def test_parse_record(snapshot):
    assert snapshot.pnr == "2459481234"
    assert snapshot.travel_class == "2A"
    assert snapshot.fare == 3845.0
    assert snapshot.departure_time == datetime(2025, 3, 10, 16, 35)
    assert snapshot.booking_time == datetime(2025, 3, 1)
    assert snapshot.passenger_count == 1
    assert snapshot.passengers[0].booking_status == "CNF/A1/22"
    assert snapshot.passengers[0].berth == 22


def test_booking_date_with_time(pnr_record):
    pnr_record["BookingDate"] = "01-03-2025 09:15"
    assert parse_reservation(pnr_record).booking_time == datetime(2025, 3, 1, 9, 15)


def test_passenger_serial_defaults_to_position(pnr_record):
    pnr_record["PassengerStatus"] = [
        {"BookingStatus": "WL/12", "CurrentStatus": "WL/3"},
        {"BookingStatus": "WL/13", "CurrentStatus": "WL/4", "Berth": 0},
    ]
    snapshot = parse_reservation(pnr_record)
    assert [p.serial_number for p in snapshot.passengers] == [1, 2]
    assert snapshot.passengers[1].berth is None
    assert snapshot.passenger_count == 2


def test_class_code_normalized(pnr_record):
    pnr_record["Class"] = " sl"
    assert parse_reservation(pnr_record).travel_class == "SL"


@pytest.mark.parametrize("key,value", [
    ("Doj", "2025/03/10"),
    ("DepartureTime", "4pm"),
    ("BookingDate", "yesterday"),
    ("BookingFare", "abc"),
    ("BookingFare", "-5"),
    ("PassengerStatus", []),
    ("PassengerStatus", None),
    ("Class", ""),
])
def test_bad_fields_fail_fast(pnr_record, key, value):
    pnr_record[key] = value
    with pytest.raises(ReservationDataError):
        parse_reservation(pnr_record)


def test_missing_departure_time(pnr_record):
    del pnr_record["DepartureTime"]
    with pytest.raises(ReservationDataError, match="DepartureTime"):
        parse_reservation(pnr_record)


def test_non_numeric_serial_number(pnr_record):
    pnr_record["PassengerStatus"][0]["Number"] = "P1"
    with pytest.raises(ReservationDataError, match="Passenger 1 has invalid serial number"):
        parse_reservation(pnr_record)


@pytest.mark.parametrize("fare", ["nan", "inf", "-inf", "NaN"])
def test_non_finite_fare(pnr_record, fare):
    pnr_record["BookingFare"] = fare
    with pytest.raises(ReservationDataError):
        parse_reservation(pnr_record)
