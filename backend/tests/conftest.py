import pytest

from app.services.reservation import parse_reservation


@pytest.fixture
def pnr_record() -> dict:
    return {
        "Pnr": "2459481234",
        "TrainNo": "12951",
        "TrainName": "MUMBAI RAJDHANI",
        "Doj": "10-03-2025",
        "DepartureTime": "16:35",
        "From": "MMCT",
        "To": "NDLS",
        "Class": "2A",
        "BookingFare": "3845",
        "BookingDate": "01-03-2025",
        "PassengerStatus": [
            {"Number": 1, "BookingStatus": "CNF/A1/22", "CurrentStatus": "CNF", "Coach": "A1", "Berth": 22},
        ],
    }


@pytest.fixture
def snapshot(pnr_record):
    return parse_reservation(pnr_record)
