import asyncio

import httpx
import pytest

from app.services.irctc_client import IRCTCClient, PNRLookupError
from app.services.reservation import ReservationDataError


def _client(handler, max_retries=1) -> IRCTCClient:
    return IRCTCClient(
        api_key="test-key",
        base_url="https://irctc.test",
        max_retries=max_retries,
        transport=httpx.MockTransport(handler),
        retry_backoff=0,
    )


def test_fetch_reservation(pnr_record):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": True, "message": "Success", "data": pnr_record})

    snapshot = asyncio.run(_client(handler).fetch_reservation("2459481234"))

    assert snapshot.fare == 3845.0
    assert snapshot.train_name == "MUMBAI RAJDHANI"
    assert seen[0].url.path == "/api/v3/getPNRStatus"
    assert seen[0].url.params["pnrNumber"] == "2459481234"
    assert seen[0].headers["x-rapidapi-key"] == "test-key"
    assert "x-rapidapi-host" in seen[0].headers


def test_upstream_status_false():
    def handler(request):
        return httpx.Response(200, json={"status": False, "message": "PNR No. is not valid", "data": None})

    with pytest.raises(PNRLookupError, match="PNR No. is not valid"):
        asyncio.run(_client(handler).fetch_reservation("1111111111"))


def test_upstream_status_false_without_message():
    def handler(request):
        return httpx.Response(200, json={"status": False})

    with pytest.raises(PNRLookupError, match="Failed to fetch PNR details"):
        asyncio.run(_client(handler).fetch_reservation("1111111111"))


def test_malformed_record_fails_fast(pnr_record):
    pnr_record["Doj"] = "not-a-date"

    def handler(request):
        return httpx.Response(200, json={"status": True, "data": pnr_record})

    with pytest.raises(ReservationDataError):
        asyncio.run(_client(handler).fetch_reservation("2459481234"))


def test_retries_once_on_server_error(pnr_record):
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(503)
        return httpx.Response(200, json={"status": True, "data": pnr_record})

    snapshot = asyncio.run(_client(handler).fetch_reservation("2459481234"))
    assert snapshot.pnr == "2459481234"
    assert len(calls) == 2


def test_gives_up_after_single_retry():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500)

    with pytest.raises(PNRLookupError):
        asyncio.run(_client(handler).get_pnr_status("2459481234"))
    assert len(calls) == 2


def test_retries_transport_errors():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PNRLookupError, match="An error occurred"):
        asyncio.run(_client(handler).get_pnr_status("2459481234"))
    assert len(calls) == 2


def test_client_error_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(403, json={"message": "You are not subscribed to this API."})

    with pytest.raises(PNRLookupError):
        asyncio.run(_client(handler).get_pnr_status("2459481234"))
    assert len(calls) == 1


def test_invalid_json():
    def handler(request):
        return httpx.Response(200, content=b"<html>bad gateway</html>")

    with pytest.raises(PNRLookupError):
        asyncio.run(_client(handler).get_pnr_status("2459481234"))


def test_mock_mode_is_deterministic():
    client = IRCTCClient(api_key="")
    first = asyncio.run(client.get_pnr_status("2459481234"))
    second = asyncio.run(client.get_pnr_status("2459481234"))
    assert first == second
    assert first["status"] is True

    snapshot = asyncio.run(client.fetch_reservation("2459481234"))
    assert snapshot.pnr == "2459481234"
    assert snapshot.passenger_count == len(first["data"]["PassengerStatus"])
