"""IRCTC PNR client — adapter for the RapidAPI PNR status endpoint with mock fallback."""

import asyncio
import hashlib
import logging
import random
from datetime import datetime, timedelta

import httpx

from app.config import settings
from app.services.reservation import ReservationSnapshot, parse_reservation

logger = logging.getLogger(__name__)

PNR_STATUS_PATH = "/api/v3/getPNRStatus"

FETCH_FAILED = "Failed to fetch PNR details. Please try again."
REQUEST_FAILED = "An error occurred while fetching PNR details."

# Mock data pool
MOCK_TRAINS = [
    ("12951", "MUMBAI RAJDHANI", "MMCT", "NDLS", "16:35"),
    ("12002", "NDLS SHATABDI", "NDLS", "RKMP", "06:00"),
    ("12627", "KARNATAKA EXP", "SBC", "NDLS", "19:20"),
    ("22691", "RAJDHANI EXP", "SBC", "NZM", "20:00"),
    ("12259", "DURONTO EXP", "SDAH", "BKN", "18:50"),
]
MOCK_FARES = {"1A": 4850, "2A": 3845, "3A": 2710, "CC": 1265, "SL": 720, "2S": 235}
MOCK_COACH_PREFIX = {"1A": "H", "2A": "A", "3A": "B", "CC": "C", "SL": "S", "2S": "D"}


class PNRLookupError(Exception):
    """The upstream PNR service failed or reported that the PNR could not be fetched."""


class IRCTCClient:
    """Adapter for the IRCTC PNR status API on RapidAPI."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        retry_backoff: float = 0.5,
    ):
        self._api_key = settings.rapidapi_key if api_key is None else api_key
        self._base_url = base_url or settings.irctc_base_url
        self._timeout = timeout or settings.pnr_http_timeout
        self._max_retries = settings.pnr_max_retries if max_retries is None else max_retries
        self._transport = transport
        self._retry_backoff = retry_backoff
        self._client: httpx.AsyncClient | None = None
        self._use_mock = not self._api_key

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={
                    "x-rapidapi-key": self._api_key,
                    "x-rapidapi-host": settings.irctc_host,
                },
            )
        return self._client

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_pnr_status(self, pnr: str) -> dict:
        """Fetch the raw PNR status envelope ({"status", "message", "data"})."""
        if self._use_mock:
            return self._generate_mock_status(pnr)

        client = await self._get_client()
        attempts = self._max_retries + 1
        for attempt in range(attempts):
            last = attempt == attempts - 1
            try:
                resp = await client.get(PNR_STATUS_PATH, params={"pnrNumber": pnr})
                if (resp.status_code == 429 or resp.status_code >= 500) and not last:
                    logger.warning(f"IRCTC PNR {pnr}: HTTP {resp.status_code}, retrying")
                    await asyncio.sleep(self._retry_backoff * 2 ** attempt)
                    continue
                resp.raise_for_status()
                payload = resp.json()
                if not isinstance(payload, dict):
                    raise PNRLookupError(REQUEST_FAILED)
                return payload
            except httpx.HTTPStatusError as e:
                logger.error(f"IRCTC PNR {pnr}: HTTP {e.response.status_code}")
                raise PNRLookupError(REQUEST_FAILED) from e
            except httpx.RequestError as e:
                logger.error(f"IRCTC PNR {pnr} request error: {e}")
                if last:
                    raise PNRLookupError(REQUEST_FAILED) from e
                await asyncio.sleep(self._retry_backoff * 2 ** attempt)
            except ValueError as e:
                logger.error(f"IRCTC PNR {pnr}: invalid JSON response: {e}")
                raise PNRLookupError(REQUEST_FAILED) from e

        raise PNRLookupError(REQUEST_FAILED)

    async def fetch_reservation(self, pnr: str) -> ReservationSnapshot:
        """Fetch and normalize a PNR into a reservation snapshot."""
        envelope = await self.get_pnr_status(pnr)
        if not envelope.get("status") or not isinstance(envelope.get("data"), dict):
            message = envelope.get("message") or FETCH_FAILED
            logger.info(f"IRCTC PNR {pnr} not fetched: {message}")
            raise PNRLookupError(message if isinstance(message, str) else FETCH_FAILED)

        data = dict(envelope["data"])
        data.setdefault("Pnr", pnr)
        return parse_reservation(data)

    def _generate_mock_status(self, pnr: str) -> dict:
        """Generate a realistic, deterministic PNR record for demo mode."""
        seed = int(hashlib.md5(pnr.encode()).hexdigest()[:8], 16)
        rng = random.Random(seed)

        train_no, train_name, origin, dest, dep_time = rng.choice(MOCK_TRAINS)
        travel_class = rng.choice(list(MOCK_FARES))
        passenger_count = rng.randint(1, 4)

        today = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
        journey = today + timedelta(days=rng.randint(1, 30))
        booked = today - timedelta(days=rng.randint(0, 20))

        passengers = []
        for i in range(passenger_count):
            coach = f"{MOCK_COACH_PREFIX[travel_class]}{rng.randint(1, 9)}"
            berth = rng.randint(1, 72)
            status = f"CNF/{coach}/{berth}"
            passengers.append({
                "Number": i + 1,
                "BookingStatus": status,
                "CurrentStatus": "CNF",
                "Coach": coach,
                "Berth": berth,
            })

        return {
            "status": True,
            "message": "Success",
            "data": {
                "Pnr": pnr,
                "TrainNo": train_no,
                "TrainName": train_name,
                "Doj": journey.strftime("%d-%m-%Y"),
                "DepartureTime": dep_time,
                "From": origin,
                "To": dest,
                "Class": travel_class,
                "BookingFare": str(MOCK_FARES[travel_class] * passenger_count),
                "BookingDate": booked.strftime("%d-%m-%Y"),
                "PassengerStatus": passengers,
            },
        }


# Singleton
irctc_client = IRCTCClient()
