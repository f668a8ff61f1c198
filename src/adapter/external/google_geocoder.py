"""Google Geocoding API adapter.

Implements GeocoderPort by resolving a postal address to coordinates.

API Documentation: https://developers.google.com/maps/documentation/geocoding
"""

import logging

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from domain.model.errors import GeocodeError
from domain.model.place import Location

logger = logging.getLogger(__name__)

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
API_TIMEOUT_SECONDS = 5.0

ADDRESS_NOT_FOUND_MESSAGE = "Could not find location for the specified address."


class GoogleGeocoderAdapter:
    """Adapter that geocodes addresses with the Google Geocoding API."""

    def __init__(self, api_key: str | None, timeout: float = API_TIMEOUT_SECONDS):
        self.api_key = api_key
        self.timeout = timeout

    def get_coordinates(self, address: str) -> Location:
        if not self.api_key:
            logger.error("GOOGLE_API_KEY not configured, cannot geocode")
            raise GeocodeError("Geocoding is not available, please try again later.", 500)

        params = {"address": address, "key": self.api_key}
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = _fetch_with_retry(client, params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Geocoding API error", extra={"status": e.response.status_code})
            raise GeocodeError("Geocoding is not available, please try again later.", 500) from e
        except httpx.RequestError as e:
            logger.error("Geocoding request failed", extra={"error": str(e)})
            raise GeocodeError("Geocoding is not available, please try again later.", 500) from e
        except ValueError as e:
            logger.error("Geocoding API returned invalid JSON", extra={"error": str(e)})
            raise GeocodeError("Geocoding is not available, please try again later.", 500) from e

        return _parse_location(data, address)


def _parse_location(data: dict, address: str) -> Location:
    status = data.get("status")
    results = data.get("results") or []
    if status != "OK" or not results:
        logger.info("Address could not be geocoded", extra={"address": address, "geocodeStatus": status})
        raise GeocodeError(ADDRESS_NOT_FOUND_MESSAGE, 422)

    try:
        coordinates = results[0]["geometry"]["location"]
        return Location(lat=float(coordinates["lat"]), lng=float(coordinates["lng"]))
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Unexpected geocoding response shape", extra={"address": address})
        raise GeocodeError(ADDRESS_NOT_FOUND_MESSAGE, 422) from e


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
def _fetch_with_retry(client: httpx.Client, params: dict) -> httpx.Response:
    """Fetch geocoding result with automatic retry on transient failures."""
    return client.get(GOOGLE_GEOCODE_URL, params=params)
