"""
MapQuest geocoding client.

Resolves bootcamp addresses and zipcodes to coordinates through the MapQuest
Geocoding API (``/geocoding/v1/address``).
"""

import logging
from typing import Any, Dict, Optional

import httpx

from bootcamp_api.core.config import Settings
from bootcamp_api.core.errors import ExternalServiceError
from bootcamp_api.core.models import GeoLocation

logger = logging.getLogger(__name__)


class MapQuestGeocoder:
    """
    Geocoder backed by the MapQuest HTTP API.

    Implements the IGeocoder interface.
    """

    def __init__(self, api_key: str, base_url: str, timeout: float = 10.0):
        """
        Initialize the geocoder.

        Args:
            api_key: MapQuest consumer key
            base_url: Address endpoint URL
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "MapQuestGeocoder":
        return cls(
            api_key=settings.geocoder_api_key,
            base_url=settings.geocoder_url,
            timeout=settings.geocoder_timeout,
        )

    def geocode(self, address: str) -> Optional[GeoLocation]:
        """
        Look up an address or zipcode.

        Args:
            address: Free-form address

        Returns:
            The first match, or None when MapQuest finds nothing

        Raises:
            ExternalServiceError: On transport errors or non-2xx responses
        """
        params = {"key": self.api_key, "location": address, "maxResults": 1}

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(self.base_url, params=params)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Geocoding '%s' failed: %s", address, e)
            raise ExternalServiceError("Geocoding service is unavailable") from e

        return self.parse_response(payload)

    @staticmethod
    def parse_response(payload: Dict[str, Any]) -> Optional[GeoLocation]:
        """Convert a MapQuest response body to the first location it holds."""
        results = payload.get("results") or []
        locations = results[0].get("locations") if results else None
        if not locations:
            return None

        match = locations[0]
        lat_lng = match.get("latLng") or {}
        if lat_lng.get("lat") is None or lat_lng.get("lng") is None:
            return None

        street = match.get("street") or None
        city = match.get("adminArea5") or None
        state = match.get("adminArea3") or None
        zipcode = match.get("postalCode") or None
        country = match.get("adminArea1") or None

        state_zip = " ".join(part for part in (state, zipcode) if part)
        formatted = ", ".join(part for part in (street, city, state_zip, country) if part)

        return GeoLocation(
            latitude=lat_lng["lat"],
            longitude=lat_lng["lng"],
            formatted_address=formatted or None,
            street=street,
            city=city,
            state=state,
            zipcode=zipcode,
            country=country,
        )
