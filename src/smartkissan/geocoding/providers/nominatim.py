from typing import Any

import httpx

from ...config import GEOCODING_URL, HTTP_TIMEOUT, USER_AGENT
from ...errors import UpstreamError
from ..base import ReverseGeocoder
from ..models import GeocodeResult, NominatimResponse


class NominatimGeocoder(ReverseGeocoder):
    """OpenStreetMap Nominatim reverse geocoder.

    Hidden design decisions:
    - Nominatim requires an identifying User-Agent on every request
    - Place name preference: city, then town, then village
    - Region preference: state, then county
    """

    service = "nominatim"

    def __init__(
        self,
        url: str = GEOCODING_URL,
        user_agent: str = USER_AGENT,
        timeout: float = HTTP_TIMEOUT,
        **client_kwargs: Any
    ):
        self._url = url
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            **client_kwargs
        )

    async def reverse(self, latitude: float, longitude: float) -> GeocodeResult:
        params = {
            "format": "json",
            "lat": latitude,
            "lon": longitude,
            "zoom": 10,
            "addressdetails": 1,
        }
        try:
            response = await self._client.get(self._url, params=params)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                self.service,
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(self.service, f"request failed: {e!r}") from e
        except ValueError as e:
            raise UpstreamError(self.service, f"malformed response: {e}") from e

        # Nominatim answers 200 with {"error": ...} for unknown coordinates
        if isinstance(body, dict) and "error" in body:
            raise UpstreamError(self.service, str(body["error"]))

        try:
            parsed = NominatimResponse.model_validate(body)
        except ValueError as e:
            raise UpstreamError(self.service, f"malformed response: {e}") from e

        address = parsed.address
        return GeocodeResult(
            display_name=parsed.display_name,
            location_name=address.city or address.town or address.village,
            region=address.state or address.county,
            country=address.country,
            country_code=address.country_code.upper() if address.country_code else None,
        )

    async def close(self) -> None:
        await self._client.aclose()
