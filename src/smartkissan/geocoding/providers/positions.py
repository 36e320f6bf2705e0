"""Position sources.

A browser asks the device for its position; a Python client either trusts a
configured position or approximates it from the public IP address.
"""

from typing import Any

import httpx
from pydantic import BaseModel

from ...config import HTTP_TIMEOUT, IP_LOCATION_URL
from ...errors import GeolocationError
from ..base import PositionSource


class StaticPositionSource(PositionSource):
    """Returns a fixed coordinate pair, typically the saved default location."""

    def __init__(self, latitude: float, longitude: float):
        self._position = (latitude, longitude)

    async def current_position(self) -> tuple[float, float]:
        return self._position


class _IPLocation(BaseModel):
    status: str
    lat: float | None = None
    lon: float | None = None
    message: str | None = None


class IPPositionSource(PositionSource):
    """Approximate position from the ip-api.com lookup service."""

    def __init__(self, url: str = IP_LOCATION_URL, timeout: float = HTTP_TIMEOUT, **client_kwargs: Any):
        self._url = url
        self._client = httpx.AsyncClient(timeout=timeout, **client_kwargs)

    async def current_position(self) -> tuple[float, float]:
        try:
            response = await self._client.get(self._url, params={"fields": "status,message,lat,lon"})
            response.raise_for_status()
            body = _IPLocation.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            raise GeolocationError(f"IP lookup failed: {e!r}") from e

        if body.status != "success" or body.lat is None or body.lon is None:
            raise GeolocationError(body.message or "position unavailable")
        return body.lat, body.lon

    async def close(self) -> None:
        await self._client.aclose()
