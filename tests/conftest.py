"""Pytest configuration and shared fixtures."""
import asyncio
import json
from collections.abc import Callable

import httpx
import pytest

from smartkissan.chat import ChatChannel, ChatTransport
from smartkissan.errors import TransportError
from smartkissan.storage import create_key_value_store


class FakeTransport(ChatTransport):
    """In-memory chat transport.

    Frames sent by the channel are recorded in ``sent`` (decoded). Replies
    are queued with ``push``; ``auto_reply`` answers every frame immediately.
    """

    def __init__(
        self,
        fail_connect: bool = False,
        gate: asyncio.Event | None = None,
        auto_reply: Callable[[dict], str | None] | None = None,
    ):
        self.fail_connect = fail_connect
        self.gate = gate
        self.auto_reply = auto_reply
        self.sent: list[dict] = []
        self.inbox: asyncio.Queue[str | None] = asyncio.Queue()
        self.connected = False
        self.closed = False

    async def connect(self) -> None:
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_connect:
            raise TransportError("connection refused")
        self.connected = True

    async def send(self, data: str) -> None:
        if self.closed:
            raise TransportError("closed")
        frame = json.loads(data)
        self.sent.append(frame)
        if self.auto_reply is not None:
            text = self.auto_reply(frame)
            if text is not None:
                self.push({"id": frame["id"], "response": text})

    async def receive(self) -> str:
        item = await self.inbox.get()
        if item is None:
            raise TransportError("closed")
        return item

    async def close(self) -> None:
        self.closed = True
        self.inbox.put_nowait(None)

    def push(self, frame: dict) -> None:
        self.inbox.put_nowait(json.dumps(frame, ensure_ascii=False))


def make_channel(reply_timeout: float = 1.0, **transport_kwargs) -> tuple[ChatChannel, list[FakeTransport]]:
    """Create a channel whose transports are recorded in the returned list."""
    transports: list[FakeTransport] = []

    def factory() -> FakeTransport:
        transport = FakeTransport(**transport_kwargs)
        transports.append(transport)
        return transport

    return ChatChannel(factory, reply_timeout=reply_timeout), transports


async def wait_for_sent(transport: FakeTransport, count: int = 1) -> dict:
    """Yield to the loop until ``count`` frames were sent; return the last one."""
    for _ in range(100):
        if len(transport.sent) >= count:
            return transport.sent[-1]
        await asyncio.sleep(0)
    raise AssertionError("frame was never sent")


@pytest.fixture
def memory_store():
    """Return an in-memory key-value store (needs no connect)."""
    return create_key_value_store("memory")


@pytest.fixture
def weatherapi_payload():
    """Return a WeatherAPI.com forecast.json body."""
    def day(date: str, avg: float, rain: float, text: str) -> dict:
        return {
            "date": date,
            "day": {
                "avgtemp_c": avg,
                "mintemp_c": avg - 6,
                "maxtemp_c": avg + 6,
                "totalprecip_mm": rain,
                "avghumidity": 70,
                "daily_chance_of_rain": 40,
                "condition": {"text": text, "icon": "//cdn.weatherapi.com/weather/64x64/day/176.png"},
            },
        }

    return {
        "location": {
            "name": "Ludhiana",
            "region": "Punjab",
            "country": "India",
            "lat": 30.9,
            "lon": 75.85,
        },
        "current": {
            "temp_c": 31.0,
            "humidity": 72,
            "precip_mm": 0.4,
            "feelslike_c": 35.2,
            "wind_kph": 11.2,
            "wind_degree": 200,
            "condition": {"text": "Patchy rain possible", "icon": "//cdn.weatherapi.com/weather/64x64/day/176.png"},
        },
        "forecast": {
            "forecastday": [
                day("2024-06-01", 31.0, 2.5, "Patchy rain possible"),
                day("2024-06-02", 30.0, 0.0, "Sunny"),
                day("2024-06-03", 29.0, 12.0, "Moderate rain"),
            ]
        },
    }


@pytest.fixture
def weather_requests():
    """Requests received by ``weather_transport``."""
    return []


@pytest.fixture
def weather_transport(weatherapi_payload, weather_requests):
    """Return an httpx mock transport serving the forecast payload."""
    def handler(request: httpx.Request) -> httpx.Response:
        weather_requests.append(request)
        return httpx.Response(200, json=weatherapi_payload)

    return httpx.MockTransport(handler)


@pytest.fixture
def nominatim_body():
    """Return a Nominatim reverse-geocoding body."""
    return {
        "display_name": "Ludhiana, Ludhiana (West) Tahsil, Punjab, 141001, India",
        "address": {
            "city": "Ludhiana",
            "county": "Ludhiana (West) Tahsil",
            "state": "Punjab",
            "country": "India",
            "country_code": "in",
        },
    }
