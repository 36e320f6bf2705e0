"""Unit tests for the weather module."""
from datetime import date

import httpx
import pytest
from hypothesis import given
from hypothesis import strategies as st

from smartkissan.errors import UpstreamError
from smartkissan.weather import (
    COMPASS_POINTS,
    WeatherAPIProvider,
    WeatherProvider,
    WeatherQuery,
    create_weather_provider,
    mock_weather,
    wind_direction,
)


class TestWindDirection:
    """Tests for the 16-point compass conversion."""

    @pytest.mark.parametrize(
        "degrees,expected",
        [
            (0, "N"),
            (360, "N"),
            (11.24, "N"),
            (11.25, "NNE"),
            (22.5, "NNE"),
            (45, "NE"),
            (90, "E"),
            (180, "S"),
            (200, "SSW"),
            (270, "W"),
            (348.75, "N"),
            (348.74, "NNW"),
        ],
    )
    def test_known_bearings(self, degrees: float, expected: str):
        """Test bearings on and around the point boundaries."""
        assert wind_direction(degrees) == expected

    @given(st.floats(min_value=0, max_value=720, allow_nan=False))
    def test_always_a_compass_point(self, degrees: float):
        """Property test: every bearing maps to one of the 16 labels."""
        assert wind_direction(degrees) in COMPASS_POINTS

    @given(st.integers(min_value=0, max_value=359))
    def test_full_turn_is_identity(self, degrees: int):
        """Property test: adding 360° does not change the label."""
        assert wind_direction(degrees) == wind_direction(degrees + 360)


class TestWeatherQuery:
    """Tests for WeatherQuery."""

    def test_coordinates_preferred(self):
        query = WeatherQuery(location="Ludhiana", latitude=30.9, longitude=75.85)
        assert query.to_q() == "30.9,75.85"

    def test_place_name(self):
        assert WeatherQuery(location="Ludhiana").to_q() == "Ludhiana"

    def test_empty_query(self):
        assert WeatherQuery().to_q() is None

    def test_half_coordinates_use_place_name(self):
        assert WeatherQuery(location="Pune", latitude=18.5).to_q() == "Pune"


class TestMockWeather:
    """Tests for the fallback weather payload."""

    def test_mock_values(self):
        snapshot = mock_weather()

        assert snapshot.location == "Punjab, India"
        assert snapshot.current.temperature == 28
        assert snapshot.current.humidity == 65
        assert snapshot.current.description == "Partly cloudy"
        assert [d.day for d in snapshot.forecast] == [
            "Today", "Tomorrow", "Wednesday", "Thursday", "Friday"
        ]
        assert snapshot.total_forecast_rainfall() == 30

    def test_mock_uses_label(self):
        assert mock_weather("Mysuru").location == "Mysuru"


class TestWeatherProvider:
    """Tests for the provider interface and factory."""

    def test_provider_is_abstract(self):
        """Test that WeatherProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            WeatherProvider()  # type: ignore

    def test_factory_creates_weatherapi(self):
        provider = create_weather_provider("weatherapi", api_key="k")
        assert isinstance(provider, WeatherAPIProvider)

    def test_factory_rejects_unknown(self):
        with pytest.raises(ValueError, match="Unsupported weather provider"):
            create_weather_provider("openweathermap")


class TestWeatherAPIProvider:
    """Tests for the WeatherAPI.com provider with a mocked HTTP transport."""

    @pytest.mark.asyncio
    async def test_request_encoding(self, weather_transport, weather_requests):
        """Test that forecast.json is called with key, q and days."""
        async with WeatherAPIProvider("secret", days=5, transport=weather_transport) as provider:
            await provider.get_weather(WeatherQuery(latitude=30.9, longitude=75.85))

        request = weather_requests[0]
        assert request.url.path == "/v1/forecast.json"
        assert request.url.params["key"] == "secret"
        assert request.url.params["q"] == "30.9,75.85"
        assert request.url.params["days"] == "5"

    @pytest.mark.asyncio
    async def test_normalization(self, weather_transport):
        """Test mapping of the upstream payload into a snapshot."""
        async with WeatherAPIProvider("secret", transport=weather_transport) as provider:
            snapshot = await provider.get_weather(WeatherQuery(location="Ludhiana"))

        assert snapshot.location == "Ludhiana"
        assert snapshot.region == "Punjab"
        assert snapshot.current.temperature == 31.0
        assert snapshot.current.humidity == 72
        assert snapshot.current.wind_direction == "SSW"
        assert snapshot.current.icon_url.startswith("https://cdn.weatherapi.com/")
        assert [d.day for d in snapshot.forecast] == ["Today", "Tomorrow", "Monday"]
        assert snapshot.forecast[0].date == date(2024, 6, 1)
        assert snapshot.total_forecast_rainfall() == 14.5

    @pytest.mark.asyncio
    async def test_missing_key_fails_fast(self, weather_transport, weather_requests):
        async with WeatherAPIProvider(None, transport=weather_transport) as provider:
            with pytest.raises(UpstreamError, match="API key"):
                await provider.get_weather(WeatherQuery(location="Ludhiana"))
        assert weather_requests == []

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"error": {}}))
        async with WeatherAPIProvider("bad", transport=transport) as provider:
            with pytest.raises(UpstreamError) as exc_info:
                await provider.get_weather(WeatherQuery(location="Ludhiana"))

        assert exc_info.value.status_code == 401
        assert exc_info.value.service == "weatherapi"

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"oops": True}))
        async with WeatherAPIProvider("k", transport=transport) as provider:
            with pytest.raises(UpstreamError, match="malformed"):
                await provider.get_weather(WeatherQuery(location="Ludhiana"))

    @pytest.mark.asyncio
    async def test_network_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        async with WeatherAPIProvider("k", transport=httpx.MockTransport(handler)) as provider:
            with pytest.raises(UpstreamError, match="request failed"):
                await provider.get_weather(WeatherQuery(location="Ludhiana"))
            assert await provider.probe() is False
