from .models import CurrentConditions, ForecastDay, WeatherSnapshot


def mock_weather(location: str = "Punjab, India") -> WeatherSnapshot:
    """Static weather payload used when the provider is unreachable."""
    return WeatherSnapshot(
        location=location,
        current=CurrentConditions(
            temperature=28,
            humidity=65,
            description="Partly cloudy",
            rainfall=0,
        ),
        forecast=[
            ForecastDay(day="Today", temperature=28, rainfall=0, description="Partly cloudy"),
            ForecastDay(day="Tomorrow", temperature=29, rainfall=0, description="Sunny"),
            ForecastDay(day="Wednesday", temperature=27, rainfall=10, description="Light rain"),
            ForecastDay(day="Thursday", temperature=26, rainfall=15, description="Rain"),
            ForecastDay(day="Friday", temperature=28, rainfall=5, description="Light rain"),
        ],
    )
