from .weatherapi import WeatherAPIProvider

__all__ = ["WeatherAPIProvider"]
