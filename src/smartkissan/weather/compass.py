import math

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def wind_direction(degrees: float) -> str:
    """Convert a wind bearing in degrees to a 16-point compass label.

    Each point covers 22.5°; bearings round half up to the nearest point and
    wrap around, so 360° is "N" again.
    """
    index = math.floor(degrees / 22.5 + 0.5) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]
