"""Weather-driven crop recommendation heuristic.

Used when no recommendation service is configured. The thresholds are the
agronomic rule of thumb the dashboard has always shown; boundary values
fall to the cooler bracket.
"""

WARM_HUMID_CROPS = ("Rice", "Cotton", "Sugarcane")
MILD_CROPS = ("Wheat", "Barley", "Mustard")
COOL_CROPS = ("Potato", "Peas", "Beans")
COLD_CROPS = ("Cabbage", "Cauliflower", "Lettuce")


def recommend_crops(temperature: float, humidity: float) -> tuple[str, ...]:
    """Pick a crop list for the current temperature and humidity.

    Args:
        temperature: Air temperature in degrees Celsius
        humidity: Relative humidity in percent

    Returns:
        One of the four fixed crop lists
    """
    if temperature > 25 and humidity > 60:
        return WARM_HUMID_CROPS
    if 20 < temperature <= 25:
        return MILD_CROPS
    if 15 < temperature <= 20:
        return COOL_CROPS
    return COLD_CROPS
