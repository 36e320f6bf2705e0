"""Static fallback payloads.

Served whenever the data service is not configured or fails, so the
dashboard always has something to render.
"""

from datetime import date

from .models import (
    CropHealth,
    CropRecommendation,
    PricePoint,
    SatelliteData,
    SoilProfile,
    YieldPrediction,
)

CROP_RECOMMENDATIONS = [
    CropRecommendation(id=1, name="Rice", confidence=0.92, soil_type="Clay Loam", season="Kharif"),
    CropRecommendation(id=2, name="Wheat", confidence=0.85, soil_type="Clay Loam", season="Rabi"),
    CropRecommendation(id=3, name="Cotton", confidence=0.78, soil_type="Clay Loam", season="Kharif"),
]

YIELD_PREDICTIONS = [
    YieldPrediction(id=1, crop="Rice", predicted_yield=4.5, probability=0.88),
    YieldPrediction(id=2, crop="Wheat", predicted_yield=3.8, probability=0.82),
    YieldPrediction(id=3, crop="Cotton", predicted_yield=2.2, probability=0.75),
]

PRICE_FORECASTS = [
    PricePoint(month=month, price=price)
    for month, price in [
        ("Jan", 1800), ("Feb", 1850), ("Mar", 1900), ("Apr", 1920),
        ("May", 1800), ("Jun", 1750), ("Jul", 1700), ("Aug", 1800),
        ("Sep", 1900), ("Oct", 2000), ("Nov", 1950), ("Dec", 1900),
    ]
]

SATELLITE_DATA = SatelliteData(
    ndvi=0.72,
    soil_moisture=65,
    last_updated=date(2024, 3, 28),
    health_status=CropHealth.EXCELLENT,
    image_url="https://example.com/satellite-image.jpg",
)

SOIL_PROFILE = SoilProfile(
    soil_type="Clay Loam",
    ph=6.8,
    nitrogen="Medium",
    phosphorus="Low",
    potassium="High",
    organic_matter="Medium",
)

# Mandi prices in rupees per quintal, attached to market questions
MARKET_PRICES = {
    "Rice": 2040,
    "Wheat": 2125,
    "Cotton": 6620,
    "Sugarcane": 315,
    "Mustard": 5450,
    "Potato": 1200,
}
