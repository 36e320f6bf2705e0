"""Agronomy helpers: crop heuristics, NDVI analytics, seasons and mock payloads."""

from .models import (
    CropHealth,
    CropRecommendation,
    NdviAnalysis,
    NdviPoint,
    PricePoint,
    SatelliteData,
    Season,
    SoilProfile,
    YieldPrediction,
)
from .ndvi import analyze_ndvi, classify_ndvi, health_recommendations, simulate_ndvi_series
from .recommend import recommend_crops
from .seasons import current_season

__all__ = [
    "CropHealth",
    "CropRecommendation",
    "NdviAnalysis",
    "NdviPoint",
    "PricePoint",
    "SatelliteData",
    "Season",
    "SoilProfile",
    "YieldPrediction",
    "analyze_ndvi",
    "classify_ndvi",
    "current_season",
    "health_recommendations",
    "recommend_crops",
    "simulate_ndvi_series",
]
