"""Data models for agronomy payloads.

These are the shapes the dashboard renders, independent of whether the data
came from the data service, a local heuristic or the mock tables.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Season(str, Enum):
    """Indian cropping seasons."""

    KHARIF = "Kharif"  # Monsoon crops, June-October
    RABI = "Rabi"      # Winter crops, November-March
    ZAID = "Zaid"      # Summer crops, April-May


class CropHealth(str, Enum):
    """Crop health bands derived from NDVI."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class CropRecommendation(BaseModel):
    """A crop suggested for the farmer's field."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    soil_type: str | None = Field(default=None, alias="soilType")
    season: str | None = None


class YieldPrediction(BaseModel):
    """Predicted yield for a crop."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    crop: str
    predicted_yield: float = Field(alias="predictedYield")
    unit: str = "tons/ha"
    probability: float = Field(ge=0.0, le=1.0)


class PricePoint(BaseModel):
    """Forecast market price for one month, in rupees per quintal."""

    month: str
    price: float


class SatelliteData(BaseModel):
    """Field analytics derived from satellite imagery."""

    model_config = ConfigDict(populate_by_name=True)

    ndvi: float = Field(ge=0.0, le=1.0, description="Normalized Difference Vegetation Index")
    soil_moisture: float = Field(alias="soilMoisture", description="Soil moisture, percent")
    last_updated: date = Field(alias="lastUpdated")
    health_status: CropHealth = Field(alias="healthStatus")
    image_url: str | None = Field(default=None, alias="imageUrl")


class NdviPoint(BaseModel):
    """One sample of an NDVI time series."""

    date: date
    ndvi: float = Field(ge=0.0, le=1.0)
    temperature: float
    precipitation: float


class SoilProfile(BaseModel):
    """Soil test summary attached to crop questions."""

    soil_type: str
    ph: float
    nitrogen: str
    phosphorus: str
    potassium: str
    organic_matter: str


class NdviAnalysis(BaseModel):
    """NDVI series for a field with the health assessment of its latest sample."""

    series: list[NdviPoint]
    current_ndvi: float | None = None
    health: CropHealth | None = None
    recommendations: list[str] = Field(default_factory=list)
    recent_average: float | None = Field(
        default=None,
        description="Mean NDVI of the three most recent samples"
    )
