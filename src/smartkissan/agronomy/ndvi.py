"""NDVI health assessment and simulated NDVI time series.

Until an Earth Engine integration exists, fields get a synthetic series with
a yearly seasonal cycle and bounded noise.
"""

from datetime import date, timedelta

import numpy as np

from .models import CropHealth, NdviAnalysis, NdviPoint

_RECOMMENDATIONS = {
    CropHealth.EXCELLENT: [
        "Maintain current irrigation schedule",
        "Continue regular monitoring for pests",
        "Prepare for optimal harvest timing",
    ],
    CropHealth.GOOD: [
        "Consider slight increase in irrigation frequency",
        "Monitor for early signs of nutrient deficiency",
        "Apply foliar fertilizer if leaves show yellowing",
    ],
    CropHealth.FAIR: [
        "Increase irrigation immediately",
        "Apply balanced NPK fertilizer",
        "Check for pest infestations or disease",
        "Consider soil testing for deficiencies",
    ],
    CropHealth.POOR: [
        "Urgent intervention required",
        "Check irrigation system for failures",
        "Test soil for salinity or contamination",
        "Consider consultation with agricultural extension",
    ],
}


def classify_ndvi(ndvi: float) -> CropHealth:
    """Map an NDVI value to a crop health band."""
    if ndvi >= 0.7:
        return CropHealth.EXCELLENT
    if ndvi >= 0.5:
        return CropHealth.GOOD
    if ndvi >= 0.3:
        return CropHealth.FAIR
    return CropHealth.POOR


def health_recommendations(health: CropHealth) -> list[str]:
    """Return the field actions suggested for a health band."""
    return list(_RECOMMENDATIONS[health])


def simulate_ndvi_series(
    end: date | None = None,
    span_days: int = 180,
    step_days: int = 10,
    seed: int | None = None,
) -> list[NdviPoint]:
    """Generate a plausible NDVI series ending at ``end``.

    NDVI follows a sine over the day of year (0.4 to 0.8) plus up to 0.05 of
    noise, clamped to [0, 1]. Temperature follows the same cycle around 20°C
    and precipitation is heavier between day 150 and day 250 (monsoon).

    Args:
        end: Last sample date (today by default)
        span_days: Days covered by the series
        step_days: Days between samples
        seed: Seed for reproducible noise

    Returns:
        Samples in chronological order
    """
    end = end or date.today()
    rng = np.random.default_rng(seed)

    offsets = np.arange(span_days, -1, -step_days)
    dates = [end - timedelta(days=int(offset)) for offset in offsets]
    day_of_year = np.array([d.timetuple().tm_yday for d in dates], dtype=np.float64)
    phase = np.sin(day_of_year / 365.0 * 2.0 * np.pi)

    ndvi = np.clip(phase * 0.2 + 0.6 + rng.uniform(-0.05, 0.05, len(dates)), 0.0, 1.0)
    temperature = 20.0 + phase * 10.0 + rng.uniform(-2.0, 2.0, len(dates))
    monsoon = (day_of_year > 150) & (day_of_year < 250)
    precipitation = np.maximum(
        0.0, np.where(monsoon, 12.0, 3.0) + rng.uniform(-5.0, 5.0, len(dates))
    )

    return [
        NdviPoint(
            date=d,
            ndvi=round(float(n), 2),
            temperature=round(float(t), 1),
            precipitation=round(float(p), 1),
        )
        for d, n, t, p in zip(dates, ndvi, temperature, precipitation)
    ]


def analyze_ndvi(series: list[NdviPoint]) -> NdviAnalysis:
    """Assess field health from the latest sample of an NDVI series."""
    if not series:
        return NdviAnalysis(series=[])

    latest = series[-1].ndvi
    health = classify_ndvi(latest)
    recent = series[-3:]
    return NdviAnalysis(
        series=series,
        current_ndvi=latest,
        health=health,
        recommendations=health_recommendations(health),
        recent_average=round(sum(p.ndvi for p in recent) / len(recent), 2),
    )
