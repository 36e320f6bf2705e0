from datetime import date

from .models import Season


def current_season(today: date | None = None) -> Season:
    """Return the cropping season for a date (today by default)."""
    month = (today or date.today()).month
    if 6 <= month <= 10:
        return Season.KHARIF
    if month in (4, 5):
        return Season.ZAID
    return Season.RABI
