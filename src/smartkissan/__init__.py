"""
SmartKissan: async client core for a farmer-facing dashboard.

Weather, crop advice, field analytics and a multilingual chat assistant,
each behind a module that hides one design decision: which upstream serves
the data, and what the farmer sees when it does not answer.
"""

__version__ = "0.1.0"

from .config import Settings
from .dispatcher import (
    Envelope,
    Provenance,
    RequestDispatcher,
    create_dispatcher,
)
from .errors import SmartKissanError, UpstreamError

__all__ = [
    "Envelope",
    "Provenance",
    "RequestDispatcher",
    "Settings",
    "SmartKissanError",
    "UpstreamError",
    "create_dispatcher",
]
