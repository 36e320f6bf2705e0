from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Provenance(str, Enum):
    """Where the data in an envelope came from."""

    LIVE = "live"            # Upstream service answered
    HEURISTIC = "heuristic"  # Computed locally from live inputs
    MOCK = "mock"            # Static fallback payload
    SYNTHETIC = "synthetic"  # Canned assistant reply


class Envelope(BaseModel, Generic[T]):
    """Uniform response wrapper returned by every dispatcher operation.

    ``success`` is true when the upstream call (or the local computation
    fed by it) produced the data; fallback payloads carry ``success=False``
    and the error that caused the fallback.
    """

    model_config = ConfigDict(frozen=True)

    success: bool = Field(description="Whether live or derived data was obtained")
    data: T = Field(description="Payload, live or fallback")
    source: Provenance = Field(description="Provenance of the payload")
    error: str | None = Field(default=None, description="Internal error behind a fallback")

    @property
    def is_fallback(self) -> bool:
        """True when the payload is mock or synthetic."""
        return self.source in (Provenance.MOCK, Provenance.SYNTHETIC)
