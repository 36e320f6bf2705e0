"""Typed result for integration calls.

Integration code returns ``Ok`` or ``Err`` instead of raising, so the
dispatcher can log the internal error and substitute fallback data in one
place.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from ..errors import UpstreamError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful integration call."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed integration call."""

    error: UpstreamError

    @property
    def ok(self) -> bool:
        return False


Result = Ok[T] | Err
