"""Registry of upstream integrations and their liveness."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from .models import ExternalAPIDescriptor

logger = logging.getLogger(__name__)

Probe = Callable[[], Awaitable[bool]]


class ExternalAPIRegistry:
    """Tracks which upstream APIs are currently reachable.

    Each descriptor is paired with a lightweight probe; ``refresh`` runs all
    probes concurrently and records the outcome. A probe that raises counts
    as unavailable.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[ExternalAPIDescriptor, Probe]] = {}

    def register(self, descriptor: ExternalAPIDescriptor, probe: Probe) -> None:
        self._entries[descriptor.id] = (descriptor, probe)

    def get(self, api_id: str) -> ExternalAPIDescriptor | None:
        entry = self._entries.get(api_id)
        return entry[0] if entry else None

    def descriptors(self) -> list[ExternalAPIDescriptor]:
        return [descriptor for descriptor, _ in self._entries.values()]

    async def refresh(self) -> list[ExternalAPIDescriptor]:
        """Probe every registered API and update its availability flag."""
        ids = list(self._entries)
        outcomes = await asyncio.gather(
            *(self._entries[api_id][1]() for api_id in ids),
            return_exceptions=True,
        )

        now = datetime.now(timezone.utc)
        for api_id, outcome in zip(ids, outcomes):
            descriptor, probe = self._entries[api_id]
            if isinstance(outcome, BaseException):
                logger.warning("Probe for %s raised: %r", api_id, outcome)
                available = False
            else:
                available = bool(outcome)
            self._entries[api_id] = (
                descriptor.model_copy(update={"is_available": available, "last_checked": now}),
                probe,
            )
        return self.descriptors()
