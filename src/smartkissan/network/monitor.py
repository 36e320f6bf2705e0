"""Connectivity tracking.

Combines connectivity events reported by the host application with an
active reachability probe. The dispatcher consults the monitor before every
upstream call and goes straight to fallback data while offline.
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx

from ..config import PROBE_TIMEOUT, PROBE_URL
from .models import NetworkStatus

logger = logging.getLogger(__name__)

StatusListener = Callable[[NetworkStatus], None]


class NetworkMonitor:
    """Two-state connectivity signal with change notifications."""

    def __init__(
        self,
        probe_url: str = PROBE_URL,
        timeout: float = PROBE_TIMEOUT,
        initial: NetworkStatus = NetworkStatus.ONLINE,
        **client_kwargs: Any
    ):
        self._probe_url = probe_url
        self._status = initial
        self._listeners: list[StatusListener] = []
        self._client = httpx.AsyncClient(timeout=timeout, **client_kwargs)

    @property
    def status(self) -> NetworkStatus:
        return self._status

    @property
    def is_online(self) -> bool:
        return self._status is NetworkStatus.ONLINE

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a listener for status changes.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def report_connectivity(self, online: bool) -> None:
        """Record an online/offline event from the host environment."""
        self._set(NetworkStatus.ONLINE if online else NetworkStatus.OFFLINE)

    async def probe(self) -> NetworkStatus:
        """Actively check reachability and update the status."""
        try:
            response = await self._client.get(self._probe_url)
            reachable = response.status_code < 500
        except httpx.HTTPError as e:
            logger.debug("Reachability probe failed: %r", e)
            reachable = False
        self._set(NetworkStatus.ONLINE if reachable else NetworkStatus.OFFLINE)
        return self._status

    def _set(self, status: NetworkStatus) -> None:
        if status is self._status:
            return
        logger.info("Network status changed: %s -> %s", self._status.value, status.value)
        self._status = status
        for listener in list(self._listeners):
            listener(status)

    async def close(self) -> None:
        await self._client.aclose()
