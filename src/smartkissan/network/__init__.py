from .models import ExternalAPIDescriptor, NetworkStatus
from .monitor import NetworkMonitor
from .registry import ExternalAPIRegistry

__all__ = [
    "ExternalAPIDescriptor",
    "ExternalAPIRegistry",
    "NetworkMonitor",
    "NetworkStatus",
]
