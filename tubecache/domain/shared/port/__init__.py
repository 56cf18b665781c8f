"""Base type for domain ports (interfaces implemented by infrastructure)."""

from typing import Protocol


class Port(Protocol):
    """Marker base for ports. Concrete adapters live under tubecache.infrastructure."""
