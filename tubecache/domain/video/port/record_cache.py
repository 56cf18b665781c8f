"""Port for the normalized-record cache."""

from abc import abstractmethod
from typing import Protocol

from tubecache.domain.shared.port import Port
from tubecache.domain.video.model.record import NormalizedRecord
from tubecache.domain.video.model.value import CacheStats


class RecordCache(Port, Protocol):
    """Key -> NormalizedRecord store with per-entry expiry."""

    @abstractmethod
    def get(self, key: str) -> NormalizedRecord | None: ...

    @abstractmethod
    def set(self, key: str, value: NormalizedRecord, ttl: float | None = None) -> None: ...

    @abstractmethod
    def stats(self) -> CacheStats: ...
