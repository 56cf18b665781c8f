"""Value types for video lookups."""

from enum import StrEnum

from tubecache.domain.shared.model.value import ValueObject
from tubecache.domain.video.model.record import NormalizedRecord

CACHE_KEY_PREFIX = "video:"


def cache_key(video_id: str) -> str:
    """Deterministic cache key for a video identifier."""
    return f"{CACHE_KEY_PREFIX}{video_id}"


class LookupSource(StrEnum):
    """Where a returned record came from."""

    CACHE = "cache"
    UPSTREAM = "upstream"
    FALLBACK = "fallback"


class FailurePolicy(StrEnum):
    """How upstream failures are surfaced. Chosen once per deployment."""

    ERROR = "error"  # non-200 with {error, message, videoId}
    FALLBACK = "fallback"  # 200 with the fallback record


class VideoLookup(ValueObject):
    """A record together with the path that produced it."""

    video_id: str
    source: LookupSource
    record: NormalizedRecord


class CacheStats(ValueObject):
    """Counters for the record cache since process start."""

    keys: int
    hits: int
    misses: int
    sets: int
    expired: int
    default_ttl: float
