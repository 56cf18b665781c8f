import asyncio
import logging
from dataclasses import field

import logfire

from tubecache.domain.shared.error import (
    GatewayError,
    MalformedPayloadError,
    UpstreamError,
    VideoFetchError,
)
from tubecache.domain.shared.service import Service
from tubecache.domain.video.model.fallback import build_fallback_record
from tubecache.domain.video.model.record import NormalizedRecord
from tubecache.domain.video.model.value import (
    FailurePolicy,
    LookupSource,
    VideoLookup,
    cache_key,
)
from tubecache.domain.video.port.record_cache import RecordCache
from tubecache.domain.video.port.video_info_fetcher import VideoInfoFetcher
from tubecache.domain.video.util.formatting import DEFAULT_FORMATTER, CountFormatter
from tubecache.domain.video.util.normalize import normalize

logger = logging.getLogger(__name__)


class VideoService(Service):
    """Cache-augmented lookup of normalized video records.

    Per request: look up the cache; on a hit return the cached record as is
    (no re-fetch, no TTL refresh). On a miss call the provider once, normalize
    the payload and store it unconditionally. A failed fetch never touches the
    cache and is surfaced according to ``failure_policy``.

    With ``single_flight`` enabled, concurrent misses for the same key share a
    single provider call. The shared fetch is shielded from caller
    cancellation, so an abandoned request may still populate the cache.
    """

    fetcher: VideoInfoFetcher
    cache: RecordCache
    failure_policy: FailurePolicy = FailurePolicy.ERROR
    formatter: CountFormatter = DEFAULT_FORMATTER
    single_flight: bool = True
    ttl: float | None = None  # None = the cache's default TTL

    _in_flight: dict[str, asyncio.Task[NormalizedRecord]] = field(
        default_factory=dict, init=False, repr=False
    )
    _fallback: NormalizedRecord = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._fallback = build_fallback_record(self.formatter)

    @property
    def fallback_record(self) -> NormalizedRecord:
        return self._fallback

    @property
    def in_flight(self) -> int:
        """Number of provider fetches currently shared between requests."""
        return len(self._in_flight)

    async def get_video(self, video_id: str) -> VideoLookup:
        key = cache_key(video_id)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return VideoLookup(video_id=video_id, source=LookupSource.CACHE, record=cached)

        logger.debug("Cache miss for %s", key)
        try:
            record = await self._load(video_id, key)
        except GatewayError as e:
            return self._on_failure(video_id, e)

        return VideoLookup(video_id=video_id, source=LookupSource.UPSTREAM, record=record)

    async def _load(self, video_id: str, key: str) -> NormalizedRecord:
        if not self.single_flight:
            return await self._fetch_and_store(video_id, key)

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.create_task(
                self._fetch_and_store(video_id, key), name=f"fetch-{key}"
            )
            self._in_flight[key] = task
            task.add_done_callback(lambda t: self._release(key, t))
        else:
            logger.debug("Joining in-flight fetch for %s", key)

        return await asyncio.shield(task)

    def _release(self, key: str, task: asyncio.Task[NormalizedRecord]) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Mark the exception retrieved even if every waiter was cancelled.
        if not task.cancelled():
            task.exception()

    async def _fetch_and_store(self, video_id: str, key: str) -> NormalizedRecord:
        with logfire.span("fetch video {video_id}", video_id=video_id):
            try:
                raw = await self.fetcher.fetch_raw_info(video_id)
            except GatewayError:
                raise
            except Exception as e:
                raise UpstreamError(str(e) or type(e).__name__) from e

            try:
                record = normalize(raw, self.formatter)
            except MalformedPayloadError:
                raise
            except Exception as e:
                raise MalformedPayloadError(f"Could not normalize payload: {e}") from e

        # Degenerate records are stored too: normalization never opts out of caching.
        self.cache.set(key, record, self.ttl)
        logger.debug("Stored %s", key)
        return record

    def _on_failure(self, video_id: str, error: GatewayError) -> VideoLookup:
        if self.failure_policy is FailurePolicy.FALLBACK:
            logger.warning("Serving fallback record for %s: %s", video_id, error.message)
            return VideoLookup(
                video_id=video_id,
                source=LookupSource.FALLBACK,
                record=self._fallback,
            )

        logger.warning("Lookup failed for %s: %s", video_id, error.message)
        raise VideoFetchError(
            video_id=video_id,
            message=error.message,
            status_code=getattr(error, "status_code", None),
        ) from error
