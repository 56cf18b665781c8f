from tubecache.domain.shared.query import Query, QueryHandler
from tubecache.domain.video.model.value import CacheStats
from tubecache.domain.video.port.record_cache import RecordCache


class GetCacheStats(Query): ...


class GetCacheStatsHandler(QueryHandler[GetCacheStats, CacheStats]):
    cache: RecordCache

    async def run(self, cmd: GetCacheStats) -> CacheStats:
        return self.cache.stats()
