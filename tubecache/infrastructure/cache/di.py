"""DI provider for the record cache."""

from dishka import alias, provide

from tubecache.config import Config
from tubecache.domain.video.port.record_cache import RecordCache
from tubecache.infrastructure.cache.store import CacheStore
from tubecache.infrastructure.cache.sweeper import CacheSweeper
from tubecache.util.di.base import Provider
from tubecache.util.di.scope import Scope


class CacheProvider(Provider):
    """Provides the process-wide cache store and its sweeper (APP scope)."""

    @provide(scope=Scope.APP)
    def get_cache_store(self, config: Config) -> CacheStore:
        return CacheStore(default_ttl=config.cache.ttl)

    record_cache = alias(source=CacheStore, provides=RecordCache)

    @provide(scope=Scope.APP)
    def get_cache_sweeper(self, store: CacheStore, config: Config) -> CacheSweeper:
        return CacheSweeper(store, interval=config.cache.sweep_interval)
