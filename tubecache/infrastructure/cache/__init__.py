"""In-memory record cache and its background sweeper.

Import modules directly:
    from tubecache.infrastructure.cache.store import CacheStore
    from tubecache.infrastructure.cache.sweeper import CacheSweeper
"""

__all__: list[str] = []
