from dishka import provide

from tubecache.config import Config
from tubecache.domain.video.model.value import FailurePolicy
from tubecache.domain.video.port.record_cache import RecordCache
from tubecache.domain.video.port.video_info_fetcher import VideoInfoFetcher
from tubecache.domain.video.query.get_cache_stats import GetCacheStatsHandler
from tubecache.domain.video.query.get_video import GetVideoHandler
from tubecache.domain.video.service.video import VideoService
from tubecache.domain.video.util.formatting import LOCALES
from tubecache.util.di.base import Provider
from tubecache.util.di.scope import Scope


class VideoProvider(Provider):
    # Services (APP scope: the single-flight registry is shared by all requests)
    @provide(scope=Scope.APP)
    def get_video_service(
        self,
        fetcher: VideoInfoFetcher,
        cache: RecordCache,
        config: Config,
    ) -> VideoService:
        return VideoService(
            fetcher=fetcher,
            cache=cache,
            failure_policy=FailurePolicy(config.gateway.failure_policy),
            formatter=LOCALES[config.gateway.locale],
            single_flight=config.gateway.single_flight,
            ttl=config.cache.ttl,
        )

    # Query Handlers
    get_video_handler = provide(GetVideoHandler, scope=Scope.REQUEST)
    get_cache_stats_handler = provide(GetCacheStatsHandler, scope=Scope.REQUEST)
