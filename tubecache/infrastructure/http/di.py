"""DI provider for HTTP infrastructure."""

from typing import AsyncIterable, NewType

import httpx
from dishka import provide

from tubecache.config import Config, ProviderConfig
from tubecache.domain.video.port.video_info_fetcher import VideoInfoFetcher
from tubecache.infrastructure.http.video_info_fetcher import HttpVideoInfoFetcher
from tubecache.util.di.base import Provider
from tubecache.util.di.scope import Scope

# Dedicated client for the video-metadata provider
ProviderHttpClient = NewType("ProviderHttpClient", httpx.AsyncClient)


def provider_timeout(provider: ProviderConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=provider.connect_timeout,
        read=provider.timeout,
        write=provider.connect_timeout,
        pool=provider.connect_timeout,
    )


class HttpProvider(Provider):
    """DI provider for upstream HTTP adapters."""

    @provide(scope=Scope.APP)
    async def get_provider_http_client(self, config: Config) -> AsyncIterable[ProviderHttpClient]:
        """Pooled HTTP client for the provider, closed with the container."""
        async with httpx.AsyncClient(
            timeout=provider_timeout(config.provider),
            headers=config.provider.headers,
        ) as client:
            yield ProviderHttpClient(client)

    @provide(scope=Scope.APP, provides=VideoInfoFetcher)
    def get_video_info_fetcher(
        self, client: ProviderHttpClient, config: Config
    ) -> HttpVideoInfoFetcher:
        return HttpVideoInfoFetcher(client=client, base_url=config.provider.base_url)
