from dishka import AsyncContainer, from_context, make_async_container
from starlette.requests import Request

from tubecache.config import Config
from tubecache.domain.video.util.di import VideoProvider
from tubecache.infrastructure.cache.di import CacheProvider
from tubecache.infrastructure.http.di import HttpProvider
from tubecache.util.di.base import Provider
from tubecache.util.di.scope import Scope


class ContextProvider(Provider):
    """Values handed to the container rather than built by it."""

    config = from_context(provides=Config, scope=Scope.APP)
    request = from_context(provides=Request, scope=Scope.REQUEST)


def create_container(config: Config | None = None, *providers: Provider) -> AsyncContainer:
    """Build the application container.

    Args:
        config: Settings to use; read from the environment when omitted.
        providers: Extra providers, e.g. test doubles overriding the defaults.
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ContextProvider(),
        CacheProvider(),
        HttpProvider(),
        VideoProvider(),
        *providers,
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
