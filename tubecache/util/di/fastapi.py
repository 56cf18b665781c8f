"""Dishka FastAPI integration using Scope.REQUEST."""

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from dishka import AsyncContainer

from tubecache.util.di.scope import Scope as GatewayScope


class ContainerMiddleware:
    """ASGI middleware that opens a Scope.REQUEST container for each HTTP request.

    Mirrors dishka.integrations.starlette.ContainerMiddleware but enters our own
    scope class instead of dishka.Scope.REQUEST.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive, send=send)

        async with request.app.state.dishka_container(
            {Request: request},
            scope=GatewayScope.REQUEST,
        ) as request_container:
            request.state.dishka_container = request_container
            return await self.app(scope, receive, send)


def setup_dishka(container: AsyncContainer, app) -> None:
    """Attach the DI container and request-scope middleware to the app.

    Args:
        container: The async DI container
        app: FastAPI or Starlette application
    """
    app.add_middleware(ContainerMiddleware)
    app.state.dishka_container = container
