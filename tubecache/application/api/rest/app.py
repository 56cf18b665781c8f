import logging
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tubecache.application.api.errors import map_gateway_error
from tubecache.application.api.rest.routes import cache, health, root, video
from tubecache.application.di import create_container
from tubecache.config import Config, configure_logging
from tubecache.domain.shared.error import GatewayError
from tubecache.infrastructure.cache.sweeper import CacheSweeper
from tubecache.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container

    # Expired entries are swept in the background for the app's lifetime
    sweeper = await container.get(CacheSweeper)

    async with sweeper:
        yield

    # Closes the provider HTTP client
    await container.close()


def create_app(config: Config | None = None, container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        config: Settings to use; read from the environment when omitted.
        container: Prebuilt DI container (tests pass one with fakes).
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting %s v%s", config.server.name, config.server.version)
    logger.info(
        "Cache ttl=%ss sweep_interval=%ss, failure policy=%s",
        config.cache.ttl,
        config.cache.sweep_interval,
        config.gateway.failure_policy,
    )

    logfire.configure(
        send_to_logfire="if-token-present",
        service_name=config.server.name,
        service_version=config.server.version,
        console=False,
    )

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI and the provider client for automatic tracing
    logfire.instrument_httpx()
    logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    setup_dishka(container or create_container(config), app_instance)

    app_instance.include_router(root.router)
    app_instance.include_router(health.router)
    app_instance.include_router(video.router)
    app_instance.include_router(cache.router)

    # Maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        http_exc = map_gateway_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app_instance
