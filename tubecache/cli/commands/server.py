"""Server commands."""

import os
from pathlib import Path

import cyclopts
import uvicorn

from tubecache.config import Config

app = cyclopts.App(name="server", help="Run the caching gateway")

APP_FACTORY = "tubecache.application.api.rest.app:create_app"


@app.command
def serve(
    host: str | None = None,
    port: int | None = None,
    config: Path | None = None,
    reload: bool = False,
) -> None:
    """Serve the HTTP API in the foreground.

    Args:
        host: Host to bind to. Defaults to server.host from config.
        port: Port to listen on. Defaults to server.port (or $PORT).
        config: YAML config file, exported as TUBECACHE_CONFIG_FILE.
        reload: Restart on code changes (development only).
    """
    if config is not None:
        os.environ["TUBECACHE_CONFIG_FILE"] = str(config.resolve())

    settings = Config()  # type: ignore[call-arg]
    bind_host = host or settings.server.host
    bind_port = port or settings.server.port

    print(f"Server listening at http://{bind_host}:{bind_port}")
    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_config=None,  # configure_logging() owns the handlers
    )
