"""Main CLI application using Cyclopts."""

import cyclopts

from tubecache.cli.commands import config, server

app = cyclopts.App(
    name="tubecache",
    help="tubecache - caching gateway for video metadata",
)

app.command(server.app, name="server")
app.command(config.app, name="config")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
