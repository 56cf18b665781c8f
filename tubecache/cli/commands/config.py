"""Config management commands."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Literal, NoReturn

import cyclopts
import httpx
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.text import Text

from tubecache.config import Config
from tubecache.domain.shared.error import GatewayError
from tubecache.domain.video.util.formatting import LOCALES
from tubecache.domain.video.util.normalize import normalize
from tubecache.infrastructure.http.di import provider_timeout
from tubecache.infrastructure.http.video_info_fetcher import HttpVideoInfoFetcher

app = cyclopts.App(name="config", help="Manage tubecache configuration")

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)

DEFAULT_CONFIG_NAME = "tubecache.yaml"

Section = Literal["server", "cache", "provider", "gateway", "logging"]

REDACTED = "***"

TEMPLATE = """\
# tubecache configuration
# Environment variables override this file, e.g. TUBECACHE_CACHE__TTL=600

server:
  host: "0.0.0.0"
  port: 3000

cache:
  ttl: 3600            # Seconds a record stays fresh
  sweep_interval: 120  # Seconds between background sweeps

provider:
  base_url: "{base_url}"  # GET {{base_url}}/{{video_id}}
  timeout: 10
  # headers:
  #   Authorization: "Bearer ..."

gateway:
  failure_policy: {failure_policy}  # "error" (non-200 JSON) or "fallback" (200 + empty record)
  single_flight: true
  locale: {locale}

# logging:
#   level: "DEBUG"
"""


def render_template(
    base_url: str = "http://localhost:8080/videos",
    failure_policy: str = "error",
    locale: str = "ko",
) -> str:
    return TEMPLATE.format(base_url=base_url, failure_policy=failure_policy, locale=locale)


def check_settings(config: Config) -> list[str]:
    """Warnings for settings that load fine but are unlikely to be intended."""
    warnings = []

    if config.cache.sweep_interval > config.cache.ttl:
        warnings.append(
            f"cache.sweep_interval ({config.cache.sweep_interval:g}s) exceeds cache.ttl "
            f"({config.cache.ttl:g}s); unrequested entries outlive their TTL "
            "until the next sweep"
        )

    try:
        url = httpx.URL(config.provider.base_url)
    except httpx.InvalidURL:
        url = None
    if url is None or url.scheme not in ("http", "https") or not url.host:
        warnings.append(
            f"provider.base_url {config.provider.base_url!r} is not an absolute http(s) URL"
        )

    if config.provider.timeout < config.provider.connect_timeout:
        warnings.append("provider.timeout is shorter than provider.connect_timeout")

    return warnings


async def fetch_sample(config: Config, video_id: str) -> Any:
    """Fetch one raw document using the configured provider client settings."""
    async with httpx.AsyncClient(
        timeout=provider_timeout(config.provider),
        headers=config.provider.headers,
    ) as client:
        fetcher = HttpVideoInfoFetcher(client=client, base_url=config.provider.base_url)
        return await fetcher.fetch_raw_info(video_id)


def _fail(message: str) -> NoReturn:
    err_console.print(message, style="red", markup=False)
    sys.exit(1)


@app.command
def init(
    path: Path = Path(DEFAULT_CONFIG_NAME),
    *,
    base_url: str = "http://localhost:8080/videos",
    failure_policy: Literal["error", "fallback"] = "error",
    locale: Literal["ko", "en"] = "ko",
) -> None:
    """Create a new config file from template.

    Args:
        path: Path for the config file. Defaults to ./tubecache.yaml
        base_url: Provider endpoint; documents are fetched from {base_url}/{video_id}.
        failure_policy: How lookup failures are returned to clients.
        locale: Count formatting locale.
    """
    if path.is_dir():
        _fail(f"Error: {path} is a directory, not a file path")
    if path.exists():
        _fail(f"Error: {path} already exists (refusing to overwrite)")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_template(base_url, failure_policy, locale))
    console.print(f"Created config at {path}", markup=False)
    console.print(
        f"Start the gateway with:\n  tubecache server serve --config {path}", markup=False
    )


@app.command
def validate(
    path: Path = Path(DEFAULT_CONFIG_NAME),
    *,
    sample_video: str | None = None,
) -> None:
    """Validate a config file.

    Args:
        path: Path to the config file. Defaults to ./tubecache.yaml
        sample_video: Also fetch and normalize this video id from the configured provider.
    """
    if not path.exists():
        _fail(f"Error: {path} not found")

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        _fail(f"✗ {path} is not valid YAML: {e}")

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        lines = [f"✗ {path} is invalid:"]
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            lines.append(f"  {location}: {error['msg']}")
        _fail("\n".join(lines))

    for warning in check_settings(config):
        console.print(f"! {warning}", style="yellow", markup=False)

    if sample_video is not None:
        try:
            raw = asyncio.run(fetch_sample(config, sample_video))
            record = normalize(raw, LOCALES[config.gateway.locale])
        except GatewayError as e:
            _fail(f"✗ provider check failed for {sample_video}: {e.message}")
        console.print(
            f"✓ provider returned {sample_video}: {record.title or '(untitled)'}, {record.views}",
            markup=False,
        )

    console.print(f"✓ {path} is valid", style="green", markup=False)


def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    rows = []
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict) and value:
            rows.extend(_flatten(value, f"{name}."))
        else:
            rows.append((name, value))
    return rows


def effective_settings(config: Config, section: Section | None = None) -> dict[str, Any]:
    """Config as plain data with provider header values redacted."""
    data = config.model_dump(mode="json")
    data["provider"]["headers"] = {name: REDACTED for name in data["provider"]["headers"]}
    if section is not None:
        return {section: data[section]}
    return data


@app.command
def show(section: Section | None = None, *, as_json: bool = False) -> None:
    """Show current effective config.

    Args:
        section: Only show this section.
        as_json: Print JSON instead of a table.
    """
    data = effective_settings(Config(), section)  # type: ignore[call-arg]

    if as_json:
        console.print_json(json.dumps(data))
        return

    table = Table("Setting", "Value")
    for name, value in _flatten(data):
        table.add_row(Text(name), Text(json.dumps(value, ensure_ascii=False)))
    console.print(table)
