import logging
import os
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, PositiveFloat
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by TUBECACHE_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get("TUBECACHE_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


def _default_port() -> int:
    # Plain PORT is honoured for PaaS-style deployments
    return int(os.environ.get("PORT", "3000"))


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "tubecache"
    version: str = "0.1.0"
    description: str = "Caching gateway for normalized video metadata"
    host: str = "0.0.0.0"
    port: int = Field(default_factory=_default_port)


class CacheConfig(BaseModel):
    """Record cache configuration. Durations are in seconds."""

    ttl: PositiveFloat = 3600.0
    sweep_interval: PositiveFloat = 120.0


class ProviderConfig(BaseModel):
    """Upstream video-metadata provider.

    The provider is expected to serve one JSON document per video at
    ``{base_url}/{video_id}``.
    """

    base_url: str = "http://localhost:8080/videos"
    timeout: PositiveFloat = 10.0  # Read timeout
    connect_timeout: PositiveFloat = 5.0
    headers: dict[str, str] = {}


class GatewayConfig(BaseModel):
    """Request orchestration policy, fixed for the whole deployment."""

    # "error": non-200 {error, message, videoId}; "fallback": 200 with the fallback record
    failure_policy: Literal["error", "fallback"] = "error"
    single_flight: bool = True  # Coalesce concurrent misses for the same video
    locale: Literal["ko", "en"] = "ko"  # Count formatting locale


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from TUBECACHE_LOG_FILE env var."""
        return os.environ.get("TUBECACHE_LOG_FILE")


class Config(BaseSettings):
    server: Server = Server()
    cache: CacheConfig = CacheConfig()
    provider: ProviderConfig = ProviderConfig()
    gateway: GatewayConfig = GatewayConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = {
        "env_prefix": "TUBECACHE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows TUBECACHE_CACHE__TTL override
        "frozen": True,
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - TUBECACHE_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup so all loggers pick up
    the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
