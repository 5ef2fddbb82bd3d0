"""
Configuration management for Translator Gateway.
Uses Pydantic for type-safe configuration with environment and YAML file support.
"""

import os
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog
import yaml

logger = structlog.get_logger(__name__)


DEFAULT_CONFIG_LOCATIONS = [
    "config.yaml",
    "config/config.yaml",
]


class AppConfig(BaseSettings):
    """Main application configuration.

    Loaded once at startup and frozen afterwards. The translator credentials
    are read from ``TRANSLATOR_KEY``, ``TRANSLATOR_LOCATION`` and
    ``TRANSLATOR_ENDPOINT``; the listening address from ``HOST`` and ``PORT``.
    """
    model_config = SettingsConfigDict(
        env_prefix="TRANSLATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Upstream translator credentials
    key: str = ""
    location: str = ""
    endpoint: str = "https://api.cognitive.microsofttranslator.com"
    api_version: str = "3.0"

    # Outbound HTTP settings
    request_timeout: float = 10.0
    proxy_url: Optional[str] = None

    # Server configuration
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("host", "HOST"),
    )
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("port", "PORT"),
    )
    enable_docs: bool = False

    # Logging
    debug: bool = False

    @field_validator("endpoint")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Routes are appended with a leading slash."""
        return v.rstrip("/")

    @classmethod
    def from_file(cls, config_file: str) -> "AppConfig":
        """Load configuration from a YAML file.

        Values in the file take precedence over the environment.
        """
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f)

        if not yaml_config:
            yaml_config = {}

        return cls(**yaml_config)

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.key:
            errors.append("Translator key is empty (set TRANSLATOR_KEY)")

        if not self.location:
            errors.append("Translator region is empty (set TRANSLATOR_LOCATION)")

        parsed = urlparse(self.endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append(f"Translator endpoint is not an http(s) URL: {self.endpoint!r}")

        if not (1 <= self.port <= 65535):
            errors.append(f"Port {self.port} is out of valid range (1-65535)")

        if self.request_timeout <= 0:
            errors.append(f"Request timeout must be positive, got {self.request_timeout}")

        return errors


def load_config(config_file: Optional[str] = None) -> AppConfig:
    """Load configuration from file or environment.

    Args:
        config_file: Explicit YAML file. Falls back to ``TRANSLATOR_CONFIG_FILE``
            and then to the default locations.

    Returns:
        The frozen configuration
    """
    config_file = config_file or os.getenv("TRANSLATOR_CONFIG_FILE")

    if config_file:
        config = AppConfig.from_file(config_file)
    else:
        for location in DEFAULT_CONFIG_LOCATIONS:
            if Path(location).exists():
                config = AppConfig.from_file(location)
                break
        else:
            # No config file found, environment and defaults only
            config = AppConfig()

    for error in config.validate_config():
        logger.warning("Configuration problem", problem=error)

    return config
