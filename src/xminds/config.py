"""Configuration management for the xminds client."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .api_clients.network_error_handler import RetryPolicy

logger = logging.getLogger(__name__)

ENV_VAR_MAP = {
    "host": "XMINDS_HOST",
    "user_agent": "XMINDS_USER_AGENT",
    "refresh_token": "XMINDS_REFRESH_TOKEN",
    "timeout_seconds": "XMINDS_TIMEOUT",
}


class ConfigurationError(Exception):
    """Raised when the configuration file or environment is invalid."""


class RetrySettings(BaseModel):
    """Backoff settings for transient failures (429 and idempotent 5xx)."""

    max_retries: int = Field(default=3, ge=0, description="Retries after the first attempt")
    base_delay_ms: int = Field(default=100, gt=0, description="Base backoff delay in ms")
    multiplier: float = Field(default=5.0, gt=1, description="Exponential backoff multiplier")

    def to_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            base_delay_ms=self.base_delay_ms,
            multiplier=self.multiplier,
        )


class ClientConfig(BaseModel):
    """Settings used to construct an ``XMindsClient``."""

    host: str = Field(
        default="https://api.crossingminds.com", description="API server root URL"
    )
    api_prefix: str = Field(default="/v1", description="Path prefix of every endpoint")
    user_agent: Optional[str] = Field(
        default=None, description="Extra agent string appended to the User-Agent header"
    )
    refresh_token: Optional[str] = Field(
        default=None, description="Refresh token used to obtain access tokens"
    )
    timeout_seconds: float = Field(default=6.0, gt=0, description="Request timeout in seconds")
    retry: RetrySettings = Field(default_factory=RetrySettings)

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"host must start with http:// or https://, got {v!r}")
        return v.rstrip("/")


class ConfigManager:
    """Loads configuration from a JSON file, then applies environment overrides."""

    DEFAULT_CONFIG_PATH = Path.home() / ".xminds" / "config.json"

    def __init__(
        self,
        config_path: Optional[Path] = None,
        *,
        env: Optional[Mapping[str, str]] = None,
    ):
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH
        self._env = env if env is not None else os.environ
        self._config: Optional[ClientConfig] = None

    def load(self) -> ClientConfig:
        """Load the configuration; environment variables win over the file.

        Raises:
            ConfigurationError: When the file or an override is invalid
        """
        data = self._load_file()
        data.update(self._load_env())

        try:
            self._config = ClientConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        logger.debug(f"Loaded configuration for host {self._config.host}")
        return self._config

    def save(self, config: Optional[ClientConfig] = None) -> None:
        """Write the configuration file, readable by the owner only."""
        if config is None:
            config = self._config

        if config is None:
            raise ConfigurationError("No configuration to save")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(exclude_none=True), f, indent=2, sort_keys=True)

        # Refresh tokens are credentials
        os.chmod(self.config_path, 0o600)

    def _load_file(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {self.config_path} did not contain a mapping")
        return data

    def _load_env(self) -> Dict[str, str]:
        return {
            field: self._env[env_name]
            for field, env_name in ENV_VAR_MAP.items()
            if self._env.get(env_name)
        }
