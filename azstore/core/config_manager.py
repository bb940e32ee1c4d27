"""
Configuration management for azstore clients.

Handles loading, validation, and access to client settings.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from enum import Enum

import yaml
from pydantic import BaseModel, Field, field_validator, ValidationError

from .transport import DEFAULT_API_VERSION

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    """Valid log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: LogLevel = LogLevel.WARNING
    format: str = "text"
    file: Optional[str] = None
    rotation_size: str = "10MB"
    rotation_count: int = 5
    module_levels: Optional[Dict[str, str]] = Field(
        default=None,
        description="Per-module log levels, e.g., {'azstore.core.transport': 'DEBUG'}"
    )


class AzStoreConfig(BaseModel):
    """Client configuration schema."""

    account: Optional[str] = Field(default=None, description="Storage account name")

    blob_endpoint: Optional[str] = Field(
        default=None,
        description="Blob service endpoint; defaults to https://{account}.blob.core.windows.net"
    )

    api_version: str = Field(default=DEFAULT_API_VERSION, description="x-ms-version sent with every request")

    request_timeout: float = Field(default=30.0, gt=0.0, description="Request timeout in seconds")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("blob_endpoint")
    @classmethod
    def validate_blob_endpoint(cls, v: Optional[str]) -> Optional[str]:
        """Require an absolute http(s) endpoint without trailing slash."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("blob_endpoint must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("api_version")
    @classmethod
    def validate_api_version(cls, v: str) -> str:
        """Validate the YYYY-MM-DD service version format."""
        parts = v.split("-")
        if len(parts) != 3 or not all(part.isdigit() for part in parts):
            raise ValueError("api_version must be in format YYYY-MM-DD")
        return v

    def resolved_blob_endpoint(self) -> str:
        """
        Return the blob endpoint to address.

        Raises:
            ValueError: If neither an endpoint nor an account is configured
        """
        if self.blob_endpoint:
            return self.blob_endpoint
        if not self.account:
            raise ValueError("Either account or blob_endpoint must be configured")
        return f"https://{self.account}.blob.core.windows.net"


class ConfigManager:
    """
    Loads and validates azstore configuration.

    Configuration precedence (highest to lowest):
    1. Explicit overrides
    2. Environment variables (AZSTORE_*)
    3. Configuration file (YAML/JSON)
    4. Defaults
    """

    def __init__(self):
        self._config: Optional[AzStoreConfig] = None
        self._config_file: Optional[Path] = None

    def load(
        self,
        config_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None
    ) -> AzStoreConfig:
        """
        Load and validate configuration from multiple sources.

        Args:
            config_file: Path to configuration file (YAML or JSON)
            overrides: Dictionary of explicit overrides

        Returns:
            Validated AzStoreConfig instance

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If specified config file doesn't exist
        """
        config_dict: Dict[str, Any] = {}

        if config_file:
            config_dict = self._load_from_file(config_file)
            self._config_file = Path(config_file)
            logger.info(f"Loaded configuration from file: {config_file}")

        env_config = self._load_from_env()
        config_dict = self._merge_configs(config_dict, env_config)
        if env_config:
            logger.info(f"Applied {len(env_config)} environment variable overrides")

        if overrides:
            config_dict = self._merge_configs(config_dict, overrides)

        try:
            self._config = AzStoreConfig(**config_dict)
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise
        logger.debug(f"Active configuration: {json.dumps(self._config.model_dump(mode='json'))}")
        return self._config

    def _load_from_file(self, file_path: str) -> Dict[str, Any]:
        """Load configuration from YAML or JSON file."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, 'r') as f:
            if path.suffix in ['.yaml', '.yml']:
                return yaml.safe_load(f) or {}
            elif path.suffix == '.json':
                return json.load(f)
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        if account := os.getenv("AZSTORE_ACCOUNT"):
            config["account"] = account
        if endpoint := os.getenv("AZSTORE_BLOB_ENDPOINT"):
            config["blob_endpoint"] = endpoint
        if api_version := os.getenv("AZSTORE_API_VERSION"):
            config["api_version"] = api_version
        if timeout := os.getenv("AZSTORE_REQUEST_TIMEOUT"):
            config["request_timeout"] = float(timeout)

        if log_level := os.getenv("AZSTORE_LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level.upper()
        if log_file := os.getenv("AZSTORE_LOG_FILE"):
            config.setdefault("logging", {})["file"] = log_file

        return config

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def get_config(self) -> AzStoreConfig:
        """
        Get the loaded configuration.

        Raises:
            RuntimeError: If configuration hasn't been loaded
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config

    def reload(self) -> AzStoreConfig:
        """Reload configuration from the same sources."""
        config_file = str(self._config_file) if self._config_file else None
        return self.load(config_file=config_file)
