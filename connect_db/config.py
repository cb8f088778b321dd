"""Launcher configuration — defaults, optional YAML file, env vars."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

from connect_db.errors import ConfigError

DEFAULT_CONFIG_FILE = Path(".connect-db.yml")
DEFAULT_SECRETS_DIR = Path(".vault") / "secrets"


class ConnectionMode(str, Enum):
    URL = "url"
    PARAMS = "params"


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def level(self) -> int:
        return logging.getLevelName(self.name)


class Settings(BaseSettings):
    """Top-level launcher settings.

    Relative paths are resolved against the working directory at the time
    the secrets are read, not at import time.
    """

    secrets_dir: Path = DEFAULT_SECRETS_DIR
    client: str = "psql"
    connection_mode: ConnectionMode = ConnectionMode.URL
    encode_credentials: bool = False
    replace_process: bool = False
    log_level: LogLevel = LogLevel.WARNING

    model_config = {"env_prefix": "CONNECT_DB_"}

    @field_validator("log_level", mode="before")
    @classmethod
    def _lowercase_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> Settings:
        """Load settings from a YAML file; env vars fill in keys the file leaves out.

        The default file is optional; a path given explicitly must exist.
        """
        explicit = path is not None
        if path is None:
            path = DEFAULT_CONFIG_FILE

        values: dict[str, Any] = {}
        if path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    values = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as exc:
                raise ConfigError(f"failed to read settings file {path}: {exc}") from exc
            if not isinstance(values, dict):
                raise ConfigError(f"settings file {path} must contain a mapping")
        elif explicit:
            raise ConfigError(f"settings file not found: {path}")

        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigError(f"invalid settings in {path}: {exc}") from exc
