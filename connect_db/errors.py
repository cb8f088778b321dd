"""Error hierarchy — every launcher-side failure maps to one exit code."""

from __future__ import annotations

from pathlib import Path

# sysexits.h codes; psql itself only exits with 0-3
EXIT_USAGE = 64
EXIT_CONFIG_ERROR = 78
EXIT_LAUNCH_ERROR = 127


class ConnectDbError(Exception):
    """Base class for failures detected before or while starting the client."""

    exit_code: int = EXIT_CONFIG_ERROR


class ConfigError(ConnectDbError):
    """A settings or secrets file is missing, unreadable or malformed."""


class SecretFileNotFoundError(ConfigError):
    def __init__(self, path: Path, kind: str = "secrets"):
        self.path = path
        super().__init__(f"{kind} file not found: {path}")


class InvalidJsonError(ConfigError):
    def __init__(self, path: Path, detail: str):
        self.path = path
        super().__init__(f"failed to parse {path}: {detail}")


class MissingFieldError(ConfigError):
    def __init__(self, path: Path, fields: list[str]):
        self.path = path
        self.fields = fields
        super().__init__(f"{path}: missing or non-string field(s): {', '.join(fields)}")


class LaunchError(ConnectDbError):
    """The database client could not be started."""

    exit_code = EXIT_LAUNCH_ERROR
