"""Vault secret files — connection template and role credentials."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, Field, ValidationError

from connect_db.errors import (
    ConfigError,
    InvalidJsonError,
    MissingFieldError,
    SecretFileNotFoundError,
)

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".db.json"
CREDENTIALS_SUFFIX = ".db-role.json"

M = TypeVar("M", bound=BaseModel)


class TemplateData(BaseModel):
    db_url: str


class DatabaseTemplate(BaseModel):
    """``<name>.db.json`` — holds the URL with ``{{username}}``/``{{password}}``."""

    data: TemplateData


class DatabaseCredentials(BaseModel):
    """``<name>.db-role.json`` — the role the vault issued for this database."""

    username: str
    password: str = Field(repr=False)


def secret_paths(database_name: str, secrets_dir: Path) -> tuple[Path, Path]:
    """Return ``(template_path, credentials_path)`` for a database name."""
    return (
        secrets_dir / f"{database_name}{TEMPLATE_SUFFIX}",
        secrets_dir / f"{database_name}{CREDENTIALS_SUFFIX}",
    )


def _read_json(path: Path, kind: str) -> object:
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SecretFileNotFoundError(path, kind) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"failed to read {kind} file {path}: {exc}") from exc

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise InvalidJsonError(path, str(exc)) from exc


def _field_paths(exc: ValidationError) -> list[str]:
    paths = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        paths.append(loc or "<root>")
    return paths


def _load(path: Path, model: type[M], kind: str) -> M:
    raw = _read_json(path, kind)
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise MissingFieldError(path, _field_paths(exc)) from exc


def load_template(path: Path) -> DatabaseTemplate:
    logger.debug("Reading connection template from %s", path)
    return _load(path, DatabaseTemplate, "config")


def load_credentials(path: Path) -> DatabaseCredentials:
    logger.debug("Reading credentials from %s", path)
    return _load(path, DatabaseCredentials, "credentials")


def load_database_config(
    database_name: str, secrets_dir: Path
) -> tuple[DatabaseTemplate, DatabaseCredentials]:
    """Load the template and credentials for ``database_name``.

    The template is read first, so a database with neither file reports the
    missing template.
    """
    template_path, credentials_path = secret_paths(database_name, secrets_dir)
    template = load_template(template_path)
    credentials = load_credentials(credentials_path)
    return template, credentials
