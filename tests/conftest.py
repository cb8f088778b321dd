"""Shared fixtures — a throwaway working directory with a .vault/secrets tree."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterator

import pytest

DEFAULT_TEMPLATE = {"data": {"db_url": "postgresql://{{username}}:{{password}}@h:5432/d"}}
DEFAULT_CREDENTIALS = {"username": "alice", "password": "s3cr3t"}


class Vault:
    """Writes secret files the way the vault agent renders them."""

    def __init__(self, root: Path):
        self.secrets_dir = root / ".vault" / "secrets"
        self.secrets_dir.mkdir(parents=True)

    def template_path(self, name: str) -> Path:
        return self.secrets_dir / f"{name}.db.json"

    def credentials_path(self, name: str) -> Path:
        return self.secrets_dir / f"{name}.db-role.json"

    def write_template(self, name: str, content: Any = DEFAULT_TEMPLATE) -> Path:
        return self._write(self.template_path(name), content)

    def write_credentials(self, name: str, content: Any = DEFAULT_CREDENTIALS) -> Path:
        return self._write(self.credentials_path(name), content)

    def write(self, name: str) -> None:
        self.write_template(name)
        self.write_credentials(name)

    @staticmethod
    def _write(path: Path, content: Any) -> Path:
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CONNECT_DB_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("CONNECT_DB_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """The CLI sets the connect_db logger level; undo it between tests."""
    yield
    logging.getLogger("connect_db").setLevel(logging.NOTSET)


@pytest.fixture
def vault(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Vault:
    """Empty vault in a fresh working directory."""
    monkeypatch.chdir(tmp_path)
    return Vault(tmp_path)
