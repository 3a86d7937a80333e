"""Shared pytest fixtures and test helpers for reqbind tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from reqbind.config.models import default_config
from reqbind.config.settings import get_settings


@dataclass
class FakeRequest:
    """Minimal request carrying the attributes the default getters read."""

    path_params: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, list[str]] = field(default_factory=dict)
    body: Any = b""


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Run every test away from any pyproject.toml and REQBIND_* env vars."""
    for name in list(os.environ):
        if name.startswith("REQBIND_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    default_config.cache_clear()
    yield
    get_settings.cache_clear()
    default_config.cache_clear()


@pytest.fixture
def make_request() -> type[FakeRequest]:
    """The FakeRequest class, for building requests inline."""
    return FakeRequest


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()
