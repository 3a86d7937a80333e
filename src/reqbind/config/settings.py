"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``REQBIND_*`` prefix
  3. TOML file: ``[tool.reqbind]`` in the nearest ``pyproject.toml``,
     or the file named by ``REQBIND_CONFIG`` / ``--config``
  4. Code defaults

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`reqbind.config.discovery`.
"""

from __future__ import annotations

import functools
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from reqbind.binding.records import DIRECTIVE_KEY
from reqbind.config.discovery import find_config, load_table
from reqbind.domain.errors import ConfigurationError
from reqbind.domain.layouts import DEFAULT_LAYOUT, LAYOUTS


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a discovered TOML file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = load_table(toml_path)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ConfigurationError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ReqbindSettings(BaseSettings):
    """Process settings for reqbind.

    Attributes:
        directive_key: Dataclass field metadata key holding directives.
        default_layout: Timestamp layout used when a directive names none
            or names an unknown one.
        verbose: Enable DEBUG logging for the ``reqbind`` logger.
        log_json: Render logs as JSON lines.
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "REQBIND_",
        "extra": "ignore",
    }

    directive_key: str = DIRECTIVE_KEY
    default_layout: str = DEFAULT_LAYOUT
    verbose: bool = False
    log_json: bool = False
    json_output: bool = False
    config_path: Path | None = None

    @field_validator("default_layout")
    @classmethod
    def _known_layout(cls, value: str) -> str:
        if value not in LAYOUTS:
            msg = f"unknown timestamp layout {value!r}; expected one of {', '.join(LAYOUTS)}"
            raise ValueError(msg)
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> ReqbindSettings:
        """Construct settings, discovering the TOML file when not given.

        An explicit *config_path* wins over discovery from *start*
        (default: cwd). *overrides* take precedence over every source.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None


@functools.cache
def get_settings() -> ReqbindSettings:
    """Settings for the running process, loaded on first use."""
    return ReqbindSettings.load()
