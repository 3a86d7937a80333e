"""Settings file discovery.

Walk-up finder locates the nearest ``pyproject.toml`` carrying a
``[tool.reqbind]`` table, similar to how git finds .git/.
Supports the REQBIND_CONFIG env var and --config CLI flag overrides,
which point at a plain TOML file holding the same keys at top level.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "REQBIND_CONFIG"
TOOL_TABLE = "reqbind"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a configured pyproject.toml.

    Returns the path to the config file, or None if not found.
    Checks REQBIND_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / PYPROJECT_FILENAME
        if candidate.is_file() and TOOL_TABLE in _tool_tables(candidate):
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_table(path: Path) -> dict[str, Any]:
    """Return the reqbind settings stored in *path*.

    A ``pyproject.toml`` contributes its ``[tool.reqbind]`` table; any other
    TOML file is read as a whole.

    Raises:
        tomllib.TOMLDecodeError: *path* is not valid TOML.
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name == PYPROJECT_FILENAME:
        return dict(data.get("tool", {}).get(TOOL_TABLE, {}))
    return data


def _tool_tables(path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        return {}
    tool = data.get("tool", {})
    return tool if isinstance(tool, dict) else {}
