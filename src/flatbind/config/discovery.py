"""Config file discovery and loading.

Settings live in a ``flatbind.toml`` or in the ``[tool.flatbind]`` table of
a ``pyproject.toml``. Discovery checks each directory from the start point
up to the filesystem root; ``flatbind.toml`` wins over ``pyproject.toml``
in the same directory. The ``FLATBIND_CONFIG`` env var names a file
directly and disables the search.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from flatbind.errors import ConfigurationError

CONFIG_FILENAME = "flatbind.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "FLATBIND_CONFIG"


def load_toml(path: Path) -> dict[str, Any]:
    """Return the flatbind settings table held by *path*.

    For a ``pyproject.toml`` that is the ``[tool.flatbind]`` table (empty
    when absent); any other file is read whole.

    Raises:
        ConfigurationError: If the file is not valid TOML.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigurationError(msg) from exc
    if path.name == PYPROJECT_FILENAME:
        return data.get("tool", {}).get("flatbind", {})
    return data


def candidate_paths(start: Path | None = None) -> Iterator[Path]:
    """Yield the files discovery considers, nearest directory first."""
    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        yield directory / CONFIG_FILENAME
        yield directory / PYPROJECT_FILENAME


def _holds_settings(path: Path) -> bool:
    if not path.is_file():
        return False
    return path.name != PYPROJECT_FILENAME or bool(load_toml(path))


def find_config(start: Path | None = None) -> Path | None:
    """Locate the settings file for *start* (default: cwd), or None.

    A ``pyproject.toml`` only counts when it has a ``[tool.flatbind]`` table.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None
    return next((path for path in candidate_paths(start) if _holds_settings(path)), None)
