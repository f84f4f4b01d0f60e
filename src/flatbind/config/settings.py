"""Unified settings: init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs   (values passed by the host application)
  2. Env vars      (``FLATBIND_*`` prefix, ``__`` for nested sections)
  3. TOML file     (``flatbind.toml`` or ``[tool.flatbind]`` in ``pyproject.toml``)
  4. Code defaults (baked into the section models)
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from flatbind.config.discovery import find_config, load_toml
from flatbind.config.models import FormatOptions, LoggingConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the flatbind table of one TOML file.

    Attributes:
        toml_path: The file read, or None when no file applies.
        sections: Top-level tables keyed by settings field name.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self.toml_path = toml_path
        self.sections: dict[str, Any] = load_toml(toml_path) if toml_path and toml_path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self.sections.get(field_name), field_name, field_name in self.sections

    def __call__(self) -> dict[str, Any]:
        return dict(self.sections)


# File picked by from_toml, visible to settings_customise_sources while the
# settings object is constructed.
_selected_path: ContextVar[Path | None] = ContextVar("flatbind_selected_path", default=None)


class FlatbindSettings(BaseSettings):
    """Settings for a host application using flatbind.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        format: Format-level defaults handed to a :class:`SchemaCatalog`.
        logging: Arguments for :func:`configure_logging`.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FLATBIND_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    format: FormatOptions = Field(default_factory=FormatOptions)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Rank the TOML file below env vars; dotenv and secrets are not read."""
        return (init_settings, env_settings, TomlSettingsSource(settings_cls, _selected_path.get()))

    @classmethod
    def from_toml(
        cls,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> FlatbindSettings:
        """Construct settings from *config_path* or a discovered settings file.

        Discovery starts at *start* (default: cwd); see :func:`find_config`.
        A *config_path* that does not exist is ignored. Keyword *overrides*
        take priority over env vars and the file.

        Raises:
            ConfigurationError: If the TOML file cannot be parsed.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(start)

        token = _selected_path.set(toml_path)
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _selected_path.reset(token)
