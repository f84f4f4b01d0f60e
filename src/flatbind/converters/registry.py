"""Converter registry — keyed and default converters per value type.

Resolution order for a column (see :meth:`ConverterRegistry.resolve`):

1. an explicit key selects the ``(key, type)`` entry; a missing entry is a
   configuration error;
2. otherwise the default entry registered under the type's canonical name;
3. otherwise None, meaning the column uses the native codec of its
   primitive kind;
4. a type with no entry and no primitive kind is a configuration error.

INVARIANT: at most one entry per ``(key, value_type)``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from flatbind.converters.base import ValueConverter
from flatbind.domain.kinds import canonical_name, kind_of, type_label
from flatbind.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConverterEntry:
    """One registered converter."""

    key: str
    value_type: type
    converter: ValueConverter[Any]


class ConverterRegistry:
    """Holds the converters available to the schemas of one file format."""

    def __init__(self) -> None:
        self._entries: dict[tuple[str, type], ConverterEntry] = {}

    def register(self, converter: ValueConverter[Any], key: str | None = None) -> ConverterEntry:
        """Add *converter* under *key*, or as the default for its value type.

        Raises:
            ConfigurationError: If an entry for the same key and type exists.
        """
        value_type = converter.value_type
        entry_key = key if key is not None else canonical_name(value_type)
        slot = (entry_key, value_type)
        if slot in self._entries:
            msg = (
                f"A converter for type '{type_label(value_type)}' "
                f"with key '{entry_key}' is already registered."
            )
            raise ConfigurationError(msg)
        entry = ConverterEntry(key=entry_key, value_type=value_type, converter=converter)
        self._entries[slot] = entry
        logger.debug(
            "Registered %s for %s (key=%s)", type(converter).__name__, type_label(value_type), entry_key
        )
        return entry

    def get(self, value_type: type, key: str | None = None) -> ValueConverter[Any] | None:
        """Return the entry's converter for *value_type*, or None."""
        entry_key = key if key is not None else canonical_name(value_type)
        entry = self._entries.get((entry_key, value_type))
        return entry.converter if entry is not None else None

    def resolve(self, value_type: type, key: str | None = None) -> ValueConverter[Any] | None:
        """Resolve the converter for a column of *value_type*.

        Returns:
            The converter, or None when the native codec applies.

        Raises:
            ConfigurationError: If the keyed entry is missing, or the type
                has neither a converter nor a primitive kind.
        """
        if key is not None:
            converter = self.get(value_type, key)
            if converter is None:
                msg = f"No converter with key '{key}' is registered for type '{type_label(value_type)}'."
                raise ConfigurationError(msg)
            return converter

        converter = self.get(value_type)
        if converter is not None:
            return converter
        if kind_of(value_type) is not None:
            return None
        msg = f"Type '{type_label(value_type)}' has no native conversion and no converter is registered."
        raise ConfigurationError(msg)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, tuple) and len(item) == 2:
            key, value_type = item
            return (key, value_type) in self._entries
        return False

    def __iter__(self) -> Iterator[ConverterEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
