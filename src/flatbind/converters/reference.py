"""Reference-data converters.

Reference data (code tables) is owned by the host application; the engine
only talks to it through :class:`ReferenceDataService`. A reference value
is written as its ``code`` or as one of its named mapping values (an
external system's code for the same item).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from flatbind.converters.base import FAILED, Converted, ValueConverter
from flatbind.domain.kinds import type_label
from flatbind.errors import ConfigurationError


@runtime_checkable
class ReferenceDataValue(Protocol):
    """A single reference-data item."""

    @property
    def code(self) -> str: ...

    def get_mapping(self, name: str) -> Any: ...


@runtime_checkable
class ReferenceDataService(Protocol):
    """Lookup service for reference-data items of a given type."""

    def get_by_code(self, ref_type: type, code: str) -> Any: ...

    def get_by_mapping(self, ref_type: type, mapping_name: str, value: str) -> Any: ...

    def is_valid(self, value: Any) -> bool: ...


class ReferenceDataCodeConverter(ValueConverter[Any]):
    """Reads and writes a reference-data item by its code.

    An item the service reports as invalid is written as None; parsing
    requires a known, valid item.
    """

    def __init__(self, ref_type: type, service: ReferenceDataService) -> None:
        self.value_type = ref_type
        self.service = service

    def try_format(self, value: Any) -> Converted:
        if value is None or not self.service.is_valid(value):
            return Converted(True, None)
        return Converted(True, value.code)

    def try_parse(self, text: str | None) -> Converted:
        if not text:
            return Converted(True, None)
        value = self.service.get_by_code(self.value_type, text)
        if value is None or not self.service.is_valid(value):
            return FAILED
        return Converted(True, value)


class ReferenceDataMappingConverter(ValueConverter[Any]):
    """Reads and writes a reference-data item by a named mapping value.

    Raises:
        ConfigurationError: If *ref_type* does not declare *mapping_name*
            in its ``mapping_names``.
    """

    def __init__(self, ref_type: type, mapping_name: str, service: ReferenceDataService) -> None:
        if mapping_name not in getattr(ref_type, "mapping_names", ()):
            msg = (
                f"Reference data type '{type_label(ref_type)}' does not define "
                f"a mapping named '{mapping_name}'."
            )
            raise ConfigurationError(msg)
        self.value_type = ref_type
        self.mapping_name = mapping_name
        self.service = service

    def try_format(self, value: Any) -> Converted:
        if value is None or not self.service.is_valid(value):
            return Converted(True, None)
        mapped = value.get_mapping(self.mapping_name)
        return Converted(True, None if mapped is None else str(mapped))

    def try_parse(self, text: str | None) -> Converted:
        if not text:
            return Converted(True, None)
        value = self.service.get_by_mapping(self.value_type, self.mapping_name, text)
        if value is None or not self.service.is_valid(value):
            return FAILED
        return Converted(True, value)
