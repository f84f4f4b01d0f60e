"""SchemaCatalog — the record schemas of one file format.

The catalog shares one converter registry and one set of format options
across every schema it defines, and resolves hierarchy descriptors that
name a child ``record_type`` against schemas already defined. Define
children before their parents.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from flatbind.config.models import FormatOptions
from flatbind.converters.registry import ConverterRegistry
from flatbind.domain.descriptors import ColumnDescriptor, HierarchyDescriptor, RecordValidator
from flatbind.domain.kinds import type_label
from flatbind.errors import ConfigurationError
from flatbind.schema.record import RecordSchema

logger = logging.getLogger(__name__)


class SchemaCatalog:
    """Builds each record type's schema exactly once."""

    def __init__(
        self,
        options: FormatOptions | None = None,
        converters: ConverterRegistry | None = None,
    ) -> None:
        self.options = options if options is not None else FormatOptions()
        self.converters = converters if converters is not None else ConverterRegistry()
        self._schemas: dict[type, RecordSchema] = {}

    def define(
        self,
        record_type: type,
        columns: Iterable[ColumnDescriptor],
        hierarchies: Iterable[HierarchyDescriptor] = (),
        *,
        factory: Callable[[], Any] | None = None,
        validator: RecordValidator | None = None,
    ) -> RecordSchema:
        """Build, register and return the schema of *record_type*.

        Raises:
            ConfigurationError: If *record_type* is already defined, a
                hierarchy names an undefined record type, or any
                descriptor cannot be bound.
        """
        if record_type in self._schemas:
            msg = f"Record type '{type_label(record_type)}' is already defined."
            raise ConfigurationError(msg)
        schema = RecordSchema.build(
            record_type,
            columns,
            hierarchies,
            converters=self.converters,
            options=self.options,
            factory=factory,
            validator=validator,
            resolve=self.get,
        )
        self._schemas[record_type] = schema
        logger.debug("Defined schema for %s", type_label(record_type))
        return schema

    def get(self, record_type: type) -> RecordSchema:
        """Return the schema of *record_type*.

        Raises:
            ConfigurationError: If the record type has not been defined.
        """
        schema = self._schemas.get(record_type)
        if schema is None:
            msg = f"Record type '{type_label(record_type)}' has not been defined."
            raise ConfigurationError(msg)
        return schema

    def __contains__(self, record_type: object) -> bool:
        return record_type in self._schemas

    def __iter__(self) -> Iterator[RecordSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)
