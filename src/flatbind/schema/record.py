"""RecordSchema — the sealed column/hierarchy layout of one record type.

Construction (:meth:`RecordSchema.build`) scans the descriptors once,
builds every binding, orders them and indexes the hierarchy children by
record identifier. The schema is then sealed: attribute assignment raises,
so one schema can serve any number of concurrent parse/format calls.

INVARIANT: columns and hierarchies are ordered independently. Children are
dispatched by identifier (:meth:`RecordSchema.resolve_child`), never by
position.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Callable, Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from flatbind.config.models import FormatOptions
from flatbind.converters.registry import ConverterRegistry
from flatbind.domain.context import RecordContext
from flatbind.domain.descriptors import (
    ColumnDescriptor,
    HierarchyDescriptor,
    RecordValidator,
    sort_key,
)
from flatbind.domain.diagnostics import Diagnostic
from flatbind.domain.kinds import kind_of, type_label
from flatbind.domain.types import ColumnCountValidation, Severity
from flatbind.errors import ConfigurationError
from flatbind.schema.columns import ColumnBinding
from flatbind.schema.hierarchy import HierarchyBinding

logger = logging.getLogger(__name__)

LESS_COLUMNS = "There are less columns '{0}' within the record than expected '{1}'."
MORE_COLUMNS = "There are more columns '{0}' within the record than expected '{1}'."

_LESS_SEVERITY: dict[ColumnCountValidation, Severity] = {
    ColumnCountValidation.LESS_THAN_ERROR: Severity.ERROR,
    ColumnCountValidation.LESS_AND_GREATER_THAN_ERROR: Severity.ERROR,
    ColumnCountValidation.LESS_THAN_WARNING: Severity.WARNING,
    ColumnCountValidation.LESS_AND_GREATER_THAN_WARNING: Severity.WARNING,
}
_MORE_SEVERITY: dict[ColumnCountValidation, Severity] = {
    ColumnCountValidation.GREATER_THAN_ERROR: Severity.ERROR,
    ColumnCountValidation.LESS_AND_GREATER_THAN_ERROR: Severity.ERROR,
    ColumnCountValidation.GREATER_THAN_WARNING: Severity.WARNING,
    ColumnCountValidation.LESS_AND_GREATER_THAN_WARNING: Severity.WARNING,
}


class RecordSchema:
    """Immutable binding layout for one record type.

    Attributes:
        record_type: The record class instances are created from.
        columns: Column bindings in resolved order.
        hierarchies: Hierarchy bindings in resolved order.
        validator: Semantic validator run after a clean bind, if any.
        options: Format-level defaults the columns were built with.
    """

    record_type: type
    columns: tuple[ColumnBinding, ...]
    hierarchies: tuple[HierarchyBinding, ...]
    validator: RecordValidator | None
    options: FormatOptions

    def __init__(
        self,
        record_type: type,
        columns: Sequence[ColumnBinding],
        hierarchies: Sequence[HierarchyBinding],
        *,
        options: FormatOptions,
        factory: Callable[[], Any] | None = None,
        validator: RecordValidator | None = None,
    ) -> None:
        self.record_type = record_type
        self.columns = tuple(sorted(columns, key=lambda c: sort_key(c.order, c.index)))
        self.hierarchies = tuple(sorted(hierarchies, key=lambda h: sort_key(h.order, h.index)))
        self.validator = validator
        self.options = options
        self._factory = factory or record_type

        child_index: dict[str, int] = {}
        for position, hierarchy in enumerate(self.hierarchies):
            if hierarchy.record_identifier in child_index:
                msg = (
                    f"Record type '{type_label(record_type)}' hierarchy '{hierarchy.name}' has a duplicate "
                    f"record identifier '{hierarchy.record_identifier}' (must be unique within the type)."
                )
                raise ConfigurationError(msg)
            child_index[hierarchy.record_identifier] = position
        self._child_index: Mapping[str, int] = MappingProxyType(child_index)
        self._sealed = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_sealed", False):
            msg = f"RecordSchema for '{type_label(self.record_type)}' is sealed; '{name}' cannot be assigned."
            raise AttributeError(msg)
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        msg = f"RecordSchema for '{type_label(self.record_type)}' is sealed; '{name}' cannot be deleted."
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return (
            f"RecordSchema({type_label(self.record_type)}, columns={len(self.columns)}, "
            f"hierarchies={len(self.hierarchies)})"
        )

    @classmethod
    def build(
        cls,
        record_type: type,
        columns: Iterable[ColumnDescriptor],
        hierarchies: Iterable[HierarchyDescriptor] = (),
        *,
        converters: ConverterRegistry | None = None,
        options: FormatOptions | None = None,
        factory: Callable[[], Any] | None = None,
        validator: RecordValidator | None = None,
        resolve: Callable[[type], RecordSchema] | None = None,
    ) -> RecordSchema:
        """Build and seal the schema of *record_type*.

        Args:
            record_type: A class; primitive types are rejected.
            columns: Column descriptors in declaration order.
            hierarchies: Hierarchy descriptors in declaration order.
            converters: Registry consulted for each column (default: empty).
            options: Format-level defaults (default: ``FormatOptions()``).
            factory: Creates blank instances (default: ``record_type()``).
            validator: Semantic validator for bound records.
            resolve: Maps a child record type to its schema.

        Raises:
            ConfigurationError: For any descriptor that cannot be bound.
        """
        if not isinstance(record_type, type) or kind_of(record_type) is not None:
            msg = f"Record type must be a class, not '{type_label(record_type)}'."
            raise ConfigurationError(msg)

        registry = converters if converters is not None else ConverterRegistry()
        opts = options if options is not None else FormatOptions()
        column_list = list(columns)
        hierarchy_list = list(hierarchies)

        seen: set[str] = set()
        for name in [c.name for c in column_list] + [h.name for h in hierarchy_list]:
            if name in seen:
                msg = f"Record type '{type_label(record_type)}' binds attribute '{name}' more than once."
                raise ConfigurationError(msg)
            seen.add(name)

        hints: dict[str, Any] | None = None
        column_bindings: list[ColumnBinding] = []
        for index, descriptor in enumerate(column_list):
            value_type = descriptor.value_type
            if value_type is None:
                if hints is None:
                    hints = _type_hints(record_type)
                if descriptor.name not in hints:
                    msg = (
                        f"Column '{descriptor.name}' has no value type and "
                        f"'{type_label(record_type)}' has no annotation for it."
                    )
                    raise ConfigurationError(msg)
                value_type = hints[descriptor.name]
            column_bindings.append(
                ColumnBinding.build(descriptor, value_type, index=index, registry=registry, options=opts)
            )

        hierarchy_bindings = [
            HierarchyBinding.build(descriptor, index=index, resolve=resolve)
            for index, descriptor in enumerate(hierarchy_list)
        ]

        schema = cls(
            record_type,
            column_bindings,
            hierarchy_bindings,
            options=opts,
            factory=factory,
            validator=validator,
        )
        logger.debug("Built %r", schema)
        return schema

    # -- instances and children -------------------------------------------

    def create_instance(self) -> Any:
        """Create a blank record instance."""
        return self._factory()

    def resolve_child(self, record_identifier: str) -> int | None:
        """Index of the hierarchy bound to *record_identifier*, or None."""
        return self._child_index.get(record_identifier)

    def child(self, record_identifier: str) -> HierarchyBinding | None:
        """The hierarchy bound to *record_identifier*, or None."""
        index = self._child_index.get(record_identifier)
        return self.hierarchies[index] if index is not None else None

    @property
    def record_identifiers(self) -> tuple[str, ...]:
        return tuple(self._child_index)

    @property
    def column_names(self) -> list[str]:
        return [c.column_name for c in self.columns]

    # -- parse ------------------------------------------------------------

    def bind_columns(
        self,
        context: RecordContext,
        instance: Any,
        fields: Sequence[str | None],
        *,
        validate: bool = True,
    ) -> list[Diagnostic]:
        """Bind *fields* (positional field texts) onto *instance*.

        Every column runs, whatever earlier columns reported; fields beyond
        the supplied texts bind as None. The column-count policy is checked
        afterwards and, when *validate* is set, the semantic validator.

        Returns:
            The diagnostics this call appended to the context.
        """
        start = len(context.messages)
        for position, column in enumerate(self.columns):
            text = fields[position] if position < len(fields) else None
            column.set_value(context, instance, column.clean(text))
        self.check_column_count(context, len(fields))
        if validate:
            self.validate(context, instance)
        return list(context.messages[start:])

    def parse(self, context: RecordContext, fields: Sequence[str | None], *, validate: bool = True) -> Any:
        """Create an instance and bind *fields* onto it."""
        instance = self.create_instance()
        self.bind_columns(context, instance, fields, validate=validate)
        return instance

    def check_column_count(self, context: RecordContext, count: int) -> bool:
        """Apply the format's column-count policy to *count* field texts."""
        expected = len(self.columns)
        policy = self.options.column_count_validation
        if policy == ColumnCountValidation.NONE or count == expected:
            return True
        if count < expected:
            severity, template = _LESS_SEVERITY.get(policy), LESS_COLUMNS
        else:
            severity, template = _MORE_SEVERITY.get(policy), MORE_COLUMNS
        if severity is None:
            return True
        context.messages.append(Diagnostic(severity=severity, text=template.format(count, expected)))
        return severity != Severity.ERROR

    # -- format -----------------------------------------------------------

    def format_columns(self, context: RecordContext, instance: Any) -> list[str]:
        """Format every column of *instance*; failed columns yield ``""``."""
        texts: list[str] = []
        for column in self.columns:
            result = column.get_value(context, instance)
            texts.append(result.value if result.ok and result.value is not None else "")
        return texts

    # -- validation -------------------------------------------------------

    def validate(
        self,
        context: RecordContext,
        instance: Any,
        *,
        validator: RecordValidator | None = None,
    ) -> list[Diagnostic]:
        """Run the semantic validator over a cleanly bound *instance*.

        Nothing runs when the context already holds an error, when
        *instance* is None or when no validator is attached. *validator*
        overrides the schema's own.
        """
        check = validator or self.validator
        if check is None or instance is None or context.has_errors:
            return []
        found = list(check(instance))
        context.messages.extend(found)
        return found


def _type_hints(record_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError) as exc:
        msg = f"Cannot resolve annotations of '{type_label(record_type)}': {exc}"
        raise ConfigurationError(msg) from exc
