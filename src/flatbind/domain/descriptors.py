"""Column and hierarchy descriptors — the resolved schema declaration.

Descriptors are plain frozen data supplied at schema-construction time.
How a host application produces them (hand-written lists, a model scan,
a config file) is outside the engine; the engine only consumes the lists.

Ordering contract shared by both descriptor kinds: an ``order`` of zero or
more is explicit; a negative ``order`` is unspecified and sorts after every
explicit order. Ties are broken by declaration sequence.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from flatbind.domain.diagnostics import Diagnostic
from flatbind.domain.types import StringTransform, StringTrim, WidthOverflow

if TYPE_CHECKING:
    from flatbind.converters.base import ValueConverter
    from flatbind.schema.record import RecordSchema

RecordValidator = Callable[[Any], Iterable[Diagnostic]]
"""Semantic (cross-field) validator: receives a bound record, yields diagnostics."""

UNSPECIFIED_ORDER = -1

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z]|\d|\b)|[A-Z]?[a-z]+|[A-Z]+|\d+")


def sentence_case(name: str) -> str:
    """Turn an attribute name into display text.

    ``"birth_date"`` and ``"BirthDate"`` both become ``"Birth Date"``;
    acronyms are kept (``"ssn_id"`` -> ``"Ssn Id"``, ``"SSNId"`` -> ``"SSN Id"``).
    """
    words = []
    for part in name.replace("-", "_").split("_"):
        words.extend(_WORD_RE.findall(part))
    return " ".join(w[:1].upper() + w[1:] for w in words)


def sort_key(order: int, index: int) -> tuple[int, int, int]:
    """Sort key implementing the ordering contract above."""
    if order < 0:
        return (1, 0, index)
    return (0, order, index)


@dataclass(frozen=True)
class ColumnDescriptor:
    """Binding metadata for one scalar field.

    Attributes:
        name: Attribute name on the record type.
        order: Explicit position (>= 0) or ``-1`` for declaration order.
        column_name: Header/column name; defaults to ``name``.
        text: Display text used in messages; derived from ``name`` when None.
        mandatory: Empty or whitespace-only text is an error.
        width: Maximum text width; ``0`` means unlimited.
        width_overflow: Overflow policy; None inherits the format default.
        string_trim: Trim policy; None inherits the format default.
        string_transform: Transform policy; None inherits the format default.
        converter_key: Name of a keyed converter in the registry.
        converter: Explicit converter instance (exclusive with ``converter_key``).
        line_number: The column carries the physical line number.
        write_format: Output format; forces the native formatter on write.
        value_type: Field type; resolved from the record type's annotations when None.
        getter: Accessor override; defaults to ``getattr(record, name)``.
        setter: Mutator override; defaults to ``setattr(record, name, value)``.
    """

    name: str
    order: int = UNSPECIFIED_ORDER
    column_name: str | None = None
    text: str | None = None
    mandatory: bool = False
    width: int = 0
    width_overflow: WidthOverflow | None = None
    string_trim: StringTrim | None = None
    string_transform: StringTransform | None = None
    converter_key: str | None = None
    converter: ValueConverter[Any] | None = None
    line_number: bool = False
    write_format: str | None = None
    value_type: Any = None
    getter: Callable[[Any], Any] | None = None
    setter: Callable[[Any, Any], None] | None = None


@dataclass(frozen=True)
class HierarchyDescriptor:
    """Binding metadata for one nested-record field.

    Exactly one of ``record_type`` and ``schema`` identifies the child; a
    ``record_type`` is resolved against the catalog the parent is defined in.

    Attributes:
        name: Attribute name on the parent record type.
        record_identifier: Line identifier of the child records (unique per parent).
        order: Explicit position (>= 0) or ``-1`` for declaration order.
        record_type: Child record type; a collection may name it as ``list[X]``.
        schema: Already-built child schema.
        is_collection: The field holds a sequence of child records.
        text: Display text used in messages; derived from ``name`` when None.
        mandatory: At least one child record is required.
        min_count: Minimum child records for a collection (0 = none).
        max_count: Maximum child records for a collection (0 = unlimited).
        validator: Validator for the child records, overriding the child schema's.
        collection_factory: Builds the collection value from the child records.
        getter: Accessor override; defaults to ``getattr(parent, name)``.
        setter: Mutator override; defaults to ``setattr(parent, name, value)``.
    """

    name: str
    record_identifier: str
    order: int = UNSPECIFIED_ORDER
    record_type: Any = None
    schema: RecordSchema | None = None
    is_collection: bool = False
    text: str | None = None
    mandatory: bool = False
    min_count: int = 0
    max_count: int = 0
    validator: RecordValidator | None = None
    collection_factory: Callable[[list[Any]], Any] = list
    getter: Callable[[Any], Any] | None = None
    setter: Callable[[Any, Any], None] | None = None
