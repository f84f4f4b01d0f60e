"""Primitive kinds and type introspection helpers.

The set of primitive kinds is closed: a field type either maps to exactly
one :class:`PrimitiveKind` (and therefore has a native parser/formatter) or
it is a structured type that needs a registered converter.

INVARIANT: kinds are resolved from exact types, so ``bool`` never falls
through to ``int``.
"""

from __future__ import annotations

import types
import typing
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import StrEnum
from typing import Any, Union

from flatbind.errors import ConfigurationError


class PrimitiveKind(StrEnum):
    """Field kinds with a built-in (native) text conversion."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    DATETIME = "datetime"
    DATE = "date"
    TIMESPAN = "timespan"


_KIND_BY_TYPE: dict[type, PrimitiveKind] = {
    str: PrimitiveKind.STRING,
    bool: PrimitiveKind.BOOLEAN,
    int: PrimitiveKind.INTEGER,
    float: PrimitiveKind.FLOAT,
    Decimal: PrimitiveKind.DECIMAL,
    datetime: PrimitiveKind.DATETIME,
    date: PrimitiveKind.DATE,
    timedelta: PrimitiveKind.TIMESPAN,
}

NUMERIC_KINDS: frozenset[PrimitiveKind] = frozenset(
    {PrimitiveKind.INTEGER, PrimitiveKind.FLOAT, PrimitiveKind.DECIMAL}
)


def kind_of(tp: Any) -> PrimitiveKind | None:
    """Return the primitive kind of *tp*, or None for a structured type."""
    return _KIND_BY_TYPE.get(tp)


def unwrap_optional(tp: Any) -> tuple[Any, bool]:
    """Strip an ``X | None`` / ``Optional[X]`` wrapper.

    Returns:
        ``(inner_type, is_nullable)``.

    Raises:
        ConfigurationError: If *tp* is a union of more than one non-None type.
    """
    origin = typing.get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) != 1:
            msg = f"Union type {tp!r} is not supported; only 'X | None' may be bound."
            raise ConfigurationError(msg)
        return args[0], True
    return tp, False


def canonical_name(tp: Any) -> str:
    """Canonical registry name of a type (``module.qualname``)."""
    module = getattr(tp, "__module__", None)
    qualname = getattr(tp, "__qualname__", None) or getattr(tp, "__name__", repr(tp))
    if module in (None, "builtins"):
        return str(qualname)
    return f"{module}.{qualname}"


def type_label(tp: Any) -> str:
    """Short human-readable name of a type for error messages."""
    return getattr(tp, "__name__", repr(tp))
