"""ValueConverter ABC: the text <-> value contract for one field.

INVARIANT: converters never raise for malformed input. A value that cannot
be parsed or formatted is an expected outcome and is reported through
``Converted.ok``; callers turn it into a record diagnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, NamedTuple, TypeVar

T = TypeVar("T")


class Converted(NamedTuple):
    """Outcome of one conversion: a success flag and the converted value."""

    ok: bool
    value: Any = None


FAILED = Converted(False, None)


class ValueConverter(ABC, Generic[T]):
    """Abstract base class for field converters.

    ``value_type`` is the Python type the converter produces; the registry
    keys default converters by it.
    """

    value_type: type = object

    @abstractmethod
    def try_format(self, value: T) -> Converted:
        """Format *value* as text. ``Converted.value`` is the text on success."""
        ...

    @abstractmethod
    def try_parse(self, text: str | None) -> Converted:
        """Parse *text*. ``Converted.value`` is the typed value on success."""
        ...
