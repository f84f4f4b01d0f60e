"""Boolean converter with configurable true/false literal lists."""

from __future__ import annotations

from collections.abc import Sequence

from flatbind.converters.base import FAILED, Converted, ValueConverter
from flatbind.errors import ConfigurationError

DEFAULT_TRUE_VALUES: tuple[str, ...] = ("Y", "T", "1", "True", "Yes", "X")
DEFAULT_FALSE_VALUES: tuple[str, ...] = ("N", "F", "0", "False", "No", "")


class BooleanConverter(ValueConverter[bool]):
    """Converts between ``bool`` and one of two ordered literal lists.

    The first literal of each list is the one written on format. Parsing is
    an exact (ordinal) match unless ``case_sensitive`` is False.
    """

    value_type = bool

    def __init__(
        self,
        true_values: Sequence[str] = DEFAULT_TRUE_VALUES,
        false_values: Sequence[str] = DEFAULT_FALSE_VALUES,
        *,
        case_sensitive: bool = True,
    ) -> None:
        if not true_values or not false_values:
            msg = "BooleanConverter needs at least one true and one false literal."
            raise ConfigurationError(msg)
        self.true_values = tuple(true_values)
        self.false_values = tuple(false_values)
        self.case_sensitive = case_sensitive

    def _matches(self, text: str, literals: tuple[str, ...]) -> bool:
        if self.case_sensitive:
            return text in literals
        folded = text.casefold()
        return any(folded == lit.casefold() for lit in literals)

    def try_format(self, value: bool) -> Converted:
        if not isinstance(value, bool):
            return FAILED
        return Converted(True, self.true_values[0] if value else self.false_values[0])

    def try_parse(self, text: str | None) -> Converted:
        if text is None:
            return FAILED
        if self._matches(text, self.true_values):
            return Converted(True, True)
        if self._matches(text, self.false_values):
            return Converted(True, False)
        return FAILED
