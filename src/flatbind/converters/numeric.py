"""Number converter for ``int``, ``float`` and ``Decimal`` fields."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from flatbind.converters.base import FAILED, Converted, ValueConverter
from flatbind.converters.native import native_codec
from flatbind.domain.kinds import NUMERIC_KINDS, kind_of, type_label
from flatbind.errors import ConfigurationError


@dataclass(frozen=True)
class NumberCulture:
    """Decimal point and group separator used in field text."""

    decimal_point: str = "."
    group_separator: str = ","

    def __post_init__(self) -> None:
        if not self.decimal_point:
            raise ConfigurationError("NumberCulture.decimal_point must not be empty.")
        if self.decimal_point == self.group_separator:
            msg = "NumberCulture.decimal_point and group_separator must differ."
            raise ConfigurationError(msg)


INVARIANT_CULTURE = NumberCulture()


class NumberConverter(ValueConverter[Any]):
    """Converts a numeric field using a format spec and a culture.

    ``format`` is a Python format spec (``",.2f"``, ``"08d"``); the ``.``
    and ``,`` it produces are written as the culture's decimal point and
    group separator. Parsing reverses that mapping and then uses the native
    parser of the numeric type. Empty text parses to zero.

    Raises:
        ConfigurationError: If *value_type* is not ``int``, ``float`` or ``Decimal``.
    """

    def __init__(
        self,
        value_type: type,
        format: str | None = None,
        culture: NumberCulture = INVARIANT_CULTURE,
        *,
        allow_grouping: bool = False,
    ) -> None:
        kind = kind_of(value_type)
        if kind not in NUMERIC_KINDS:
            msg = f"NumberConverter does not support type '{type_label(value_type)}'."
            raise ConfigurationError(msg)
        self.value_type = value_type
        self.format = format
        self.culture = culture
        self.allow_grouping = allow_grouping
        self._codec = native_codec(kind)
        self._to_culture = str.maketrans(
            {",": culture.group_separator or None, ".": culture.decimal_point}
        )

    @property
    def zero(self) -> Any:
        return Decimal(0) if self.value_type is Decimal else self.value_type(0)

    def try_format(self, value: Any) -> Converted:
        result = self._codec.format(value, self.format)
        if not result.ok:
            return FAILED
        return Converted(True, result.value.translate(self._to_culture))

    def try_parse(self, text: str | None) -> Converted:
        if not text:
            return Converted(True, self.zero)
        decimal_point = self.culture.decimal_point
        group = self.culture.group_separator
        if decimal_point != "." and "." in text and group != ".":
            return FAILED
        if group and group in text:
            if not self.allow_grouping:
                return FAILED
            text = text.replace(group, "")
        if decimal_point != ".":
            text = text.replace(decimal_point, ".")
        return self._codec.parse(text)
