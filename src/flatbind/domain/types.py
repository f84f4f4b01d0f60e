"""Column policy and diagnostic classification enums.

Serialized values are lower_snake so they can be used directly in
``flatbind.toml`` and ``FLATBIND_*`` environment variables.
"""

from __future__ import annotations

from enum import StrEnum


class WidthOverflow(StrEnum):
    """What happens when a column value is wider than its configured width."""

    ERROR = "error"
    TRUNCATE = "truncate"


class StringTrim(StrEnum):
    """Whitespace trimming applied to field text before it is parsed."""

    NONE = "none"
    START = "start"
    END = "end"
    BOTH = "both"


class StringTransform(StrEnum):
    """Empty/null normalization applied after trimming."""

    NONE = "none"
    EMPTY_TO_NULL = "empty_to_null"
    NULL_TO_EMPTY = "null_to_empty"


class ColumnCountValidation(StrEnum):
    """Policy for a record whose field count differs from the schema's column count."""

    NONE = "none"
    LESS_THAN_ERROR = "less_than_error"
    LESS_THAN_WARNING = "less_than_warning"
    GREATER_THAN_ERROR = "greater_than_error"
    GREATER_THAN_WARNING = "greater_than_warning"
    LESS_AND_GREATER_THAN_ERROR = "less_and_greater_than_error"
    LESS_AND_GREATER_THAN_WARNING = "less_and_greater_than_warning"


class Severity(StrEnum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
