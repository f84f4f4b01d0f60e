"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``flatbind.toml`` only contains
overrides. An empty file (or none at all) yields the defaults below.
"""

from __future__ import annotations

from pydantic import BaseModel

from flatbind.domain.types import ColumnCountValidation, StringTransform, StringTrim, WidthOverflow

# --- flatbind.toml sections ---


class FormatOptions(BaseModel):
    """[format] section: defaults a column inherits from its file format.

    Column descriptors override ``width_overflow``, ``string_trim`` and
    ``string_transform`` individually; ``column_count_validation`` applies
    to every record bound with the format.
    """

    model_config = {"frozen": True}

    width_overflow: WidthOverflow = WidthOverflow.ERROR
    string_trim: StringTrim = StringTrim.END
    string_transform: StringTransform = StringTransform.EMPTY_TO_NULL
    column_count_validation: ColumnCountValidation = ColumnCountValidation.NONE


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    json_output: bool = False
