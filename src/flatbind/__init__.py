"""flatbind — schema-driven codec for flat-file records.

Record types are bound to a column layout once (:class:`SchemaCatalog`,
:class:`RecordSchema`); field texts are then converted to and from typed
values, with data problems reported as :class:`Diagnostic` items on the
record's context.
"""

from flatbind.config import FlatbindSettings, FormatOptions, configure_logging
from flatbind.converters import (
    BooleanConverter,
    Converted,
    ConverterRegistry,
    DateConverter,
    DateTimeConverter,
    NumberConverter,
    NumberCulture,
    ReferenceDataCodeConverter,
    ReferenceDataMappingConverter,
    TimeSpanConverter,
    ValueConverter,
)
from flatbind.domain.context import LineContext, RecordContext
from flatbind.domain.descriptors import ColumnDescriptor, HierarchyDescriptor
from flatbind.domain.diagnostics import Diagnostic
from flatbind.domain.types import (
    ColumnCountValidation,
    Severity,
    StringTransform,
    StringTrim,
    WidthOverflow,
)
from flatbind.errors import ConfigurationError, FlatbindError
from flatbind.schema import ColumnBinding, HierarchyBinding, RecordSchema, SchemaCatalog

__version__ = "0.1.0"

__all__ = [
    "BooleanConverter",
    "ColumnBinding",
    "ColumnCountValidation",
    "ColumnDescriptor",
    "ConfigurationError",
    "Converted",
    "ConverterRegistry",
    "DateConverter",
    "DateTimeConverter",
    "Diagnostic",
    "FlatbindError",
    "FlatbindSettings",
    "FormatOptions",
    "HierarchyBinding",
    "HierarchyDescriptor",
    "LineContext",
    "NumberConverter",
    "NumberCulture",
    "RecordContext",
    "RecordSchema",
    "ReferenceDataCodeConverter",
    "ReferenceDataMappingConverter",
    "SchemaCatalog",
    "Severity",
    "StringTransform",
    "StringTrim",
    "TimeSpanConverter",
    "ValueConverter",
    "WidthOverflow",
]
