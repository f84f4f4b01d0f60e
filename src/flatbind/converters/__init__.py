"""Value converters: the converter contract, built-ins and the registry."""

from flatbind.converters.base import FAILED, Converted, ValueConverter
from flatbind.converters.boolean import BooleanConverter
from flatbind.converters.numeric import INVARIANT_CULTURE, NumberConverter, NumberCulture
from flatbind.converters.reference import (
    ReferenceDataCodeConverter,
    ReferenceDataMappingConverter,
    ReferenceDataService,
    ReferenceDataValue,
)
from flatbind.converters.registry import ConverterEntry, ConverterRegistry
from flatbind.converters.temporal import DateConverter, DateTimeConverter, TimeSpanConverter

__all__ = [
    "FAILED",
    "INVARIANT_CULTURE",
    "BooleanConverter",
    "Converted",
    "ConverterEntry",
    "ConverterRegistry",
    "DateConverter",
    "DateTimeConverter",
    "NumberConverter",
    "NumberCulture",
    "ReferenceDataCodeConverter",
    "ReferenceDataMappingConverter",
    "ReferenceDataService",
    "ReferenceDataValue",
    "TimeSpanConverter",
    "ValueConverter",
]
