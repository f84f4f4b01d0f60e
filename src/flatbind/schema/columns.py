"""ColumnBinding — parse and format logic for one scalar field.

Everything a column needs is resolved once, when the binding is built:
the converter (or the native codec of the field's primitive kind), the
effective overflow/trim/transform policies, and the accessors. The parse
and format paths only read that state.

INVARIANT: record-level problems never raise. They are appended to the
context as diagnostics and reported through the boolean / ``Converted``
outcome of the call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import cached_property
from operator import attrgetter
from typing import Any

from flatbind.config.models import FormatOptions
from flatbind.converters.base import FAILED, Converted, ValueConverter
from flatbind.converters.native import NativeCodec, native_codec
from flatbind.converters.registry import ConverterRegistry
from flatbind.domain.cleaning import clean_text
from flatbind.domain.context import RecordContext
from flatbind.domain.descriptors import ColumnDescriptor, sentence_case
from flatbind.domain.diagnostics import Diagnostic
from flatbind.domain.kinds import PrimitiveKind, kind_of, type_label, unwrap_optional
from flatbind.domain.types import Severity, StringTransform, StringTrim, WidthOverflow
from flatbind.errors import ConfigurationError

logger = logging.getLogger(__name__)

REQUIRED = "{0} is required."
NOT_PARSED = "{0} is invalid; the value could not be parsed."
NOT_FORMATTED = "{0} is invalid; the value could not be formatted."
WIDTH_EXCEEDED = "{0} must not exceed {2} characters in length."
WIDTH_TRUNCATED = "{0} exceeded {2} characters in length; value was truncated."
LINE_NUMBER_MISMATCH = "{0} is invalid; the value '{2}' does not match the read line number '{3}'."


def attribute_setter(name: str) -> Callable[[Any, Any], None]:
    """Default mutator: ``setattr(record, name, value)``."""

    def _set(record: Any, value: Any) -> None:
        setattr(record, name, value)

    return _set


@dataclass(frozen=True, eq=False)
class ColumnBinding:
    """A built, immutable column of a :class:`RecordSchema`.

    Use :meth:`build` rather than the constructor; it validates the
    descriptor and resolves the converter.
    """

    descriptor: ColumnDescriptor
    index: int
    value_type: type
    nullable: bool
    kind: PrimitiveKind | None
    converter: ValueConverter[Any] | None
    codec: NativeCodec | None
    width_overflow: WidthOverflow
    string_trim: StringTrim
    string_transform: StringTransform
    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], None]

    @classmethod
    def build(
        cls,
        descriptor: ColumnDescriptor,
        value_type: Any,
        *,
        index: int,
        registry: ConverterRegistry,
        options: FormatOptions,
    ) -> ColumnBinding:
        """Resolve *descriptor* against the converter registry and format options.

        Raises:
            ConfigurationError: If the converter cannot be resolved, both a
                converter key and a converter are given, ``write_format``
                is set on a type without a native formatter, or a
                line-number column is not integer-typed.
        """
        name = descriptor.name
        inner, nullable = unwrap_optional(value_type)
        kind = kind_of(inner)

        if descriptor.converter_key is not None and descriptor.converter is not None:
            msg = f"Column '{name}' specifies both a converter key and a converter."
            raise ConfigurationError(msg)

        if descriptor.line_number and kind is not PrimitiveKind.INTEGER:
            msg = f"Column '{name}' is a line-number column; its type must be int, not '{type_label(inner)}'."
            raise ConfigurationError(msg)

        if descriptor.converter is not None:
            converter: ValueConverter[Any] | None = descriptor.converter
        else:
            try:
                converter = registry.resolve(inner, descriptor.converter_key)
            except ConfigurationError as exc:
                msg = f"Column '{name}': {exc}"
                raise ConfigurationError(msg) from exc

        codec = native_codec(kind) if kind is not None else None
        if descriptor.write_format and codec is None:
            msg = (
                f"Column '{name}' has a write format but type "
                f"'{type_label(inner)}' has no native formatter."
            )
            raise ConfigurationError(msg)

        binding = cls(
            descriptor=descriptor,
            index=index,
            value_type=inner,
            nullable=nullable,
            kind=kind,
            converter=converter,
            codec=codec,
            width_overflow=descriptor.width_overflow or options.width_overflow,
            string_trim=descriptor.string_trim or options.string_trim,
            string_transform=descriptor.string_transform or options.string_transform,
            getter=descriptor.getter or attrgetter(name),
            setter=descriptor.setter or attribute_setter(name),
        )
        logger.debug(
            "Bound column %s (%s) via %s",
            name,
            type_label(inner),
            type(converter).__name__ if converter is not None else f"native {kind}",
        )
        return binding

    # -- metadata ---------------------------------------------------------

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def column_name(self) -> str:
        return self.descriptor.column_name or self.descriptor.name

    @property
    def order(self) -> int:
        return self.descriptor.order

    @property
    def width(self) -> int:
        return self.descriptor.width

    @property
    def mandatory(self) -> bool:
        return self.descriptor.mandatory

    @property
    def is_line_number(self) -> bool:
        return self.descriptor.line_number

    @property
    def write_format(self) -> str | None:
        return self.descriptor.write_format

    @cached_property
    def text(self) -> str:
        """Display text used in diagnostics."""
        return self.descriptor.text or sentence_case(self.descriptor.name)

    # -- parse ------------------------------------------------------------

    def clean(self, text: str | None) -> str | None:
        """Apply the column's effective trim and transform to *text*."""
        return clean_text(text, self.string_trim, self.string_transform)

    def set_value(self, context: RecordContext, instance: Any, text: str | None) -> bool:
        """Parse *text* and assign the result to *instance*.

        Returns:
            True when the field was bound without an error diagnostic.
        """
        if self.mandatory and (text is None or not text.strip()):
            self.create_error_message(context, REQUIRED, text)
            return False

        corrected = self.correct_width(context, text)
        if not corrected.ok:
            return False
        text = corrected.value

        if self.nullable and not text:
            value = None
        else:
            if self.converter is not None:
                result = self.converter.try_parse(text)
            else:
                result = self._native().parse(text)
            if not result.ok:
                self.create_error_message(context, NOT_PARSED, text)
                return False
            value = result.value

        ok = True
        if self.is_line_number and value != context.line_number:
            self.create_error_message(context, LINE_NUMBER_MISMATCH, text, value, context.line_number)
            ok = False

        if value is not None:
            self.setter(instance, value)
        return ok

    # -- format -----------------------------------------------------------

    def get_value(self, context: RecordContext, instance: Any) -> Converted:
        """Format the field of *instance* (or the context line number) as text."""
        value = context.line_number if self.is_line_number else self.getter(instance)
        if value is None:
            if self.mandatory:
                self.create_error_message(context, REQUIRED, None)
                return FAILED
            return Converted(True, "")

        if self.converter is not None and not self.write_format:
            result = self.converter.try_format(value)
        else:
            result = self._native().format(value, self.write_format)
        if not result.ok:
            self.create_error_message(context, NOT_FORMATTED, None)
            return FAILED

        return self.correct_width(context, result.value or "")

    # -- width ------------------------------------------------------------

    def correct_width(self, context: RecordContext, text: str | None) -> Converted:
        """Enforce the column width on *text*.

        Over-width text is an error under the ``error`` policy; under
        ``truncate`` it is cut to the width with a warning. Empty text is
        never checked.
        """
        if not text or self.width <= 0 or len(text) <= self.width:
            return Converted(True, text)
        if self.width_overflow == WidthOverflow.ERROR:
            self.create_error_message(context, WIDTH_EXCEEDED, text, self.width)
            return FAILED
        self.create_warning_message(context, WIDTH_TRUNCATED, text, self.width)
        return Converted(True, text[: self.width])

    # -- messages ---------------------------------------------------------

    def create_message(
        self,
        context: RecordContext,
        severity: Severity,
        template: str,
        text: str | None,
        *values: Any,
    ) -> Diagnostic:
        """Append a diagnostic for this column to *context*.

        *template* placeholders: ``{0}`` display text, ``{1}`` raw text,
        ``{2}`` onward *values*.
        """
        rendered = template.format(self.text, "" if text is None else text, *values)
        message = Diagnostic(field=self.name, severity=severity, text=rendered)
        context.messages.append(message)
        return message

    def create_error_message(
        self, context: RecordContext, template: str, text: str | None, *values: Any
    ) -> Diagnostic:
        return self.create_message(context, Severity.ERROR, template, text, *values)

    def create_warning_message(
        self, context: RecordContext, template: str, text: str | None, *values: Any
    ) -> Diagnostic:
        return self.create_message(context, Severity.WARNING, template, text, *values)

    def create_info_message(
        self, context: RecordContext, template: str, text: str | None, *values: Any
    ) -> Diagnostic:
        return self.create_message(context, Severity.INFO, template, text, *values)

    def _native(self) -> NativeCodec:
        if self.codec is None:
            msg = f"Column '{self.name}' has no native codec for type '{type_label(self.value_type)}'."
            raise ConfigurationError(msg)
        return self.codec
