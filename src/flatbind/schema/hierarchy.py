"""HierarchyBinding: a nested-record field of a hierarchical record.

A hierarchy binds one attribute of a parent record to the child records
that follow it in the file, selected by their record identifier. The
binding owns the child's :class:`RecordSchema` and the cardinality rules
the reader checks once the children of a parent have been collected.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import cached_property
from operator import attrgetter
from typing import TYPE_CHECKING, Any, get_args, get_origin

from flatbind.domain.context import RecordContext
from flatbind.domain.descriptors import HierarchyDescriptor, RecordValidator, sentence_case
from flatbind.domain.diagnostics import Diagnostic
from flatbind.domain.kinds import kind_of, type_label, unwrap_optional
from flatbind.domain.types import Severity
from flatbind.errors import ConfigurationError
from flatbind.schema.columns import attribute_setter

if TYPE_CHECKING:
    from flatbind.schema.record import RecordSchema

REQUIRED = "{0} is required; no record found."
TOO_FEW = "{0} must have at least {2} records(s); additional required."
NOT_MULTIPLE = "{0} does not support multiple records; too many provided."
TOO_MANY = "{0} must not exceed {2} records(s); too many provided."


def _child_type(descriptor: HierarchyDescriptor) -> Any:
    """Record type a descriptor targets; a collection's ``list[X]`` names ``X``."""
    target, _ = unwrap_optional(descriptor.record_type)
    if descriptor.is_collection and get_origin(target) is not None:
        args = get_args(target)
        if len(args) == 1:
            return args[0]
    return target


@dataclass(frozen=True, eq=False)
class HierarchyBinding:
    """A built, immutable child-record binding of a :class:`RecordSchema`."""

    descriptor: HierarchyDescriptor
    index: int
    schema: RecordSchema
    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], None]

    @classmethod
    def build(
        cls,
        descriptor: HierarchyDescriptor,
        *,
        index: int,
        resolve: Callable[[type], RecordSchema] | None = None,
    ) -> HierarchyBinding:
        """Bind *descriptor* to its child schema.

        A descriptor naming a ``record_type`` is resolved through *resolve*;
        for a collection the element type of ``list[X]`` or
        ``Sequence[X]`` is resolved.

        Raises:
            ConfigurationError: If the child is missing or ambiguous, or
                the target is a primitive type.
        """
        name = descriptor.name
        if descriptor.record_type is not None and descriptor.schema is not None:
            msg = f"Hierarchy '{name}' specifies both a record type and a schema."
            raise ConfigurationError(msg)

        if descriptor.record_type is not None:
            target = _child_type(descriptor)
            if kind_of(target) is not None:
                msg = (
                    f"Hierarchy '{name}' must target a record type; "
                    f"'{type_label(target)}' is a primitive type."
                )
                raise ConfigurationError(msg)
            if resolve is None:
                msg = (
                    f"Hierarchy '{name}' names record type '{type_label(target)}' "
                    "but no schema resolver is available."
                )
                raise ConfigurationError(msg)
            schema = resolve(target)
        elif descriptor.schema is not None:
            schema = descriptor.schema
        else:
            msg = f"Hierarchy '{name}' specifies neither a record type nor a schema."
            raise ConfigurationError(msg)

        return cls(
            descriptor=descriptor,
            index=index,
            schema=schema,
            getter=descriptor.getter or attrgetter(name),
            setter=descriptor.setter or attribute_setter(name),
        )

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def record_identifier(self) -> str:
        return self.descriptor.record_identifier

    @property
    def record_type(self) -> type:
        return self.schema.record_type

    @property
    def order(self) -> int:
        return self.descriptor.order

    @property
    def is_collection(self) -> bool:
        return self.descriptor.is_collection

    @property
    def validator(self) -> RecordValidator | None:
        """The hierarchy's own validator, else the child schema's."""
        return self.descriptor.validator or self.schema.validator

    @cached_property
    def text(self) -> str:
        """Display text used in diagnostics."""
        return self.descriptor.text or sentence_case(self.descriptor.name)

    def get_value(self, parent: Any) -> Any:
        return self.getter(parent)

    def set_value(self, parent: Any, items: Sequence[Any]) -> None:
        """Assign the child records *items* to *parent*.

        A singular hierarchy receives the first item (or None); a
        collection receives ``collection_factory(list(items))``.
        """
        if self.is_collection:
            self.setter(parent, self.descriptor.collection_factory(list(items)))
        else:
            self.setter(parent, items[0] if items else None)

    def check_count(self, context: RecordContext, count: int) -> bool:
        """Check the number of child records collected for one parent.

        Returns:
            True when *count* satisfies the mandatory, singular and
            min/max rules; otherwise an error is appended and False returned.
        """
        d = self.descriptor
        if d.mandatory and count == 0:
            self.create_error_message(context, REQUIRED)
            return False
        if not self.is_collection:
            if count > 1:
                self.create_error_message(context, NOT_MULTIPLE)
                return False
            return True
        # The minimum applies only once a record exists; mandatory covers none.
        if count > 0 and d.min_count > 0 and count < d.min_count:
            self.create_error_message(context, TOO_FEW, d.min_count)
            return False
        if d.max_count > 0 and count > d.max_count:
            self.create_error_message(context, TOO_MANY, d.max_count)
            return False
        return True

    def validate(self, context: RecordContext, value: Any) -> list[Diagnostic]:
        """Run the effective validator over one child record."""
        return self.schema.validate(context, value, validator=self.validator)

    def create_message(
        self,
        context: RecordContext,
        severity: Severity,
        template: str,
        *values: Any,
    ) -> Diagnostic:
        """Append a diagnostic for this hierarchy; ``{0}`` is its display text."""
        rendered = template.format(self.text, "", *values)
        message = Diagnostic(field=self.name, severity=severity, text=rendered)
        context.messages.append(message)
        return message

    def create_error_message(self, context: RecordContext, template: str, *values: Any) -> Diagnostic:
        return self.create_message(context, Severity.ERROR, template, *values)

    def create_warning_message(self, context: RecordContext, template: str, *values: Any) -> Diagnostic:
        return self.create_message(context, Severity.WARNING, template, *values)

    def create_info_message(self, context: RecordContext, template: str, *values: Any) -> Diagnostic:
        return self.create_message(context, Severity.INFO, template, *values)
