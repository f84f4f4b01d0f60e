"""Tests for RecordSchema: build, ordering, binding, and validation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pytest

from flatbind.config.models import FormatOptions
from flatbind.converters.boolean import BooleanConverter
from flatbind.converters.registry import ConverterRegistry
from flatbind.domain.context import LineContext
from flatbind.domain.descriptors import ColumnDescriptor, HierarchyDescriptor
from flatbind.domain.diagnostics import Diagnostic
from flatbind.domain.types import ColumnCountValidation, Severity, WidthOverflow
from flatbind.errors import ConfigurationError
from flatbind.schema.record import RecordSchema
from tests.records import PERSON_COLUMNS, Address, Person


@dataclass
class Triple:
    a: str | None = None
    b: str | None = None
    c: str | None = None


def person_schema(**kwargs: object) -> RecordSchema:
    registry = ConverterRegistry()
    registry.register(BooleanConverter())
    return RecordSchema.build(Person, PERSON_COLUMNS, converters=registry, **kwargs)  # type: ignore[arg-type]


def no_salary_over_million(person: Person) -> Iterable[Diagnostic]:
    if person.salary is not None and person.salary > 1_000_000:
        yield Diagnostic.error("Salary is implausible.", "salary")


class TestOrdering:
    def test_explicit_then_unspecified(self) -> None:
        schema = RecordSchema.build(
            Triple,
            [ColumnDescriptor("a", order=2), ColumnDescriptor("b", order=-1), ColumnDescriptor("c", order=1)],
        )
        assert [c.name for c in schema.columns] == ["c", "a", "b"]

    def test_declaration_order_by_default(self) -> None:
        schema = RecordSchema.build(Triple, [ColumnDescriptor("c"), ColumnDescriptor("a"), ColumnDescriptor("b")])
        assert [c.name for c in schema.columns] == ["c", "a", "b"]

    def test_hierarchies_ordered_independently(self) -> None:
        child = RecordSchema.build(Address, [ColumnDescriptor("street")])
        schema = RecordSchema.build(
            Triple,
            [ColumnDescriptor("a")],
            [
                HierarchyDescriptor("b", "H1", order=5, schema=child),
                HierarchyDescriptor("c", "H2", order=0, schema=child),
            ],
        )
        assert [h.record_identifier for h in schema.hierarchies] == ["H2", "H1"]
        assert schema.resolve_child("H2") == 0


class TestChildDispatch:
    def make(self) -> RecordSchema:
        child = RecordSchema.build(Address, [ColumnDescriptor("street")])
        return RecordSchema.build(
            Triple,
            [],
            [HierarchyDescriptor("a", "H1", schema=child), HierarchyDescriptor("b", "H2", schema=child)],
        )

    def test_resolve_child(self) -> None:
        schema = self.make()
        h1, h2 = schema.resolve_child("H1"), schema.resolve_child("H2")
        assert h1 is not None and h2 is not None
        assert h1 != h2
        assert schema.resolve_child("H3") is None

    def test_child(self) -> None:
        schema = self.make()
        binding = schema.child("H2")
        assert binding is not None and binding.name == "b"
        assert schema.child("H3") is None
        assert schema.record_identifiers == ("H1", "H2")

    def test_duplicate_identifier_fails_at_build(self) -> None:
        child = RecordSchema.build(Address, [ColumnDescriptor("street")])
        with pytest.raises(ConfigurationError, match="duplicate record identifier 'H1'"):
            RecordSchema.build(
                Triple,
                [],
                [HierarchyDescriptor("a", "H1", schema=child), HierarchyDescriptor("b", "H1", schema=child)],
            )


class TestBuild:
    def test_sealed(self) -> None:
        schema = person_schema()
        with pytest.raises(AttributeError, match="sealed"):
            schema.validator = no_salary_over_million  # type: ignore[misc]
        with pytest.raises(AttributeError):
            del schema.columns

    def test_value_types_from_annotations(self) -> None:
        schema = person_schema()
        assert [c.value_type for c in schema.columns] == [int, str, str, date, Decimal, bool]
        assert schema.columns[-1].converter is not None

    def test_missing_annotation(self) -> None:
        with pytest.raises(ConfigurationError, match="no annotation"):
            RecordSchema.build(Triple, [ColumnDescriptor("d")])

    def test_explicit_value_type(self) -> None:
        schema = RecordSchema.build(Triple, [ColumnDescriptor("a", value_type=int | None)])
        assert schema.columns[0].value_type is int

    def test_attribute_bound_twice(self) -> None:
        with pytest.raises(ConfigurationError, match="more than once"):
            RecordSchema.build(Triple, [ColumnDescriptor("a"), ColumnDescriptor("a")])

    def test_primitive_record_type(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a class"):
            RecordSchema.build(str, [])

    def test_create_instance(self) -> None:
        assert isinstance(person_schema().create_instance(), Person)
        schema = person_schema(factory=lambda: Person(first_name="seed"))
        assert schema.create_instance().first_name == "seed"

    def test_column_names(self) -> None:
        schema = RecordSchema.build(Triple, [ColumnDescriptor("a", column_name="A_COL"), ColumnDescriptor("b")])
        assert schema.column_names == ["A_COL", "b"]


class TestBindColumns:
    def test_clean_record(self, context: LineContext) -> None:
        schema = person_schema()
        person = schema.parse(context, ["7", "Ann  ", "Lee", "1990-06-15", "52000.00", "Y"])
        assert context.messages == []
        assert person == Person(
            line=7,
            first_name="Ann",
            last_name="Lee",
            birth_date=date(1990, 6, 15),
            salary=Decimal("52000.00"),
            active=True,
        )

    def test_every_column_runs(self, context: LineContext) -> None:
        schema = person_schema()
        person = Person()
        found = schema.bind_columns(context, person, ["8", "", "Lee", "not-a-date", "1", "N"])
        assert [d.field for d in found] == ["line", "first_name", "birth_date"]
        assert person.line == 8
        assert person.last_name == "Lee"
        assert person.salary == Decimal("1")

    def test_missing_trailing_fields_bind_as_none(self, context: LineContext) -> None:
        schema = RecordSchema.build(Triple, [ColumnDescriptor("a"), ColumnDescriptor("b"), ColumnDescriptor("c")])
        triple = schema.parse(context, ["x"])
        assert triple == Triple(a="x")
        assert context.messages == []

    def test_returns_only_new_diagnostics(self, context: LineContext) -> None:
        context.messages.append(Diagnostic.info("earlier"))
        schema = RecordSchema.build(Triple, [ColumnDescriptor("a", mandatory=True)])
        found = schema.bind_columns(context, Triple(), [""])
        assert len(found) == 1
        assert len(context.messages) == 2

    def test_width_truncation_through_schema(self, context: LineContext) -> None:
        options = FormatOptions(width_overflow=WidthOverflow.TRUNCATE)
        schema = RecordSchema.build(Triple, [ColumnDescriptor("a", width=5)], options=options)
        triple = schema.parse(context, ["ABCDEFG"])
        assert triple.a == "ABCDE"
        assert [d.severity for d in context.messages] == [Severity.WARNING]


class TestColumnCount:
    def make(self, policy: ColumnCountValidation) -> RecordSchema:
        return RecordSchema.build(
            Triple,
            [ColumnDescriptor("a"), ColumnDescriptor("b")],
            options=FormatOptions(column_count_validation=policy),
        )

    def test_less_than_error(self, context: LineContext) -> None:
        self.make(ColumnCountValidation.LESS_THAN_ERROR).parse(context, ["x"])
        assert context.messages == [
            Diagnostic.error("There are less columns '1' within the record than expected '2'.")
        ]

    def test_more_than_warning(self, context: LineContext) -> None:
        self.make(ColumnCountValidation.LESS_AND_GREATER_THAN_WARNING).parse(context, ["x", "y", "z"])
        assert context.messages == [
            Diagnostic.warning("There are more columns '3' within the record than expected '2'.")
        ]

    def test_policy_direction(self, context: LineContext) -> None:
        self.make(ColumnCountValidation.LESS_THAN_ERROR).parse(context, ["x", "y", "z"])
        assert context.messages == []

    def test_none(self, context: LineContext) -> None:
        self.make(ColumnCountValidation.NONE).parse(context, [])
        assert context.messages == []


class TestValidation:
    def test_validator_runs_on_clean_record(self, context: LineContext) -> None:
        schema = person_schema(validator=no_salary_over_million)
        schema.parse(context, ["7", "Ann", "Lee", "", "2000000", "Y"])
        assert [d.text for d in context.messages] == ["Salary is implausible."]

    def test_validator_suppressed_by_column_error(self, context: LineContext) -> None:
        schema = person_schema(validator=no_salary_over_million)
        schema.parse(context, ["7", "", "Lee", "", "2000000", "Y"])
        assert [d.field for d in context.messages] == ["first_name"]

    def test_validator_suppressed_by_line_number_mismatch(self, context: LineContext) -> None:
        schema = person_schema(validator=no_salary_over_million)
        schema.parse(context, ["9", "Ann", "Lee", "", "2000000", "Y"])
        assert [d.field for d in context.messages] == ["line"]

    def test_validate_false_skips(self, context: LineContext) -> None:
        schema = person_schema(validator=no_salary_over_million)
        schema.parse(context, ["7", "Ann", "Lee", "", "2000000", "Y"], validate=False)
        assert context.messages == []

    def test_none_instance(self, context: LineContext) -> None:
        schema = person_schema(validator=no_salary_over_million)
        assert schema.validate(context, None) == []


class TestFormatColumns:
    def test_round_trip(self, context: LineContext) -> None:
        schema = person_schema()
        fields = ["7", "Ann", "Lee", "1990-06-15", "52000.00", "Y"]
        person = schema.parse(context, fields)
        assert schema.format_columns(context, person) == fields

    def test_nulls_and_failures_are_empty(self, context: LineContext) -> None:
        schema = person_schema()
        texts = schema.format_columns(context, Person(active=False))
        assert texts == ["7", "", "", "", "", "N"]
        assert [d.text for d in context.messages] == ["First Name is required."]
