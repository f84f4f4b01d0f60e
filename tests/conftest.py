"""Shared pytest fixtures for flatbind tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from flatbind.converters.registry import ConverterRegistry
from flatbind.domain.context import LineContext
from flatbind.domain.descriptors import ColumnDescriptor, HierarchyDescriptor
from flatbind.schema.catalog import SchemaCatalog
from tests.records import Address, Customer, Phone


@pytest.fixture
def context() -> LineContext:
    """Context for line 7 with no messages."""
    return LineContext(line_number=7)


@pytest.fixture
def registry() -> ConverterRegistry:
    return ConverterRegistry()


@pytest.fixture
def catalog() -> SchemaCatalog:
    """Catalog with Address/Phone/Customer defined (children first)."""
    cat = SchemaCatalog()
    cat.define(Address, [ColumnDescriptor("street"), ColumnDescriptor("city")])
    cat.define(Phone, [ColumnDescriptor("number", mandatory=True)])
    cat.define(
        Customer,
        [ColumnDescriptor("code", mandatory=True)],
        [
            HierarchyDescriptor("address", "AD", record_type=Address),
            HierarchyDescriptor("phones", "PH", record_type=Phone, is_collection=True, max_count=2),
        ],
    )
    return cat


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Run in an empty temp directory with no FLATBIND_* env vars set."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FLATBIND_CONFIG", raising=False)
    for name in ("FLATBIND_FORMAT__WIDTH_OVERFLOW", "FLATBIND_FORMAT__STRING_TRIM"):
        monkeypatch.delenv(name, raising=False)
    yield tmp_path
