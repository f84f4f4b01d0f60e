"""Schema layer: column and hierarchy bindings aggregated per record type."""

from flatbind.schema.catalog import SchemaCatalog
from flatbind.schema.columns import ColumnBinding
from flatbind.schema.hierarchy import HierarchyBinding
from flatbind.schema.record import RecordSchema

__all__ = ["ColumnBinding", "HierarchyBinding", "RecordSchema", "SchemaCatalog"]
