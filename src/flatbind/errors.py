"""Exception types raised by flatbind.

Only configuration faults are raised. Problems found in record data are
never raised; they are appended to the record context as
:class:`~flatbind.domain.diagnostics.Diagnostic` items.
"""

from __future__ import annotations


class FlatbindError(Exception):
    """Base class for all flatbind exceptions."""


class ConfigurationError(FlatbindError, ValueError):
    """A schema, converter or settings definition that cannot work for any input.

    Raised at schema-build time (duplicate record identifiers, missing keyed
    converter, unsupported field type, ...) so that a broken file format
    halts startup instead of failing record by record.
    """
