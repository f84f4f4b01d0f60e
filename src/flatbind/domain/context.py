"""Record context contract and a minimal in-memory implementation.

The file reader owns the context for the line it is processing and passes
it by reference into every binding call. Bindings only append to
``messages`` and read ``line_number`` / ``has_errors``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from flatbind.domain.diagnostics import Diagnostic
from flatbind.domain.types import Severity


@runtime_checkable
class RecordContext(Protocol):
    """What the engine needs from the current-record container."""

    @property
    def line_number(self) -> int: ...

    @property
    def messages(self) -> list[Diagnostic]: ...

    @property
    def has_errors(self) -> bool: ...


@dataclass
class LineContext:
    """Current record state for one physical line.

    Attributes:
        line_number: 1-based line number within the file.
        line_data: Raw line text, when the caller has it.
        record_identifier: Leading identifier read from the line (hierarchical files).
        value: The record instance bound from the line, once created.
        messages: Diagnostics accumulated for this record.
    """

    line_number: int = 0
    line_data: str | None = None
    record_identifier: str | None = None
    value: Any = None
    messages: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(m.is_error for m in self.messages)

    @property
    def errors(self) -> list[Diagnostic]:
        return [m for m in self.messages if m.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [m for m in self.messages if m.severity == Severity.WARNING]
