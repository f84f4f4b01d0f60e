"""Record-level diagnostics.

A Diagnostic is the only way binding code reports a data problem. Bindings
create and append diagnostics; they never read or clear them.
"""

from __future__ import annotations

from pydantic import BaseModel

from flatbind.domain.types import Severity


class Diagnostic(BaseModel):
    """One message about a record or one of its fields.

    Attributes:
        field: Attribute name the message refers to, or None for the record.
        severity: Error, warning or info.
        text: Rendered, human-readable message.
    """

    model_config = {"frozen": True}

    field: str | None = None
    severity: Severity = Severity.ERROR
    text: str

    @classmethod
    def error(cls, text: str, field: str | None = None) -> Diagnostic:
        return cls(field=field, severity=Severity.ERROR, text=text)

    @classmethod
    def warning(cls, text: str, field: str | None = None) -> Diagnostic:
        return cls(field=field, severity=Severity.WARNING, text=text)

    @classmethod
    def info(cls, text: str, field: str | None = None) -> Diagnostic:
        return cls(field=field, severity=Severity.INFO, text=text)

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR
