"""Native codecs — one parse/format pair per primitive kind.

A column whose type maps to a :class:`PrimitiveKind` and has no converter
uses the codec selected here once, at schema-build time.

Format strings are Python's own: a format spec (``"08.2f"``) for numbers
and a ``strftime`` pattern (``"%Y%m%d"``) for dates and times. Without a
format string values are written in the form the parser reads back
(``str()`` for numbers, ISO-8601 for dates and times).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any

from flatbind.converters.base import FAILED, Converted
from flatbind.domain.kinds import PrimitiveKind

_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")
_TIMESPAN_RE = re.compile(
    r"^\s*(?P<sign>-)?(?:(?P<days>\d+)\.)?(?P<hours>\d{1,2}):(?P<minutes>\d{2}):(?P<seconds>\d{2})"
    r"(?:\.(?P<fraction>\d{1,6}))?\s*$"
)


@dataclass(frozen=True)
class NativeCodec:
    """Parse/format functions for one primitive kind."""

    kind: PrimitiveKind
    parse: Callable[[str | None], Converted]
    format: Callable[[Any, str | None], Converted]


# ---------------------------------------------------------------------------
# Timespan text helpers (shared with the TimeSpan converter)
# ---------------------------------------------------------------------------


def parse_timespan(text: str) -> timedelta | None:
    """Parse ``[-][d.]hh:mm:ss[.ffffff]``; None when the text does not match."""
    m = _TIMESPAN_RE.match(text)
    if m is None:
        return None
    hours, minutes, seconds = int(m["hours"]), int(m["minutes"]), int(m["seconds"])
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    fraction = (m["fraction"] or "").ljust(6, "0")
    value = timedelta(
        days=int(m["days"] or 0),
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=int(fraction or 0),
    )
    return -value if m["sign"] else value


def timespan_parts(value: timedelta) -> dict[str, Any]:
    """Split *value* into sign and absolute components for formatting."""
    sign = "-" if value < timedelta(0) else ""
    magnitude = abs(value)
    hours, rem = divmod(magnitude.seconds, 3600)
    minutes, seconds = divmod(rem, 60)
    return {
        "sign": sign,
        "days": magnitude.days,
        "hours": hours,
        "minutes": minutes,
        "seconds": seconds,
        "microseconds": magnitude.microseconds,
    }


def format_timespan(value: timedelta, template: str | None = None) -> str:
    """Format *value*; *template* is a ``str.format`` pattern over :func:`timespan_parts`."""
    parts = timespan_parts(value)
    if template:
        return template.format(**parts)
    text = f"{parts['hours']:02}:{parts['minutes']:02}:{parts['seconds']:02}"
    if parts["days"]:
        text = f"{parts['days']}.{text}"
    if parts["microseconds"]:
        text = f"{text}.{parts['microseconds']:06}"
    return f"{parts['sign']}{text}"


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------


def _parse_string(text: str | None) -> Converted:
    return Converted(True, text)


def _parse_boolean(text: str | None) -> Converted:
    if text is None:
        return FAILED
    lowered = text.strip().lower()
    if lowered == "true":
        return Converted(True, True)
    if lowered == "false":
        return Converted(True, False)
    return FAILED


def _parse_integer(text: str | None) -> Converted:
    if text is None or not _INTEGER_RE.match(text):
        return FAILED
    try:
        return Converted(True, int(text))
    except ValueError:
        # Digit strings beyond the interpreter's int conversion limit.
        return FAILED


def _parse_float(text: str | None) -> Converted:
    if not text or "_" in text:
        return FAILED
    try:
        return Converted(True, float(text))
    except ValueError:
        return FAILED


def _parse_decimal(text: str | None) -> Converted:
    if not text or "_" in text:
        return FAILED
    try:
        return Converted(True, Decimal(text.strip()))
    except InvalidOperation:
        return FAILED


def _parse_datetime(text: str | None) -> Converted:
    if not text:
        return FAILED
    try:
        return Converted(True, datetime.fromisoformat(text.strip()))
    except ValueError:
        return FAILED


def _parse_date(text: str | None) -> Converted:
    if not text:
        return FAILED
    try:
        return Converted(True, date.fromisoformat(text.strip()))
    except ValueError:
        return FAILED


def _parse_timespan(text: str | None) -> Converted:
    if not text:
        return FAILED
    value = parse_timespan(text)
    return FAILED if value is None else Converted(True, value)


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def _is_number(value: Any, *types: type) -> bool:
    return isinstance(value, types) and not isinstance(value, bool)


def _format_spec(value: Any, spec: str | None) -> Converted:
    try:
        return Converted(True, format(value, spec or ""))
    except (ValueError, TypeError, OverflowError):
        return FAILED


def _format_string(value: Any, spec: str | None) -> Converted:
    return Converted(True, value) if isinstance(value, str) else FAILED


def _format_boolean(value: Any, spec: str | None) -> Converted:
    if not isinstance(value, bool):
        return FAILED
    return Converted(True, "True" if value else "False")


def _format_integer(value: Any, spec: str | None) -> Converted:
    if not _is_number(value, int):
        return FAILED
    return _format_spec(value, spec)


def _format_float(value: Any, spec: str | None) -> Converted:
    if not _is_number(value, float, int):
        return FAILED
    try:
        value = float(value)
    except OverflowError:
        return FAILED
    return _format_spec(value, spec)


def _format_decimal(value: Any, spec: str | None) -> Converted:
    if not _is_number(value, Decimal, int):
        return FAILED
    return _format_spec(Decimal(value), spec)


def _format_datetime(value: Any, spec: str | None) -> Converted:
    if not isinstance(value, datetime):
        return FAILED
    try:
        return Converted(True, value.strftime(spec) if spec else value.isoformat())
    except ValueError:
        return FAILED


def _format_date(value: Any, spec: str | None) -> Converted:
    if not isinstance(value, date):
        return FAILED
    if isinstance(value, datetime):
        value = value.date()
    try:
        return Converted(True, value.strftime(spec) if spec else value.isoformat())
    except ValueError:
        return FAILED


def _format_timespan(value: Any, spec: str | None) -> Converted:
    if not isinstance(value, timedelta):
        return FAILED
    try:
        return Converted(True, format_timespan(value, spec))
    except (KeyError, IndexError, ValueError):
        return FAILED


NATIVE_CODECS: dict[PrimitiveKind, NativeCodec] = {
    PrimitiveKind.STRING: NativeCodec(PrimitiveKind.STRING, _parse_string, _format_string),
    PrimitiveKind.BOOLEAN: NativeCodec(PrimitiveKind.BOOLEAN, _parse_boolean, _format_boolean),
    PrimitiveKind.INTEGER: NativeCodec(PrimitiveKind.INTEGER, _parse_integer, _format_integer),
    PrimitiveKind.FLOAT: NativeCodec(PrimitiveKind.FLOAT, _parse_float, _format_float),
    PrimitiveKind.DECIMAL: NativeCodec(PrimitiveKind.DECIMAL, _parse_decimal, _format_decimal),
    PrimitiveKind.DATETIME: NativeCodec(PrimitiveKind.DATETIME, _parse_datetime, _format_datetime),
    PrimitiveKind.DATE: NativeCodec(PrimitiveKind.DATE, _parse_date, _format_date),
    PrimitiveKind.TIMESPAN: NativeCodec(PrimitiveKind.TIMESPAN, _parse_timespan, _format_timespan),
}


def native_codec(kind: PrimitiveKind) -> NativeCodec:
    """Return the codec for *kind*. The table covers every PrimitiveKind."""
    return NATIVE_CODECS[kind]
