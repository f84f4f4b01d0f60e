"""Date, datetime and timespan converters.

Empty text parses to the type's minimum value. With a format string the
parse is an exact ``strptime`` match and the output is ``strftime``;
without one both directions use ISO-8601.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from flatbind.converters.base import FAILED, Converted, ValueConverter
from flatbind.converters.native import format_timespan, parse_timespan


class DateTimeConverter(ValueConverter[datetime]):
    """``datetime`` <-> text."""

    value_type = datetime

    def __init__(self, format: str | None = None) -> None:
        self.format = format

    def try_format(self, value: datetime) -> Converted:
        if not isinstance(value, datetime):
            return FAILED
        try:
            return Converted(True, value.strftime(self.format) if self.format else value.isoformat())
        except ValueError:
            return FAILED

    def try_parse(self, text: str | None) -> Converted:
        if not text:
            return Converted(True, datetime.min)
        try:
            if self.format:
                return Converted(True, datetime.strptime(text, self.format))
            return Converted(True, datetime.fromisoformat(text))
        except ValueError:
            return FAILED


class DateConverter(ValueConverter[date]):
    """``date`` <-> text."""

    value_type = date

    def __init__(self, format: str | None = None) -> None:
        self.format = format

    def try_format(self, value: date) -> Converted:
        if not isinstance(value, date):
            return FAILED
        if isinstance(value, datetime):
            value = value.date()
        try:
            return Converted(True, value.strftime(self.format) if self.format else value.isoformat())
        except ValueError:
            return FAILED

    def try_parse(self, text: str | None) -> Converted:
        if not text:
            return Converted(True, date.min)
        try:
            if self.format:
                return Converted(True, datetime.strptime(text, self.format).date())
            return Converted(True, date.fromisoformat(text))
        except ValueError:
            return FAILED


class TimeSpanConverter(ValueConverter[timedelta]):
    """``timedelta`` <-> text.

    The default text form is ``[-][d.]hh:mm:ss[.ffffff]``. A format string is
    a ``str.format`` template over ``sign``, ``days``, ``hours``, ``minutes``,
    ``seconds`` and ``microseconds`` (for example ``"{hours:02}{minutes:02}"``);
    templates are write-only, parsing always reads the default form.
    """

    value_type = timedelta

    def __init__(self, format: str | None = None) -> None:
        self.format = format

    def try_format(self, value: timedelta) -> Converted:
        if not isinstance(value, timedelta):
            return FAILED
        try:
            return Converted(True, format_timespan(value, self.format))
        except (KeyError, IndexError, ValueError):
            return FAILED

    def try_parse(self, text: str | None) -> Converted:
        if not text:
            return Converted(True, timedelta.min)
        value = parse_timespan(text)
        return FAILED if value is None else Converted(True, value)
