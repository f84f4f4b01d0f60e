"""Tests for date, datetime and timespan converters."""

from datetime import date, datetime, timedelta

from flatbind.converters.temporal import DateConverter, DateTimeConverter, TimeSpanConverter


class TestDateTimeConverter:
    def test_empty_is_min(self) -> None:
        assert DateTimeConverter().try_parse("") == (True, datetime.min)

    def test_iso_default(self) -> None:
        conv = DateTimeConverter()
        value = datetime(2024, 3, 1, 8, 30)
        assert conv.try_format(value) == (True, "2024-03-01T08:30:00")
        assert conv.try_parse("2024-03-01T08:30:00") == (True, value)

    def test_exact_format(self) -> None:
        conv = DateTimeConverter("%Y%m%d%H%M")
        assert conv.try_parse("202403010830") == (True, datetime(2024, 3, 1, 8, 30))
        assert not conv.try_parse("2024-03-01").ok
        assert conv.try_format(datetime(2024, 3, 1, 8, 30)) == (True, "202403010830")

    def test_wrong_type(self) -> None:
        assert not DateTimeConverter().try_format(date(2024, 1, 1)).ok


class TestDateConverter:
    def test_empty_is_min(self) -> None:
        assert DateConverter().try_parse(None) == (True, date.min)

    def test_format_string(self) -> None:
        conv = DateConverter("%d/%m/%Y")
        assert conv.try_parse("05/01/2024") == (True, date(2024, 1, 5))
        assert conv.try_format(date(2024, 1, 5)) == (True, "05/01/2024")

    def test_invalid(self) -> None:
        assert not DateConverter().try_parse("2024-13-01").ok

    def test_datetime_formats_as_its_date(self) -> None:
        conv = DateConverter("%d/%m/%Y")
        assert conv.try_format(datetime(2024, 1, 5, 13, 30)) == (True, "05/01/2024")
        assert not conv.try_format("2024-01-05").ok


class TestTimeSpanConverter:
    def test_empty_is_min(self) -> None:
        assert TimeSpanConverter().try_parse("") == (True, timedelta.min)

    def test_default_text(self) -> None:
        conv = TimeSpanConverter()
        assert conv.try_parse("2.01:00:30") == (True, timedelta(days=2, hours=1, seconds=30))
        assert conv.try_format(timedelta(days=2, hours=1, seconds=30)) == (True, "2.01:00:30")

    def test_template(self) -> None:
        conv = TimeSpanConverter("{sign}{hours:02}h{minutes:02}")
        assert conv.try_format(timedelta(hours=3, minutes=15)) == (True, "03h15")

    def test_unknown_template_field_fails(self) -> None:
        assert not TimeSpanConverter("{weeks}").try_format(timedelta(days=7)).ok

    def test_invalid(self) -> None:
        assert not TimeSpanConverter().try_parse("1:2:3").ok
