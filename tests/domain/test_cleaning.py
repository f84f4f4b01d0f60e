"""Tests for field text cleaning."""

import pytest

from flatbind.domain.cleaning import clean_text
from flatbind.domain.types import StringTransform, StringTrim


class TestTrim:
    @pytest.mark.parametrize(
        "trim,expected",
        [
            (StringTrim.NONE, "  ab  "),
            (StringTrim.START, "ab  "),
            (StringTrim.END, "  ab"),
            (StringTrim.BOTH, "ab"),
        ],
    )
    def test_trim_modes(self, trim: StringTrim, expected: str) -> None:
        assert clean_text("  ab  ", trim, StringTransform.NONE) == expected

    def test_default_trims_end(self) -> None:
        assert clean_text(" ab ") == " ab"


class TestTransform:
    def test_empty_to_null_after_trim(self) -> None:
        assert clean_text("   ", StringTrim.END, StringTransform.EMPTY_TO_NULL) is None

    def test_empty_to_null_keeps_whitespace_without_trim(self) -> None:
        assert clean_text("   ", StringTrim.NONE, StringTransform.EMPTY_TO_NULL) == "   "

    def test_null_to_empty(self) -> None:
        assert clean_text(None, StringTrim.END, StringTransform.NULL_TO_EMPTY) == ""

    def test_none_stays_none_by_default(self) -> None:
        assert clean_text(None) is None

    def test_transform_none_keeps_empty(self) -> None:
        assert clean_text("", StringTrim.BOTH, StringTransform.NONE) == ""
