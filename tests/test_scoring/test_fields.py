"""
Tests for reorder_planner/scoring/fields.py.

What we test
------------
to_number():
  - ints, floats, Decimals and numeric strings parse.
  - None, empty/whitespace strings, text and dates become 0.0.
  - NaN and ±inf become 0.0.
  - bools map to 1.0 / 0.0.

to_string_safe():
  - None -> "".
  - Integral floats drop the trailing ".0".

first_present():
  - Returns the first key that is present and not None.
  - Empty strings count as present.
  - Falls back to the default.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from reorder_planner.scoring.fields import (
    first_present,
    number_field,
    string_field,
    to_number,
    to_string_safe,
)


class TestToNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (3, 3.0),
            (2.5, 2.5),
            (Decimal("1.25"), 1.25),
            ("4", 4.0),
            (" 7.5 ", 7.5),
            ("-2", -2.0),
            ("1e2", 100.0),
        ],
    )
    def test_numeric_values(self, value, expected):
        assert to_number(value) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "abc", "12abc", "1_000", date(2025, 1, 1), datetime(2025, 1, 1), [1], {}],
    )
    def test_unparsable_values_are_zero(self, value):
        assert to_number(value) == 0.0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), "inf", "NaN"])
    def test_non_finite_values_are_zero(self, value):
        assert to_number(value) == 0.0

    def test_bools(self):
        assert to_number(True) == 1.0
        assert to_number(False) == 0.0


class TestToStringSafe:
    def test_none_is_empty(self):
        assert to_string_safe(None) == ""

    def test_integral_float_drops_decimal(self):
        assert to_string_safe(9780000000002.0) == "9780000000002"

    def test_fractional_float_kept(self):
        assert to_string_safe(2.5) == "2.5"

    def test_int_and_str_unchanged(self):
        assert to_string_safe(9780000000002) == "9780000000002"
        assert to_string_safe(" Y ") == " Y "


class TestFirstPresent:
    def test_priority_order(self):
        record = {"ISBN": "second", "EAN": "first"}
        assert first_present(record, ("EAN", "ISBN")) == "first"

    def test_skips_none(self):
        record = {"EAN": None, "ISBN": "fallback"}
        assert first_present(record, ("EAN", "ISBN")) == "fallback"

    def test_empty_string_counts_as_present(self):
        record = {"EAN": "", "ISBN": "ignored"}
        assert first_present(record, ("EAN", "ISBN")) == ""

    def test_default_when_absent(self):
        assert first_present({}, ("EAN", "ISBN"), default="x") == "x"
        assert first_present({}, ("EAN",)) is None

    def test_number_and_string_field_helpers(self):
        record = {"OnHand": "3", "Title": None, "TITLE": "Upper"}
        assert number_field(record, "QoH", "OnHand") == 3.0
        assert string_field(record, "Title", "TITLE") == "Upper"
        assert string_field({}, "Title") == ""
