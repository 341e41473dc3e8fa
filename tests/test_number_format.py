from __future__ import annotations

import pytest

from logics.data_model import AREA_UNIT, COUNT_UNIT
from logics.number_format import format_display, parse_number, quantity_decimals


@pytest.mark.parametrize("text", ["١٢٣", "۱۲۳", "123"])
def test_parse_number_reads_localised_digits(text):
    assert parse_number(text) == 123


@pytest.mark.parametrize("text", ["", "abc", ".", "تومان", None])
def test_parse_number_falls_back_to_zero(text):
    assert parse_number(text) == 0


def test_parse_number_strips_grouping_and_keeps_decimal_separator():
    assert parse_number("۱٬۲۳۴٫۵") == 1234.5
    assert parse_number("1,234.5") == 1234.5
    assert parse_number("95,000 تومان") == 95000


def test_parse_number_reads_leading_literal_only():
    assert parse_number("1.2.3") == 1.2
    assert parse_number("5.") == 5
    assert parse_number(".5") == 0.5


def test_parse_number_drops_sign_and_overflow():
    assert parse_number("-5") == 5
    assert parse_number("9" * 400) == 0


def test_format_display_groups_with_persian_digits():
    assert format_display(100_000_000_000, 0) == "۱۰۰٬۰۰۰٬۰۰۰٬۰۰۰"
    assert format_display(95_000, 0) == "۹۵٬۰۰۰"


def test_format_display_drops_decimal_part_of_whole_values():
    assert format_display(12.0, 1) == "۱۲"
    assert format_display(12.04, 1) == "۱۲"
    assert format_display(12.25, 1) == "۱۲٫۳"


def test_format_display_rounds_half_up():
    assert format_display(2.5, 0) == "۳"
    assert format_display(100_000_000_000 / 95_000, 1) == "۱٬۰۵۲٬۶۳۱٫۶"


def test_format_display_negative_and_non_finite():
    assert format_display(-1.25, 1) == "\u200e\u2212۱٫۲"
    assert format_display(float("nan")) == "۰"
    assert format_display(float("inf")) == "۰"
    assert format_display(0.04, 1) == "۰"


def test_formatted_value_parses_back():
    assert parse_number(format_display(1_052_631.6, 1)) == 1_052_631.6


def test_quantity_decimals_by_unit():
    assert quantity_decimals(COUNT_UNIT) == 0
    assert quantity_decimals(AREA_UNIT) == 1
