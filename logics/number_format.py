"""
Display formatting and free-text parsing of numbers for the fa-IR screen.

Formatting follows the CLDR fa-IR number pattern:
Persian digits, ``٬`` as the thousands separator and ``٫`` as the decimal
separator. Parsing is deliberately permissive: anything that cannot be read
as a number becomes ``0``.
"""
import math
import re

import numpy as np

from logics.data_model import COUNT_UNIT

PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
ARABIC_INDIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"
GROUP_SEPARATOR = "٬"
DECIMAL_SEPARATOR = "٫"
MINUS_SIGN = "\u200e\u2212"  # left-to-right mark + minus sign

_TO_LOCAL = str.maketrans({
    **{str(d): PERSIAN_DIGITS[d] for d in range(10)},
    ",": GROUP_SEPARATOR,
    ".": DECIMAL_SEPARATOR,
})
_TO_ASCII = str.maketrans({
    **{PERSIAN_DIGITS[d]: str(d) for d in range(10)},
    **{ARABIC_INDIC_DIGITS[d]: str(d) for d in range(10)},
    DECIMAL_SEPARATOR: ".",
})

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_FLOAT = re.compile(r"\d*\.?\d*")


def round_half_up(value, decimals):
    """Round like JavaScript's Math.round applied at ``decimals`` places."""
    multiplier = 10 ** decimals
    return math.floor(value * multiplier + 0.5) / multiplier


def format_display(value, decimals=1):
    """
    Format a number for display.

    Args:
        value: Number to format.
        decimals: Fraction digits kept after rounding.

    Returns:
        Localised string. Whole values carry no decimal part; other values
        carry exactly ``decimals`` fraction digits.
    """
    if value is None or not np.isfinite(value):
        return PERSIAN_DIGITS[0]

    rounded = round_half_up(float(value), decimals)
    if rounded == 0:
        return PERSIAN_DIGITS[0]

    if rounded.is_integer():
        text = f"{abs(rounded):,.0f}"
    else:
        text = f"{abs(rounded):,.{decimals}f}"

    text = text.translate(_TO_LOCAL)
    return f"{MINUS_SIGN}{text}" if rounded < 0 else text


def normalize_digits(text):
    """Replace Persian / Arabic-Indic digits and the fa-IR decimal separator with ASCII."""
    return text.translate(_TO_ASCII)


def parse_number(text):
    """
    Parse user input into a float.

    Every character that is not an ASCII digit or ``.`` is dropped after
    digit normalisation, then the longest leading float literal is read.
    Empty, unparsable or non-finite input gives ``0.0``.
    """
    if text is None:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", normalize_digits(str(text)))
    literal = _LEADING_FLOAT.match(cleaned).group(0)
    if not any(ch.isdigit() for ch in literal):
        return 0.0

    value = float(literal)
    return value if np.isfinite(value) else 0.0


def quantity_decimals(unit):
    """Counted units (parking spots) are shown whole, areas with one decimal."""
    return 0 if unit == COUNT_UNIT else 1
