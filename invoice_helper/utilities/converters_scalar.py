# invoice_helper/utilities/converters_scalar.py
from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Final, Optional, Union

from invoice_helper.errors import InvalidAmount, InvalidColumnLabel

_COLUMN_LABEL_RE: Final = re.compile(r"^[A-Za-z]+$")
_CENTS: Final = Decimal("0.01")

AmountLike = Union[Decimal, int, float, str]


# region Column labels


def column_to_index(label: Optional[str]) -> int:
    """
    Convert a spreadsheet column label to a zero-based column index.

    Letters are read most-significant first in base 26 with ``A = 1``, and the
    result is shifted down by one::

        "A" -> 0, "Z" -> 25, "AA" -> 26, "f" -> 5

    Raises
    ------
    InvalidColumnLabel
        If the label is missing, empty, or contains anything but ASCII letters.
    """
    if not isinstance(label, str) or not _COLUMN_LABEL_RE.match(label):
        raise InvalidColumnLabel(label)
    acc = 0
    for ch in label.upper():
        acc = acc * 26 + (ord(ch) - ord("A") + 1)
    return acc - 1


def index_to_column(index: int) -> str:
    """Inverse of :func:`column_to_index`: ``0 -> "A"``, ``26 -> "AA"``."""
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise ValueError(f"Column index must be a non-negative int, got {index!r}")
    letters = []
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters.append(chr(ord("A") + rem))
    return "".join(reversed(letters))


# endregion Column labels

# region Amounts


def parse_amount(text: str) -> Decimal:
    """
    Parse an amount token such as ``"15,250.75"`` into a Decimal.

    Comma thousands separators and surrounding whitespace are removed; the rest
    must be a finite decimal number.

    Raises
    ------
    InvalidAmount
        If the cleaned text is empty, malformed, or not finite (``nan``/``inf``).
    """
    cleaned = str(text).replace(",", "").strip()
    try:
        value = Decimal(cleaned)
    except InvalidOperation as e:
        raise InvalidAmount(text) from e
    if not value.is_finite():
        raise InvalidAmount(text)
    return value


def format_amount(value: AmountLike, *, thousands: bool = True) -> str:
    """
    Render an amount with exactly two fraction digits, en-US style.

    Rounding is ROUND_HALF_UP on the decimal value (``0.125 -> "0.13"``).
    Floats are converted through ``str`` first so ``2.675`` rounds as written,
    not as its binary approximation.

    Examples:
        format_amount("1234.5")                    -> "1,234.50"
        format_amount(Decimal("10000"))            -> "10,000.00"
        format_amount(1234.5, thousands=False)     -> "1234.50"
    """
    if isinstance(value, Decimal):
        dec = value
        if not dec.is_finite():
            raise InvalidAmount(value)
    elif isinstance(value, bool):
        raise InvalidAmount(value)
    elif isinstance(value, int):
        dec = Decimal(value)
    elif isinstance(value, float):
        dec = parse_amount(str(value))
    else:
        dec = parse_amount(value)
    quantized = dec.quantize(_CENTS, rounding=ROUND_HALF_UP)
    return f"{quantized:,.2f}" if thousands else f"{quantized:.2f}"


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Lenient cell → Decimal coercion used when summing spreadsheet columns.

    Decimal, int and finite float values pass through; strings go through
    :func:`parse_amount`. Anything else (None, booleans, text, NaN) yields
    ``None`` so the caller can skip the cell.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        try:
            return parse_amount(str(value))
        except InvalidAmount:
            return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return parse_amount(value)
        except InvalidAmount:
            return None
    return None


# endregion Amounts
