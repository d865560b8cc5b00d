#!/usr/bin/env python3
"""
Core Utilities

Features:
- String utilities
- Cell value → text normalization for identifier lookups
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Optional


def is_null_or_whitespace(s: Optional[str]) -> bool:
    """Check if a string is None, empty, or consists only of whitespace."""
    return s is None or s.strip() == ""


def is_blank_cell(value: Any) -> bool:
    """True for cells that carry no value: None, NaN, or whitespace-only text."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str):
        return is_null_or_whitespace(value)
    return False


def cell_text(value: Any) -> str:
    """
    Render a spreadsheet cell as the text a reader sees in the sheet.

    Spreadsheet engines hand back integral numbers as floats (``1234567890.0``),
    which would never match the ``1234567890`` printed in a PDF, so integral
    floats and Decimals are rendered without a fraction.
    """
    if is_blank_cell(value):
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return str(int(value))
    return str(value)
