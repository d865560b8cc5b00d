# invoice_helper/data_model/options.py
"""
Named switches for the locator and the grouper.

Defaults reproduce the behaviour of the invoice tool these rules were taken
from; the grouping quirks are exposed here so callers can turn them off
instead of relying on them silently.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern, Tuple


@dataclass(frozen=True)
class LocatorMarkers:
    """
    Literals and patterns that delimit an identifier's section of invoice text.

    boundary_pattern
        A line (after the identifier line) matching this ends the section; on
        the invoices handled here a 10-digit run starts the next shipment.
    total_marker
        A line containing this literal is the document total and also ends the
        section.
    subtotal_marker
        A line starting with this literal makes the amount *before* the
        preceding amount the answer.
    """

    boundary_pattern: Pattern[str] = re.compile(r"\d{10}")
    total_marker: str = "Total facture"
    subtotal_marker: str = "Sous-Total Service"


DEFAULT_MARKERS = LocatorMarkers()


@dataclass(frozen=True)
class GroupingOptions:
    """
    fallback_total_to_reference
        When totals are requested without a usable total column, sum the
        reference column instead. Off → no subtotal rows at all.
    positive_totals_only
        Only groups whose sum is strictly positive receive a subtotal row.
        Off → every group with at least one numeric cell gets one.
    """

    fallback_total_to_reference: bool = True
    positive_totals_only: bool = True


DEFAULT_GROUPING = GroupingOptions()

EXTENDED_HEADERS: Tuple[str, ...] = (
    "Ratio",
    "Shipping cost per item - actual amount",
    "Shipping cost - paid by client",
    "Shipping cost - gain/ loss",
)
