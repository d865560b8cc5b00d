# invoice_helper/controllers/text_locator.py
"""
Locate the amount that belongs to an identifier in extracted invoice text.

Invoice PDFs list one section per shipment: a line carrying the shipment
identifier, a few amount-bearing lines, and sometimes a "Sous-Total Service"
line. The scan below walks the text once:

• SEARCHING: skip lines until one contains the identifier.
• IN_SECTION: starting on that line, remember the last two trailing amounts
  until a boundary (a 10-digit run or "Total facture") on a later line.

The answer is the last amount of the section, except when a line starting with
the subtotal marker is reached while two amounts are known: the line just
before the marker is itself a subtotal, so the amount before it wins.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Union

from invoice_helper.data_model import DEFAULT_MARKERS, LocatorMarkers, ScanState
from invoice_helper.errors import InvalidAmount
from invoice_helper.utilities import format_amount, parse_amount

log = logging.getLogger(__name__)

TRAILING_AMOUNT_RE = re.compile(r"(\d{1,3}(?:,\d{3})*\.\d{2}|\d+\.\d{2})\s*$")

Document = Union[str, Sequence[str]]


# --- Text helpers -----------------------------------------------------------


def split_lines(text: str) -> List[str]:
    """Split extracted text on line feeds, dropping a trailing ``\\r`` per line."""
    return [ln.rstrip("\r") for ln in (text or "").split("\n")]


def combine_documents(texts: Iterable[str]) -> List[str]:
    """
    Concatenate several documents' text, in the order given, into one line list.

    Each text is followed by a line break, as the upload handler did. Order
    matters: when an identifier occurs in two documents, the first one wins.
    """
    combined = "".join(f"{t or ''}\n" for t in texts)
    return split_lines(combined)


# --- Scan -------------------------------------------------------------------


class AmountScan:
    """
    One pass over a document for one identifier.

    Feed lines with :meth:`feed` until it returns True (answer decided), then
    read :meth:`result`. :meth:`run` does both for a whole line sequence.
    """

    def __init__(
        self, identifier: str, markers: LocatorMarkers = DEFAULT_MARKERS
    ) -> None:
        self.identifier = identifier
        self.markers = markers
        self.state = ScanState.SEARCHING
        self.last_amount: Optional[Decimal] = None
        self.previous_amount: Optional[Decimal] = None
        self._decided = False
        self._answer: Optional[Decimal] = None

    # ----- line predicates -----

    def is_boundary(self, line: str) -> bool:
        return bool(
            self.markers.boundary_pattern.search(line)
            or self.markers.total_marker in line
        )

    def is_subtotal_marker(self, line: str) -> bool:
        return line.startswith(self.markers.subtotal_marker)

    @staticmethod
    def trailing_amount(line: str) -> Optional[Decimal]:
        m = TRAILING_AMOUNT_RE.search(line)
        if not m:
            return None
        try:
            return parse_amount(m.group(1))
        except InvalidAmount:
            log.debug("Skipping unparseable amount token %r", m.group(1))
            return None

    # ----- transitions -----

    def feed(self, line: str) -> bool:
        if self._decided:
            return True
        if self.state is ScanState.SEARCHING:
            if self.identifier not in line:
                return False
            self.state = ScanState.IN_SECTION
        elif self.is_boundary(line):
            return self._decide(self.last_amount)

        amount = self.trailing_amount(line)
        if amount is not None:
            self.previous_amount = self.last_amount
            self.last_amount = amount

        if self.is_subtotal_marker(line) and self.previous_amount is not None:
            return self._decide(self.previous_amount)
        return False

    def _decide(self, amount: Optional[Decimal]) -> bool:
        self._decided = True
        self._answer = amount
        return True

    def result(self) -> Optional[str]:
        """Formatted amount, or None when the identifier or an amount is missing."""
        if self.state is ScanState.SEARCHING:
            return None
        amount = self._answer if self._decided else self.last_amount
        return format_amount(amount) if amount is not None else None

    def run(self, lines: Iterable[str]) -> Optional[str]:
        for line in lines:
            if self.feed(line):
                break
        return self.result()


def locate_amount(
    document: Document,
    identifier: str,
    markers: LocatorMarkers = DEFAULT_MARKERS,
) -> Optional[str]:
    """Return the formatted amount for ``identifier`` in ``document``, or None.

    Parameters
    ----------
    document : str | Sequence[str]
        Extracted text, either raw or already split into lines.
    identifier : str
        Search key; matched by case-sensitive substring containment. Only the
        first line containing it starts a section. A blank identifier never
        matches.
    markers : LocatorMarkers
        Boundary and subtotal literals.

    Returns
    -------
    Optional[str]
        e.g. ``"10,000.00"``; None when not found.
    """
    if not identifier:
        return None
    lines = split_lines(document) if isinstance(document, str) else document
    found = AmountScan(identifier, markers).run(lines)
    log.debug("locate %r -> %r", identifier, found)
    return found
