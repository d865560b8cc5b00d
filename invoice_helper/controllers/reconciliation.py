# invoice_helper/controllers/reconciliation.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from invoice_helper.controllers.text_locator import Document, locate_amount, split_lines
from invoice_helper.data_model import (
    DEFAULT_MARKERS,
    EXTENDED_HEADERS,
    LocatorMarkers,
    SheetGrid,
    cell_at,
    copy_rows,
    normalize_rows,
)
from invoice_helper.errors import MissingInput
from invoice_helper.utilities import cell_text, is_blank_cell

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeResult:
    """
    Grid with located amounts written in, plus the ``(identifier, amount)``
    pairs that were found, in row order.
    """
    rows: SheetGrid
    updates: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)


def append_headers(rows: SheetGrid, headers: Sequence[str] = EXTENDED_HEADERS) -> SheetGrid:
    """Append ``headers`` after the last header cell. Mutates ``rows``."""
    if rows:
        rows[0].extend(headers)
    return rows


def merge_amounts(
    grid: Optional[SheetGrid],
    document: Optional[Document],
    *,
    extended: bool = False,
    identifier_column: int = 0,
    target_column: int = 1,
    markers: LocatorMarkers = DEFAULT_MARKERS,
) -> MergeResult:
    """Fill ``target_column`` of every data row with the amount found in ``document``.

    Each data row (index ≥ 1) whose ``identifier_column`` cell is not blank is
    looked up with :func:`locate_amount`. Rows with no identifier or no match
    keep their current target cell.

    Parameters
    ----------
    grid : SheetGrid
        Spreadsheet rows; row 0 is the header.
    document : str | Sequence[str]
        Combined text of the invoices (see :func:`combine_documents`).
    extended : bool
        Append the shipping-cost header columns before filling.
    identifier_column, target_column : int
        Zero-based columns to read identifiers from and write amounts to.
    markers : LocatorMarkers
        Passed through to the locator.

    Returns
    -------
    MergeResult
        A new grid (rows padded to the header width) and the updates made.

    Raises
    ------
    MissingInput
        If ``grid`` or ``document`` is None.
    """
    if grid is None:
        raise MissingInput("A spreadsheet grid is required")
    if document is None:
        raise MissingInput("Document text is required")

    lines = split_lines(document) if isinstance(document, str) else list(document)
    rows = copy_rows(grid)
    if extended:
        append_headers(rows)
    normalize_rows(rows)

    updates: List[Tuple[str, str]] = []
    for i, row in enumerate(rows[1:], start=1):
        raw = cell_at(row, identifier_column)
        if is_blank_cell(raw):
            continue
        identifier = cell_text(raw)
        found = locate_amount(lines, identifier, markers)
        if found is None:
            log.debug("Row %d: no amount for %r", i, identifier)
            continue
        if target_column >= len(row):
            row.extend([""] * (target_column + 1 - len(row)))
        row[target_column] = found
        updates.append((identifier, found))
        log.debug("Row %d: %r -> %s", i, identifier, found)

    log.info("Matched %d of %d data rows", len(updates), max(len(rows) - 1, 0))
    return MergeResult(rows=rows, updates=tuple(updates))
