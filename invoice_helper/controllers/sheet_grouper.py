# invoice_helper/controllers/sheet_grouper.py
"""
Group spreadsheet rows by a reference column.

Rows whose reference cell equals the previous row's stay together; between
groups two blank separator rows are inserted. Optionally a subtotal row is
appended after each group, summing a second column.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Collection, Optional, Tuple

from invoice_helper.data_model import (
    DEFAULT_GROUPING,
    Cell,
    GroupingOptions,
    SheetGrid,
    blank_row,
    cell_at,
    copy_rows,
    header_width,
    normalize_rows,
)
from invoice_helper.errors import InvalidColumnLabel, MissingInput
from invoice_helper.utilities import column_to_index, format_amount, to_decimal

log = logging.getLogger(__name__)

_NO_GROUP = object()
SEPARATOR_ROWS = 2


def resolve_columns(
    reference_column: str,
    compute_totals: bool,
    total_column: Optional[str],
    options: GroupingOptions = DEFAULT_GROUPING,
) -> Tuple[int, Optional[int]]:
    """Return ``(reference_index, total_index)``.

    ``total_index`` is None when no subtotals should be computed. An absent or
    invalid total column falls back to the reference column when
    ``options.fallback_total_to_reference`` is set.

    Raises
    ------
    InvalidColumnLabel
        If ``reference_column`` is not a valid label.
    """
    ref_idx = column_to_index(reference_column)
    if not compute_totals:
        return ref_idx, None
    try:
        return ref_idx, column_to_index(total_column)
    except InvalidColumnLabel:
        if not options.fallback_total_to_reference:
            log.warning(
                "Totals requested but total column %r is unusable; skipping totals",
                total_column,
            )
            return ref_idx, None
        log.warning(
            "Total column %r is unusable; summing reference column %s instead",
            total_column,
            reference_column,
        )
        return ref_idx, ref_idx


def _group_key(value: Cell) -> Cell:
    # None (empty cell) and "" (padding) are the same empty group
    return None if value == "" else value


def insert_separators(rows: SheetGrid, ref_idx: int) -> SheetGrid:
    """Copy ``rows``, putting a pair of blank rows before every change of group."""
    out: SheetGrid = []
    current = _NO_GROUP
    for i, row in enumerate(rows):
        value = _group_key(cell_at(row, ref_idx))
        if current is _NO_GROUP or value != current:
            if i > 0:
                for _ in range(SEPARATOR_ROWS):
                    out.append(blank_row(len(row)))
            current = value
        out.append(row)
    return out


def _run_total(rows: SheetGrid, start: int, stop: int, total_idx: int) -> Tuple[Decimal, int]:
    total = Decimal("0")
    numeric = 0
    for row in rows[start:stop]:
        v = to_decimal(cell_at(row, total_idx))
        if v is not None:
            total += v
            numeric += 1
    return total, numeric


def insert_subtotals(
    rows: SheetGrid,
    total_idx: int,
    options: GroupingOptions = DEFAULT_GROUPING,
    separators: Optional[Collection[int]] = None,
) -> SheetGrid:
    """
    Insert a subtotal row after every run of rows between separators.

    A run ends at a separator row or at the end of the grid. ``separators``
    holds the ``id()`` of each separator row; without it, a row whose cells
    are all ``""`` counts as one. The subtotal row is header-wide, blank
    except for the sum at ``total_idx``. Mutates and returns ``rows``.
    """

    def is_separator(row) -> bool:
        if separators is not None:
            return id(row) in separators
        return all(c == "" for c in row)

    width = header_width(rows)
    start = 0
    i = 0
    while i <= len(rows):
        at_end = i == len(rows)
        if at_end or is_separator(rows[i]):
            if start < i:
                total, numeric = _run_total(rows, start, i, total_idx)
                wanted = total > 0 if options.positive_totals_only else numeric > 0
                if wanted:
                    subtotal = blank_row(max(width, total_idx + 1))
                    subtotal[total_idx] = format_amount(total, thousands=False)
                    rows.insert(i, subtotal)
                    log.debug("Subtotal %s after rows %d-%d", subtotal[total_idx], start, i - 1)
                    i += 1
            start = i + 1
        i += 1
    return rows


def group_rows(
    grid: Optional[SheetGrid],
    reference_column: str,
    compute_totals: bool = False,
    total_column: Optional[str] = None,
    options: GroupingOptions = DEFAULT_GROUPING,
) -> SheetGrid:
    """Partition ``grid`` into groups of equal reference values.

    Parameters
    ----------
    grid : SheetGrid
        Rows of cells; row 0 is the header and forms the first group.
    reference_column : str
        Column label (e.g. ``"F"``) whose value defines the groups.
    compute_totals : bool
        Append a subtotal row after each group.
    total_column : Optional[str]
        Column to sum; see :func:`resolve_columns` for the fallback.
    options : GroupingOptions
        Fallback and positive-only switches.

    Returns
    -------
    SheetGrid
        A new grid; the input is not modified.

    Raises
    ------
    MissingInput
        If ``grid`` is None.
    InvalidColumnLabel
        If ``reference_column`` is not a valid label.
    """
    if grid is None:
        raise MissingInput("A spreadsheet grid is required")
    ref_idx, total_idx = resolve_columns(reference_column, compute_totals, total_column, options)

    rows = normalize_rows(copy_rows(grid))
    out = insert_separators(rows, ref_idx)
    if total_idx is not None:
        data_ids = {id(r) for r in rows}
        separators = {id(r) for r in out if id(r) not in data_ids}
        out = insert_subtotals(out, total_idx, options, separators)
    log.info(
        "Grouped %d rows on column %s into %d rows (totals=%s)",
        len(rows),
        reference_column.upper(),
        len(out),
        total_idx is not None,
    )
    return out
