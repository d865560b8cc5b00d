# invoice_helper/controllers/workbook_io.py
"""
Workbook and PDF adapters.

This module turns uploaded files into the plain structures the grouping and
reconciliation code works on, and back:

• Read the first worksheet of an ``.xlsx`` into rows (`load_sheet`).
• Write rows into a single-sheet ``.xlsx`` payload (`write_sheet`).
• Extract the text of a PDF (`extract_pdf_text`).
• Run the two end-to-end pipelines: group a workbook (`process_excel`) and
  fill a workbook from invoice PDFs (`reconcile_files`).

Requires pandas with the openpyxl engine, and pdfplumber.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd
import pdfplumber

from invoice_helper.controllers.reconciliation import merge_amounts
from invoice_helper.controllers.sheet_grouper import group_rows
from invoice_helper.controllers.text_locator import combine_documents
from invoice_helper.data_model import (
    DEFAULT_GROUPING,
    DEFAULT_MARKERS,
    GroupingOptions,
    LoadedSheet,
    LocatorMarkers,
    Row,
    SheetGrid,
)
from invoice_helper.errors import DocumentTextError, MissingInput
from invoice_helper.utilities import is_null_or_whitespace

log = logging.getLogger(__name__)

Source = Union[str, Path, bytes, bytearray, IO[bytes]]


def _as_handle(source: Source) -> Union[str, Path, IO[bytes]]:
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    return source


def _clean_row(values: Iterable[object]) -> Row:
    row: Row = [None if pd.isna(v) else v for v in values]
    while row and row[-1] is None:
        row.pop()
    return row


# --- Spreadsheets -----------------------------------------------------------


def load_sheet(source: Optional[Source]) -> LoadedSheet:
    """Load the first worksheet as rows of cells.

    Parameters
    ----------
    source : path, bytes or binary file
        The workbook.

    Returns
    -------
    LoadedSheet
        Sheet name and rows. Empty cells are None and trailing empty cells are
        dropped, so rows may be ragged; the header row is row 0.

    Raises
    ------
    MissingInput
        If ``source`` is None.
    """
    if source is None:
        raise MissingInput("An Excel workbook is required")
    with pd.ExcelFile(_as_handle(source)) as xls:
        name = xls.sheet_names[0]
        df = xls.parse(name, header=None)
    df = df.astype(object)
    rows = [_clean_row(r) for r in df.itertuples(index=False, name=None)]
    log.debug("Loaded sheet %r: %d rows", name, len(rows))
    return LoadedSheet(name=str(name), rows=rows)


def write_sheet(
    rows: SheetGrid,
    sheet_name: str = "Sheet1",
    destination: Optional[Union[str, Path]] = None,
) -> bytes:
    """Write ``rows`` to a one-sheet xlsx payload (and to ``destination`` if given)."""
    buf = io.BytesIO()
    df = pd.DataFrame(rows)
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    payload = buf.getvalue()
    if destination is not None:
        dest = Path(destination)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(payload)
        log.info("Wrote %d rows to %s", len(rows), dest)
    return payload


# --- PDFs -------------------------------------------------------------------


def extract_pdf_text(source: Source) -> str:
    """Return the text of every page, pages separated by a line break.

    Raises
    ------
    DocumentTextError
        If pdfplumber cannot open or read the document.
    """
    try:
        with pdfplumber.open(_as_handle(source)) as pdf:
            return "\n".join(page.extract_text() or "" for page in pdf.pages)
    except Exception as e:
        raise DocumentTextError(f"Failed to extract text from PDF: {e}") from e


# --- Pipelines --------------------------------------------------------------


def process_excel(
    source: Optional[Source],
    reference_column: Optional[str],
    calculate_totals: bool = False,
    total_column: Optional[str] = None,
    options: GroupingOptions = DEFAULT_GROUPING,
) -> bytes:
    """Group a workbook's first sheet by ``reference_column``; return the new xlsx."""
    if source is None or is_null_or_whitespace(reference_column):
        raise MissingInput("Excel file and reference column are required")
    sheet = load_sheet(source)
    rows = group_rows(
        sheet.rows,
        reference_column,
        compute_totals=calculate_totals,
        total_column=total_column,
        options=options,
    )
    return write_sheet(rows, sheet.name)


def reconcile_files(
    excel: Optional[Source],
    pdfs: Optional[Sequence[Source]],
    *,
    extended: bool = True,
    markers: LocatorMarkers = DEFAULT_MARKERS,
) -> Tuple[bytes, List[Tuple[str, str]]]:
    """Fill the workbook's amount column from the invoice PDFs.

    PDF texts are combined in the order given; see :func:`combine_documents`.

    Returns
    -------
    (bytes, list[(identifier, amount)])
        The updated xlsx payload and the amounts written.

    Raises
    ------
    MissingInput
        Unless there is a workbook and at least one PDF.
    DocumentTextError
        If a PDF cannot be read.
    """
    if excel is None or not pdfs:
        raise MissingInput("At least one PDF and one Excel file are required")
    texts = [extract_pdf_text(p) for p in pdfs]
    lines = combine_documents(texts)
    log.info("Extracted %d lines from %d PDF(s)", len(lines), len(texts))

    sheet = load_sheet(excel)
    result = merge_amounts(sheet.rows, lines, extended=extended, markers=markers)
    return write_sheet(result.rows, sheet.name), list(result.updates)
