#!/usr/bin/env python3
"""
invoice-helper command line

Commands:
- group:      regroup a workbook by a reference column, with optional subtotals
- reconcile:  fill a workbook's amount column from one or more invoice PDFs
"""
from __future__ import annotations

import argparse
import logging
import logging.config
import sys
from pathlib import Path
from typing import List, Optional

from invoice_helper.controllers.workbook_io import process_excel, reconcile_files
from invoice_helper.data_model import GroupingOptions
from invoice_helper.utilities import LOG_DIR, LOGGING

log = logging.getLogger(__name__)


def configure_logging() -> None:
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(LOGGING)


def _require_file(path: Path, what: str) -> None:
    if not path.exists():
        raise SystemExit(f"{what} not found: {path}")
    if not path.is_file():
        raise SystemExit(f"{what} is not a file: {path}")


def _run_group(args: argparse.Namespace) -> None:
    _require_file(args.input, "Input workbook")
    options = GroupingOptions(
        fallback_total_to_reference=not args.no_total_fallback,
        positive_totals_only=not args.all_totals,
    )
    payload = process_excel(
        args.input,
        args.reference_column,
        calculate_totals=args.totals,
        total_column=args.total_column,
        options=options,
    )
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(payload)
    log.info("Grouped workbook written to %s", args.output)


def _run_reconcile(args: argparse.Namespace) -> None:
    _require_file(args.excel, "Input workbook")
    for p in args.pdf:
        _require_file(p, "PDF")
    payload, updates = reconcile_files(args.excel, args.pdf, extended=not args.plain)
    for identifier, amount in updates:
        log.info("%s -> %s", identifier, amount)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(payload)
    log.info("Updated %d row(s); workbook written to %s", len(updates), args.output)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="invoice-helper",
        description="Group spreadsheet rows and reconcile them against invoice PDFs.",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    g = sub.add_parser("group", help="Insert separators (and subtotals) between groups of rows")
    g.add_argument("input", type=Path, help="Path to input .xlsx")
    g.add_argument("output", type=Path, help="Path to output .xlsx")
    g.add_argument("--reference-column", "-r", required=True,
                   help="Column letter whose value defines the groups (e.g. F)")
    g.add_argument("--totals", action="store_true", help="Append a subtotal row after each group")
    g.add_argument("--total-column", "-t", help="Column letter to sum (default: the reference column)")
    g.add_argument("--no-total-fallback", action="store_true",
                   help="Skip subtotals instead of summing the reference column when --total-column is missing")
    g.add_argument("--all-totals", action="store_true",
                   help="Also write subtotals for groups whose sum is zero or negative")
    g.set_defaults(func=_run_group)

    r = sub.add_parser("reconcile", help="Write invoice amounts next to each identifier")
    r.add_argument("excel", type=Path, help="Path to input .xlsx (identifiers in column A)")
    r.add_argument("output", type=Path, help="Path to output .xlsx")
    r.add_argument("--pdf", type=Path, action="append", required=True,
                   help="Invoice PDF; may be given multiple times (order matters)")
    r.add_argument("--plain", action="store_true",
                   help="Do not append the shipping-cost header columns")
    r.set_defaults(func=_run_reconcile)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    try:
        args.func(args)
    except ValueError as e:
        log.error("%s failed: %s", args.command, e)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
