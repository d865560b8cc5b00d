"""
invoice_helper: pull shipment amounts out of invoice PDFs into a spreadsheet,
and regroup spreadsheet rows with separators and subtotals.
"""
from .controllers import group_rows, locate_amount, merge_amounts
from .errors import DocumentTextError, InvalidAmount, InvalidColumnLabel, MissingInput

__version__ = "0.1.0"

__all__ = [
    "locate_amount",
    "group_rows",
    "merge_amounts",
    "InvalidColumnLabel",
    "InvalidAmount",
    "MissingInput",
    "DocumentTextError",
]
