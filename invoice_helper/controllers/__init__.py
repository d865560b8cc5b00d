from .reconciliation import MergeResult, append_headers, merge_amounts
from .sheet_grouper import group_rows, insert_separators, insert_subtotals, resolve_columns
from .text_locator import AmountScan, combine_documents, locate_amount, split_lines

__all__ = [
    "AmountScan",
    "locate_amount",
    "split_lines",
    "combine_documents",
    "group_rows",
    "resolve_columns",
    "insert_separators",
    "insert_subtotals",
    "MergeResult",
    "merge_amounts",
    "append_headers",
]
