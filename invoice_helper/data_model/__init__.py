# invoice_helper/data_model/__init__.py
from .enum_scan_state import ScanState
from .options import (
    DEFAULT_GROUPING,
    DEFAULT_MARKERS,
    EXTENDED_HEADERS,
    GroupingOptions,
    LocatorMarkers,
)
from .sheet_grid import (
    Cell,
    LoadedSheet,
    Row,
    SheetGrid,
    blank_row,
    cell_at,
    copy_rows,
    header_width,
    normalize_rows,
)

__all__ = [
    "ScanState",
    "LocatorMarkers",
    "DEFAULT_MARKERS",
    "GroupingOptions",
    "DEFAULT_GROUPING",
    "EXTENDED_HEADERS",
    "Cell",
    "Row",
    "SheetGrid",
    "LoadedSheet",
    "blank_row",
    "cell_at",
    "copy_rows",
    "header_width",
    "normalize_rows",
]
