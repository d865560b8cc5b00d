from .config_logging import APP_LOG, LOG_DIR, LOGGING, MATCH_LOG
from .converters_scalar import (
    column_to_index,
    format_amount,
    index_to_column,
    parse_amount,
    to_decimal,
)
from .core_util import cell_text, is_blank_cell, is_null_or_whitespace

__all__ = [
    "is_null_or_whitespace",
    "is_blank_cell",
    "cell_text",
    "column_to_index",
    "index_to_column",
    "parse_amount",
    "format_amount",
    "to_decimal",
    "LOGGING",
    "LOG_DIR",
    "APP_LOG",
    "MATCH_LOG",
]
