from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Union

Cell = Optional[Union[str, int, float, Decimal, date, datetime]]
Row = List[Cell]
SheetGrid = List[Row]


def blank_row(width: int) -> Row:
    """A separator row: ``width`` empty-string cells."""
    return [""] * width


def copy_rows(rows: Iterable[Sequence[Cell]]) -> SheetGrid:
    """Shallow copy of every row, so callers never see our edits."""
    return [list(r) for r in rows]


def header_width(rows: Sequence[Sequence[Cell]]) -> int:
    return len(rows[0]) if rows else 0


def normalize_rows(rows: SheetGrid) -> SheetGrid:
    """
    Pad every row in place with ``""`` up to the header's width.

    Rows wider than the header are left as they are. Returns ``rows`` for
    chaining.
    """
    width = header_width(rows)
    for r in rows[1:]:
        if len(r) < width:
            r.extend([""] * (width - len(r)))
    return rows


def cell_at(row: Sequence[Cell], index: int) -> Cell:
    """``row[index]`` or None when the row is too short."""
    return row[index] if 0 <= index < len(row) else None


@dataclass(frozen=True)
class LoadedSheet:
    """
    The first worksheet of a workbook as plain rows.
    `name` is kept so the transformed grid can be written back under it.
    """
    name: str
    rows: SheetGrid = field(default_factory=list)
