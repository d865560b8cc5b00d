from __future__ import annotations

import copy

import pytest

from invoice_helper.controllers.sheet_grouper import (
    group_rows,
    insert_separators,
    insert_subtotals,
    resolve_columns,
)
from invoice_helper.data_model import GroupingOptions
from invoice_helper.errors import InvalidColumnLabel, MissingInput

S = ["", "", ""]  # separator row for 3-column grids


@pytest.fixture
def shipments():
    return [
        ["Name", "Ref", "Amount"],
        ["x", "A", 10],
        ["y", "A", "5.50"],
        ["z", "B", -3],
        ["w", "C", "n/a"],
        ["v", "C", 2.0],
    ]


# ----------------------- separators -----------------------


def test_two_separator_pairs_for_three_groups_and_order_kept():
    # Arrange
    grid = [[v] for v in ["A", "A", "B", "B", "B", "C"]]

    # Act
    out = group_rows(grid, "A")

    # Assert
    assert out == [["A"], ["A"], [""], [""], ["B"], ["B"], ["B"], [""], [""], ["C"]]
    assert [r for r in out if r != [""]] == grid


def test_header_forms_its_own_group(shipments):
    out = group_rows(shipments, "B")
    assert out == [
        shipments[0],
        S, S,
        shipments[1], shipments[2],
        S, S,
        shipments[3],
        S, S,
        shipments[4], shipments[5],
    ]


def test_separator_width_follows_the_row():
    rows = [["H1", "H2"], ["a", 1, "extra"]]
    out = insert_separators(rows, 1)
    assert out[1] == ["", "", ""]


def test_empty_reference_cells_compare_equal():
    grid = [["Ref"], [None], [None], ["X"]]
    out = group_rows(grid, "A")
    assert out == [["Ref"], [""], [""], [None], [None], [""], [""], ["X"]]


def test_empty_cell_and_padded_short_row_share_a_group():
    # Arrange: ["a", 5, None] has an empty cell, ["b", 7] is padded with ""
    grid = [["Name", "Amt", "Ref"], ["a", 5, None], ["b", 7]]

    # Act
    out = group_rows(grid, "C")

    # Assert
    assert out == [["Name", "Amt", "Ref"], S, S, ["a", 5, None], ["b", 7, ""]]


def test_reference_column_outside_rows_is_one_group():
    grid = [["a"], ["b"]]
    assert group_rows(grid, "Z") == [["a"], ["b"]]


def test_non_contiguous_values_form_separate_groups():
    grid = [["A"], ["B"], ["A"]]
    out = group_rows(grid, "A")
    assert out == [["A"], [""], [""], ["B"], [""], [""], ["A"]]


def test_ragged_rows_are_padded_to_header_width():
    grid = [["H1", "H2", "H3"], ["a", "K"], ["b", "K"]]
    out = group_rows(grid, "B")
    assert out[3:] == [["a", "K", ""], ["b", "K", ""]]


def test_input_grid_is_not_mutated(shipments):
    before = copy.deepcopy(shipments)
    group_rows(shipments, "B", compute_totals=True, total_column="C")
    assert shipments == before


def test_empty_grid():
    assert group_rows([], "A") == []


# ----------------------- subtotals -----------------------


def test_positive_groups_get_one_subtotal_after_their_rows(shipments):
    # Act
    out = group_rows(shipments, "B", compute_totals=True, total_column="C")

    # Assert
    assert out == [
        shipments[0],
        S, S,
        shipments[1], shipments[2],
        ["", "", "15.50"],
        S, S,
        shipments[3],  # -3 → no subtotal
        S, S,
        shipments[4], shipments[5],
        ["", "", "2.00"],  # "n/a" skipped
    ]


def test_non_positive_totals_written_when_option_off(shipments):
    options = GroupingOptions(positive_totals_only=False)
    out = group_rows(shipments, "B", compute_totals=True, total_column="C", options=options)
    assert ["", "", "-3.00"] in out
    # header run has no numeric cell and still gets no subtotal
    assert out[1] == S


def test_zero_sum_group_has_no_subtotal():
    grid = [["Ref", "Amt"], ["A", 5], ["A", -5]]
    out = group_rows(grid, "A", compute_totals=True, total_column="B")
    assert out == [["Ref", "Amt"], ["", ""], ["", ""], ["A", 5], ["A", -5]]


def test_subtotal_uses_plain_two_decimal_format():
    grid = [["Ref", "Amt"], ["A", "1,000.5"], ["A", 234]]
    out = group_rows(grid, "A", compute_totals=True, total_column="B")
    assert out[-1] == ["", "1234.50"]


def test_missing_total_column_falls_back_to_reference_column():
    grid = [["Ref"], [5], [5], [7]]
    out = group_rows(grid, "A", compute_totals=True)
    assert out == [["Ref"], [""], [""], [5], [5], ["10.00"], [""], [""], [7], ["7.00"]]


def test_fallback_can_be_disabled():
    grid = [["Ref"], [5], [7]]
    options = GroupingOptions(fallback_total_to_reference=False)
    out = group_rows(grid, "A", compute_totals=True, options=options)
    assert out == [["Ref"], [""], [""], [5], [""], [""], [7]]


def test_totals_ignored_unless_requested(shipments):
    out = group_rows(shipments, "B", compute_totals=False, total_column="C")
    assert ["", "", "15.50"] not in out


def test_padded_rows_are_summed_not_treated_as_separators():
    grid = [["Name", "Amt", "Ref"], ["a", 5], ["b", 7]]
    out = group_rows(grid, "C", compute_totals=True, total_column="B")
    assert out == [["Name", "Amt", "Ref"], S, S, ["a", 5, ""], ["b", 7, ""], ["", "12.00", ""]]


def test_mixed_empty_reference_cells_total_as_one_group():
    # Arrange
    grid = [["Name", "Amt", "Ref"], ["a", 5, None], ["b", 7], ["c", 1, "K"]]

    # Act
    out = group_rows(grid, "C", compute_totals=True, total_column="B")

    # Assert
    assert out == [
        ["Name", "Amt", "Ref"],
        S, S,
        ["a", 5, None], ["b", 7, ""],
        ["", "12.00", ""],
        S, S,
        ["c", 1, "K"],
        ["", "1.00", ""],
    ]


def test_fully_blank_data_row_stays_inside_its_group():
    grid = [["Ref", "Amt"], [None, 4], [], ["X", 1]]
    out = group_rows(grid, "A", compute_totals=True, total_column="B")
    assert out == [
        ["Ref", "Amt"],
        ["", ""], ["", ""],
        [None, 4], ["", ""],
        ["", "4.00"],
        ["", ""], ["", ""],
        ["X", 1],
        ["", "1.00"],
    ]


def test_insert_subtotals_adjusts_cursor_after_insertions():
    rows = [["H", "Amt"], ["", ""], ["", ""], ["a", 1], ["", ""], ["", ""], ["b", 2], ["", ""], ["", ""], ["c", 3]]
    out = insert_subtotals(rows, 1)
    subtotals = [i for i, r in enumerate(out) if r[0] == "" and r[1] not in ("",)]
    assert [out[i][1] for i in subtotals] == ["1.00", "2.00", "3.00"]
    assert subtotals == [4, 8, 12]


# ----------------------- column resolution -----------------------


def test_resolve_columns():
    assert resolve_columns("F", False, "G") == (5, None)
    assert resolve_columns("F", True, "G") == (5, 6)
    assert resolve_columns("F", True, None) == (5, 5)
    assert resolve_columns("F", True, "7") == (5, 5)
    off = GroupingOptions(fallback_total_to_reference=False)
    assert resolve_columns("F", True, "", off) == (5, None)


@pytest.mark.parametrize("bad", ["", "F1", None])
def test_bad_reference_column_raises(bad, shipments):
    with pytest.raises(InvalidColumnLabel):
        group_rows(shipments, bad)


def test_missing_grid_raises():
    with pytest.raises(MissingInput):
        group_rows(None, "A")
