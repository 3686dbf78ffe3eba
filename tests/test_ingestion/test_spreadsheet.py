"""
Tests for reorder_planner/ingestion/spreadsheet.py.

What we test
------------
read_first_sheet():
  - Row 1 is the header; later rows become dicts in sheet order.
  - Missing cells are "" and fully blank rows are skipped.
  - Duplicate and blank headers get unique keys.
  - Native cell types (numbers, dates) are preserved.
  - Only the first worksheet is read.
  - Raw bytes are accepted as well as paths.
  - Non-workbook input raises ParseFailureError.
  - A header-only sheet yields [].
"""

from __future__ import annotations

from datetime import datetime

import pytest
from openpyxl import Workbook

from reorder_planner.errors import ParseFailureError
from reorder_planner.ingestion.spreadsheet import read_first_sheet


class TestReadFirstSheet:
    def test_rows_as_dicts(self, make_xlsx):
        path = make_xlsx(
            ["EAN", "Title", "Cost", "SW"],
            [["9780000000002", "Dune", 10.5, 3], ["9780000000019", "Emma", 8, 0]],
        )
        records = read_first_sheet(path)
        assert records == [
            {"EAN": "9780000000002", "Title": "Dune", "Cost": 10.5, "SW": 3},
            {"EAN": "9780000000019", "Title": "Emma", "Cost": 8, "SW": 0},
        ]

    def test_missing_cells_are_empty_strings(self, make_xlsx):
        path = make_xlsx(["EAN", "Title", "QoH"], [["A", None, 2], ["B"]])
        records = read_first_sheet(path)
        assert records[0]["Title"] == ""
        assert records[1] == {"EAN": "B", "Title": "", "QoH": ""}

    def test_blank_rows_skipped(self, make_xlsx):
        path = make_xlsx(["EAN", "SW"], [["A", 1], [None, None], ["B", 2]])
        records = read_first_sheet(path)
        assert [r["EAN"] for r in records] == ["A", "B"]

    def test_duplicate_and_blank_headers(self, make_xlsx):
        path = make_xlsx(["SW", None, "SW", None, "SW"], [[1, 2, 3, 4, 5]])
        record = read_first_sheet(path)[0]
        assert record == {"SW": 1, "__EMPTY": 2, "SW_1": 3, "__EMPTY_1": 4, "SW_2": 5}

    def test_native_types_preserved(self, make_xlsx):
        when = datetime(2025, 3, 14)
        path = make_xlsx(["EAN", "Last Sale"], [[9780000000002, when]])
        record = read_first_sheet(path)[0]
        assert record["EAN"] == 9780000000002
        assert record["Last Sale"] == when

    def test_header_only_sheet(self, make_xlsx):
        assert read_first_sheet(make_xlsx(["EAN", "Title"])) == []

    def test_empty_sheet(self, make_xlsx):
        assert read_first_sheet(make_xlsx(None)) == []

    def test_only_first_sheet_read(self, tmp_path):
        wb = Workbook()
        first = wb.active
        first.append(["EAN"])
        first.append(["first"])
        second = wb.create_sheet("Other")
        second.append(["EAN"])
        second.append(["second"])
        path = tmp_path / "two_sheets.xlsx"
        wb.save(path)

        assert read_first_sheet(path) == [{"EAN": "first"}]

    def test_accepts_bytes(self, make_xlsx):
        path = make_xlsx(["EAN"], [["A"], ["B"]])
        assert [r["EAN"] for r in read_first_sheet(path.read_bytes())] == ["A", "B"]

    def test_accepts_str_path(self, make_xlsx):
        path = make_xlsx(["EAN"], [["A"]])
        assert read_first_sheet(str(path)) == [{"EAN": "A"}]


class TestParseFailures:
    def test_text_file_with_xlsx_extension(self, tmp_path):
        path = tmp_path / "fake.xlsx"
        path.write_text("EAN,Title\nA,Dune\n", encoding="utf-8")
        with pytest.raises(ParseFailureError) as exc_info:
            read_first_sheet(path)
        assert exc_info.value.source == str(path)

    def test_garbage_bytes(self):
        with pytest.raises(ParseFailureError) as exc_info:
            read_first_sheet(b"\x00\x01not a workbook")
        assert exc_info.value.source == "<bytes>"
        assert "Failed to read spreadsheet <bytes>" in str(exc_info.value)

    def test_missing_path(self, tmp_path):
        with pytest.raises(ParseFailureError):
            read_first_sheet(tmp_path / "nope.xlsx")
