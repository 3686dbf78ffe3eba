"""
Tests for reorder_planner/reporting/export.py.

What we test
------------
to_csv_text():
  - Headerless ISBN,Quantity rows, "\\n" terminated.
  - Comma / quote / CR / LF fields are quoted with quotes doubled.
  - None becomes an empty field.
  - Empty input yields "".

export_filename() / write_export_csv():
  - {prefix}_{YYYY-MM-DD}.csv naming.
  - Parent directories are created; a rewrite replaces the file.
"""

from __future__ import annotations

from datetime import date

from reorder_planner.reporting.export import export_filename, to_csv_text, write_export_csv


class TestToCsvText:
    def test_basic_rows(self):
        rows = [{"ISBN": "9780000000002", "Quantity": 1}, {"ISBN": "B", "Quantity": 1}]
        assert to_csv_text(rows) == "9780000000002,1\nB,1\n"

    def test_no_header(self):
        text = to_csv_text([{"ISBN": "A", "Quantity": 1}])
        assert "ISBN" not in text
        assert "Quantity" not in text

    def test_empty_rows(self):
        assert to_csv_text([]) == ""

    def test_comma_is_quoted(self):
        assert to_csv_text([{"ISBN": "a,b", "Quantity": 1}]) == '"a,b",1\n'

    def test_quote_is_doubled(self):
        assert to_csv_text([{"ISBN": 'a"b', "Quantity": 1}]) == '"a""b",1\n'

    def test_newline_is_quoted(self):
        assert to_csv_text([{"ISBN": "a\nb", "Quantity": 1}]) == '"a\nb",1\n'

    def test_carriage_return_is_quoted(self):
        assert to_csv_text([{"ISBN": "a\rb", "Quantity": 1}]) == '"a\rb",1\n'
        assert to_csv_text([{"ISBN": "a\r\nb", "Quantity": 1}]) == '"a\r\nb",1\n'

    def test_none_is_empty_field(self):
        assert to_csv_text([{"ISBN": None, "Quantity": 1}]) == ",1\n"

    def test_extra_keys_ignored(self):
        assert to_csv_text([{"ISBN": "A", "Quantity": 2, "Title": "x"}]) == "A,2\n"


class TestFiles:
    def test_export_filename(self):
        assert export_filename("backlog", date(2025, 6, 1)) == "backlog_2025-06-01.csv"
        assert (
            export_filename("recommended_reorders", date(2024, 12, 31))
            == "recommended_reorders_2024-12-31.csv"
        )

    def test_write_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "out" / "orders.csv"
        written = write_export_csv([{"ISBN": "A", "Quantity": 1}], path)
        assert written == path
        assert path.read_bytes() == b"A,1\n"

    def test_rewrite_overwrites(self, tmp_path):
        path = tmp_path / "orders.csv"
        write_export_csv([{"ISBN": "A", "Quantity": 1}, {"ISBN": "B", "Quantity": 1}], path)
        write_export_csv([{"ISBN": "C", "Quantity": 1}], path)
        assert path.read_text(encoding="utf-8") == "C,1\n"

    def test_empty_rows_write_empty_file(self, tmp_path):
        path = write_export_csv([], tmp_path / "empty.csv")
        assert path.read_bytes() == b""
