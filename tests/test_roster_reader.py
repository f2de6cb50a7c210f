"""Unit tests for RosterReader class."""

from datetime import datetime
from pathlib import Path
from typing import List

import pytest
from openpyxl import Workbook

from conftest import ROSTER_HEADER, make_row, write_roster
from foldersort.models import ColumnLayout, StudentRecord
from foldersort.scanning import RosterReader


def write_workbook(path: Path, sheets: dict) -> Path:
    """Write a workbook with one worksheet per (title, rows) entry."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for title, rows in sheets.items():
        sheet = workbook.create_sheet(title)
        for row in rows:
            sheet.append(row)
    workbook.save(path)
    return path


class TestRosterReaderInit:
    """Tests for roster path validation."""

    def test_missing_file(self, temp_dir: Path) -> None:
        """Test a missing roster raises ValueError."""
        with pytest.raises(ValueError, match="does not exist"):
            RosterReader(temp_dir / "missing.csv")

    def test_directory(self, temp_dir: Path) -> None:
        """Test a directory given as roster raises ValueError."""
        folder = temp_dir / "roster.csv"
        folder.mkdir()
        with pytest.raises(ValueError, match="not a file"):
            RosterReader(folder)

    def test_unsupported_extension(self, temp_dir: Path) -> None:
        """Test a non-spreadsheet file raises ValueError."""
        path = temp_dir / "roster.txt"
        path.write_text("a,b")
        with pytest.raises(ValueError, match="Unsupported roster format"):
            RosterReader(path)


class TestReadCsv:
    """Tests for reading CSV rosters."""

    def test_reads_students(self, roster_csv: Path) -> None:
        """Test each data row becomes a StudentRecord."""
        rows = RosterReader(roster_csv).read_rows()

        assert len(rows) == 5
        assert rows[0].student == StudentRecord("Jane", "Abbott", "01234", "")
        assert rows[1].student.existing_folder_ref == "https://example.org/existing"

    def test_row_numbers_are_one_based_file_rows(self, roster_csv: Path) -> None:
        """Test the header is row 1 and the first student is row 2."""
        rows = RosterReader(roster_csv).read_rows()
        assert [r.row_number for r in rows] == [2, 3, 4, 5, 6]

    def test_read_header(self, roster_csv: Path) -> None:
        """Test the header rows are returned as read."""
        assert RosterReader(roster_csv).read_header() == [ROSTER_HEADER]

    def test_blank_rows_skipped(self, temp_dir: Path) -> None:
        """Test rows with no content are ignored."""
        rows: List[List[str]] = [make_row("Jane", "Abbott", "1"), ["", "", ""], make_row("Ana", "Cruz")]
        path = write_roster(temp_dir / "roster.csv", rows)

        result = RosterReader(path).read_rows()

        assert [r.student.first_name for r in result] == ["Jane", "Ana"]
        assert [r.row_number for r in result] == [2, 4]

    def test_short_rows_padded(self, temp_dir: Path) -> None:
        """Test rows shorter than the layout get empty cells."""
        path = write_roster(temp_dir / "roster.csv", [["Jane", "Abbott"]])

        row = RosterReader(path).read_rows()[0]

        assert len(row.values) == ColumnLayout().width
        assert row.student == StudentRecord("Jane", "Abbott", "", "")

    def test_cells_trimmed(self, temp_dir: Path) -> None:
        """Test whitespace around cells is removed."""
        path = write_roster(temp_dir / "roster.csv", [make_row("  Jane ", " Abbott", " 1234 ")])
        student = RosterReader(path).read_rows()[0].student
        assert student == StudentRecord("Jane", "Abbott", "1234", "")

    def test_byte_order_mark_ignored(self, temp_dir: Path) -> None:
        """Test a CSV saved with a BOM reads its first header cell cleanly."""
        path = temp_dir / "roster.csv"
        path.write_text(",".join(ROSTER_HEADER) + "\nJane,Abbott\n", encoding="utf-8-sig")

        reader = RosterReader(path)

        assert reader.read_header()[0][0] == "First Name"
        assert reader.read_rows()[0].student.first_name == "Jane"

    def test_custom_layout(self, temp_dir: Path) -> None:
        """Test an explicit column layout without header rows."""
        path = write_roster(temp_dir / "roster.csv", [["1234", "Doe", "John"]], header=False)
        layout = ColumnLayout(
            first_name_col=2, last_name_col=1, prison_id_col=0, folder_col=3,
            state_col=4, inactive_col=4, released_col=4, contact_id_col=4,
            created_date_col=4, last_modified_col=4, header_rows=0,
        )

        rows = RosterReader(path, layout=layout).read_rows()

        assert rows[0].row_number == 1
        assert rows[0].student == StudentRecord("John", "Doe", "1234", "")

    def test_negative_column_rejected(self) -> None:
        """Test a negative column position is invalid."""
        with pytest.raises(ValueError):
            ColumnLayout(folder_col=-1)


class TestReadWorkbook:
    """Tests for reading Excel rosters with openpyxl."""

    def test_active_sheet(self, temp_dir: Path) -> None:
        """Test the active sheet is read when no sheet name is given."""
        path = write_workbook(temp_dir / "roster.xlsx", {
            "Students to search": [ROSTER_HEADER, make_row("Jane", "Abbott", "1234")],
        })

        rows = RosterReader(path).read_rows()

        assert rows[0].student == StudentRecord("Jane", "Abbott", "1234", "")

    def test_named_sheet(self, temp_dir: Path) -> None:
        """Test a named worksheet is selected over the active one."""
        path = write_workbook(temp_dir / "roster.xlsx", {
            "Summary": [["nothing here"]],
            "Students to search": [ROSTER_HEADER, make_row("Ana", "Cruz", "9012")],
        })

        rows = RosterReader(path, sheet_name="Students to search").read_rows()

        assert [r.student.last_name for r in rows] == ["Cruz"]

    def test_missing_sheet(self, temp_dir: Path) -> None:
        """Test an unknown sheet name raises ValueError listing the sheets."""
        path = write_workbook(temp_dir / "roster.xlsx", {"Students": [ROSTER_HEADER]})

        with pytest.raises(ValueError, match="Students"):
            RosterReader(path, sheet_name="Other").read_rows()

    def test_numeric_and_date_cells_as_text(self, temp_dir: Path) -> None:
        """Test numbers lose their '.0' and dates become readable text."""
        row = ["Jane", "Abbott", "CA", 1234, None, None, None, "003XX",
               datetime(2024, 1, 2, 3, 4, 5), None]
        path = write_workbook(temp_dir / "roster.xlsx", {"Students": [ROSTER_HEADER, row]})

        result = RosterReader(path).read_rows()[0]

        assert result.student.prison_id == "1234"
        assert result.values[8] == "2024-01-02 03:04:05"
        assert result.values[4] == ""
