"""Roster reading for the student folder sorter.

This module provides the RosterReader class which reads the roster of
students to search from a CSV file or an Excel workbook and turns each row
into a StudentRecord using an explicit ColumnLayout.

Example:
    >>> from foldersort.scanning import RosterReader
    >>> reader = RosterReader(Path("students.xlsx"), sheet_name="Students to search")
    >>> for row in reader.read_rows():
    ...     print(row.row_number, row.student.display_name)
"""

import csv
from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Optional

from openpyxl import load_workbook

from foldersort.models import ColumnLayout, RosterRow, StudentRecord


class RosterReader:
    """Reads roster rows from a .csv, .xlsx or .xlsm file.

    All cells are read as trimmed strings. Rows shorter than the layout are
    padded with empty cells; completely blank rows are skipped.

    Attributes:
        path: Path to the roster file.
        layout: Column positions used to build each StudentRecord.
        sheet_name: Worksheet to read from a workbook. The active sheet is
            used when omitted. Ignored for CSV files.
    """

    SUPPORTED_EXTENSIONS = (".csv", ".xlsx", ".xlsm")

    def __init__(
        self,
        path: Path,
        layout: Optional[ColumnLayout] = None,
        sheet_name: Optional[str] = None,
    ) -> None:
        """Initialize the RosterReader.

        Args:
            path: Path to the roster file.
            layout: Column positions. Defaults to ColumnLayout().
            sheet_name: Worksheet name for workbooks.

        Raises:
            ValueError: If the file does not exist, is not a file, or has an
                unsupported extension.
        """
        if not path.exists():
            raise ValueError(f"Roster file does not exist: {path}")
        if not path.is_file():
            raise ValueError(f"Roster path is not a file: {path}")
        if path.suffix.lower() not in self.SUPPORTED_EXTENSIONS:
            raise ValueError(
                f"Unsupported roster format '{path.suffix}'. "
                f"Expected one of: {', '.join(self.SUPPORTED_EXTENSIONS)}"
            )

        self.path = path
        self.layout = layout if layout is not None else ColumnLayout()
        self.sheet_name = sheet_name
        self._table: Optional[List[List[str]]] = None

    def read_header(self) -> List[List[str]]:
        """Return the header rows as they appear in the file."""
        return self._read_table()[: self.layout.header_rows]

    def read_rows(self) -> List[RosterRow]:
        """Return every non-blank data row parsed into a RosterRow."""
        table = self._read_table()
        rows: List[RosterRow] = []

        first_data_row = self.layout.header_rows
        for offset, values in enumerate(table[first_data_row:]):
            if not any(values):
                continue
            rows.append(self.parse_row(values, first_data_row + offset + 1))

        return rows

    def parse_row(self, values: List[str], row_number: int) -> RosterRow:
        """Build a RosterRow from raw cells using the column layout.

        Args:
            values: Cells of the row, already converted to strings.
            row_number: 1-based row number in the source file.

        Returns:
            RosterRow whose values are padded to the layout width.
        """
        padded = list(values) + [""] * max(0, self.layout.width - len(values))
        student = StudentRecord(
            first_name=padded[self.layout.first_name_col].strip(),
            last_name=padded[self.layout.last_name_col].strip(),
            prison_id=padded[self.layout.prison_id_col].strip(),
            existing_folder_ref=padded[self.layout.folder_col].strip(),
        )
        return RosterRow(row_number=row_number, values=padded, student=student)

    def _read_table(self) -> List[List[str]]:
        """Read all rows of the file once and cache them."""
        if self._table is None:
            if self.path.suffix.lower() == ".csv":
                self._table = self._read_csv()
            else:
                self._table = self._read_workbook()
        return self._table

    def _read_csv(self) -> List[List[str]]:
        with open(self.path, "r", encoding="utf-8-sig", newline="") as f:
            return [[cell.strip() for cell in row] for row in csv.reader(f)]

    def _read_workbook(self) -> List[List[str]]:
        workbook = load_workbook(self.path, read_only=True, data_only=True)
        try:
            if self.sheet_name is None:
                sheet = workbook.active
            elif self.sheet_name in workbook.sheetnames:
                sheet = workbook[self.sheet_name]
            else:
                raise ValueError(
                    f"Sheet '{self.sheet_name}' not found in {self.path.name}. "
                    f"Available sheets: {', '.join(workbook.sheetnames)}"
                )
            return [
                [self._cell_to_text(value) for value in row]
                for row in sheet.iter_rows(values_only=True)
            ]
        finally:
            workbook.close()

    @staticmethod
    def _cell_to_text(value: Any) -> str:
        """Convert a workbook cell value to the text a user would see."""
        if value is None:
            return ""
        # IDs typed into Excel come back as floats
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, datetime):
            return value.strftime("%Y-%m-%d %H:%M:%S")
        if isinstance(value, date):
            return value.isoformat()
        return str(value).strip()
