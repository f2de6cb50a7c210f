"""Batched writing of the found and not-found output lists."""

import csv
from contextlib import ExitStack
from pathlib import Path
from typing import List, Optional

from foldersort.models import SortResult


class ResultWriter:
    """Appends the rows of a SortResult to two CSV files.

    Rows are appended after whatever the files already hold. A file that does
    not exist yet (or is empty) receives the header rows first. Nothing is
    written for an empty list, so an untouched destination stays untouched.

    Attributes:
        found_path: Destination for students whose folder was found.
        not_found_path: Destination for students without a folder.
        header: Header rows copied from the roster.
    """

    def __init__(
        self,
        found_path: Path,
        not_found_path: Path,
        header: Optional[List[List[str]]] = None,
    ) -> None:
        if found_path.resolve() == not_found_path.resolve():
            raise ValueError("Found and not-found outputs must be different files")
        self.found_path = found_path
        self.not_found_path = not_found_path
        self.header = header or []

    def write(self, result: SortResult) -> int:
        """Write both output lists.

        Both destinations are opened before any row is written, so a
        destination that cannot be opened leaves the other file unchanged
        and a re-run does not duplicate rows. A failure in the middle of
        writing (a full disk) can still leave one file appended.

        Returns:
            Number of data rows written across both files.

        Raises:
            OSError: If an output file cannot be opened or written.
        """
        targets = [
            (path, rows)
            for path, rows in (
                (self.found_path, result.found_rows),
                (self.not_found_path, result.not_found_rows),
            )
            if rows
        ]

        with ExitStack() as stack:
            opened = []
            for path, rows in targets:
                is_new = not path.exists() or path.stat().st_size == 0
                handle = stack.enter_context(open(path, "a", encoding="utf-8", newline=""))
                opened.append((handle, is_new, rows))

            written = 0
            for handle, is_new, rows in opened:
                writer = csv.writer(handle)
                if is_new:
                    writer.writerows(self.header)
                writer.writerows(rows)
                written += len(rows)

        return written
