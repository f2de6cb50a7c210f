"""Input scanning package for the student folder sorter.

This package provides the two collaborators a sort run reads from:

- FolderLister: Enumerates the letter folders and student folders of a
  folder store into a FolderIndex, once per run.
- RosterReader: Reads roster rows from a CSV file or Excel workbook into
  StudentRecords using a ColumnLayout.

Example:
    >>> from foldersort.scanning import FolderLister, RosterReader
    >>> from pathlib import Path
    >>>
    >>> index = FolderLister().build_index(Path("/data/students"))
    >>> rows = RosterReader(Path("roster.csv")).read_rows()
"""

from .folder_lister import FolderLister
from .roster_reader import RosterReader

__all__ = ["FolderLister", "RosterReader"]
