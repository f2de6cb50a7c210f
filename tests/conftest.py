"""Pytest fixtures for foldersort tests."""

import csv
import io
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest
from rich.console import Console

from foldersort.matching import StudentMatcher
from foldersort.models import (
    CandidateFolder,
    FolderIndex,
    Found,
    NotFound,
    SortSummary,
    StudentRecord,
)
from foldersort.ui import SortTUI


ROSTER_HEADER = [
    "First Name", "Last Name", "State", "Prison ID", "Inactive",
    "Folder", "Released", "Contact ID", "Created Date", "Last Modified",
]


def make_row(first: str, last: str, prison_id: str = "", folder: str = "") -> List[str]:
    """Build a roster row in the default column layout."""
    return [first, last, "CA", prison_id, "", folder, "", "003XX", "2024-01-01", "2024-06-01"]


def write_roster(path: Path, rows: List[List[str]], header: bool = True) -> Path:
    """Write a roster CSV with the default header."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        if header:
            writer.writerow(ROSTER_HEADER)
        writer.writerows(rows)
    return path


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def folder_store(temp_dir: Path) -> Path:
    """Create a folder store of letter folders holding student folders.

    Creates:
        temp_dir/students/
        ├── A-B/
        │   ├── Abbott Jane 1234/
        │   └── Baker Tom 5678/
        ├── C/
        │   ├── Cruz Ana 9012/
        │   └── Cruz Luis 3456/
        ├── D-F/
        │   └── Doe John 7777/
        └── notes.txt

    Returns:
        Path to the store root.
    """
    root = temp_dir / "students"
    layout = {
        "A-B": ["Abbott Jane 1234", "Baker Tom 5678"],
        "C": ["Cruz Ana 9012", "Cruz Luis 3456"],
        "D-F": ["Doe John 7777"],
    }
    for group, students in layout.items():
        for student in students:
            (root / group / student).mkdir(parents=True)
    (root / "notes.txt").write_text("not a folder")
    return root


@pytest.fixture
def roster_rows() -> List[List[str]]:
    """Roster rows covering found, skipped, below-threshold and unknown students."""
    return [
        make_row("Jane", "Abbott", "01234"),
        make_row("Tom", "Baker", "5678", folder="https://example.org/existing"),
        make_row("Ana", "Cruz", "9012"),
        make_row("Luis", "Cruz"),
        make_row("Zed", "Unknown", "4242"),
    ]


@pytest.fixture
def roster_csv(temp_dir: Path, roster_rows: List[List[str]]) -> Path:
    """Write the roster rows to a CSV file."""
    return write_roster(temp_dir / "roster.csv", roster_rows)


@pytest.fixture
def sample_index() -> FolderIndex:
    """A FolderIndex built in memory, no filesystem involved."""
    group_ab = CandidateFolder(id="g-ab", name="A-B")
    group_c = CandidateFolder(id="g-c", name="C")
    return FolderIndex(
        groups=[group_ab, group_c],
        children={
            "g-ab": [
                CandidateFolder(id="f-abbott", name="Abbott Jane 1234"),
                CandidateFolder(id="f-baker", name="Baker Tom 5678"),
            ],
            "g-c": [
                CandidateFolder(id="f-cruz-ana", name="Cruz Ana 9012"),
                CandidateFolder(id="f-cruz-luis", name="Cruz Luis 3456"),
            ],
        },
    )


@pytest.fixture
def matcher_default() -> StudentMatcher:
    """Scored matcher with the default threshold."""
    return StudentMatcher()


@pytest.fixture
def matcher_bucketed() -> StudentMatcher:
    """Matcher running the letter-bucketed substring strategy."""
    return StudentMatcher(strategy="bucketed")


@pytest.fixture
def sample_decisions():
    """Decisions for a found and a not-found student."""
    return [
        (
            StudentRecord("Jane", "Abbott", "1234"),
            Found(candidate=CandidateFolder(id="f1", name="Abbott Jane 1234"), score=25),
        ),
        (StudentRecord("Zed", "Unknown", "4242"), NotFound(best_score=6)),
    ]


@pytest.fixture
def sample_sort_summary() -> SortSummary:
    """A summary of a small run."""
    return SortSummary(
        total_rows=5,
        skipped=1,
        found=2,
        not_found=2,
        total_folders=5,
        rows_written=4,
        errors=[],
        duration_seconds=3.5,
    )


@pytest.fixture
def tui_with_captured_output() -> SortTUI:
    """SortTUI whose console writes to a StringIO for inspection."""
    console = Console(file=io.StringIO(), force_terminal=False, width=120)
    return SortTUI(console=console)
