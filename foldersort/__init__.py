"""Foldersort - Student Folder Sorter.

A Python application for sorting the students of a roster by whether a
folder for them already exists, using name and ID confidence scoring.
"""

__version__ = "1.0.0"

from .models import (
    CandidateFolder,
    ColumnLayout,
    Found,
    MatchDecision,
    MatchStrategy,
    NotFound,
    ScoredMatch,
    StudentRecord,
)

__all__ = [
    "__version__",
    "CandidateFolder",
    "ColumnLayout",
    "Found",
    "MatchDecision",
    "MatchStrategy",
    "NotFound",
    "ScoredMatch",
    "StudentRecord",
]


def main() -> None:
    """Entry point for the foldersort CLI application.

    This function is called when the `foldersort` command is invoked after
    package installation via pip. It imports and runs the Typer app from the
    foldersort.cli module.
    """
    from foldersort.cli import app
    app()
