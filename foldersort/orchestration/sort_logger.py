"""SortLogger for logging sort runs in formatted output.

This module provides the SortLogger class that writes a sectioned plain-text
log of a sort run: header, scan phase, one entry per student, and summary.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from foldersort.models import (
    CandidateFolder,
    MatchDecision,
    MatchStrategy,
    SortSummary,
    StudentRecord,
)


class SortLogger:
    """Logger for sort runs with structured output format.

    Usage:
        with SortLogger(dry_run=True) as logger:
            logger.log_header()
            logger.log_scan_phase(folder_root, group_count, total_folders, errors)
            for student in students:
                logger.log_decision(student, decision)
            logger.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(
        self,
        log_file_path: Optional[Path] = None,
        dry_run: bool = False,
        strategy: MatchStrategy = MatchStrategy.SCORED_THRESHOLD,
        threshold: int = 15,
    ) -> None:
        """Initialize the SortLogger.

        Args:
            log_file_path: Optional path for the log file. If not provided,
                generates a timestamped filename in the current directory.
            dry_run: Whether output files are left untouched.
            strategy: Matching strategy, shown in the header.
            threshold: Score threshold, shown in the header.

        Raises:
            OSError: If the log file path is not writable.
        """
        self._dry_run = dry_run
        self._strategy = strategy
        self._threshold = threshold
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None
        self._student_counter = 0

        if log_file_path is None:
            timestamp_str = self._start_timestamp.strftime("%Y-%m-%d_%H-%M-%S")
            self._log_file_path = Path.cwd() / f"sort_log_{timestamp_str}.log"
        else:
            self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file path is writable.

        Raises:
            OSError: If the parent directory doesn't exist or is not writable.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")
        try:
            test_file = parent / f".foldersort_test_{id(self)}"
            test_file.touch()
            test_file.unlink()
        except PermissionError:
            raise OSError(f"Permission denied: cannot write to {parent}")

    def __enter__(self) -> "SortLogger":
        """Enter the context manager, opening the log file.

        Raises:
            OSError: If the file cannot be opened for writing.
        """
        try:
            self._file_handle = open(self._log_file_path, "w", encoding="utf-8")
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the context manager, closing the log file."""
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def get_log_path(self) -> Path:
        """Get the path to the log file."""
        return self._log_file_path

    def log_header(self) -> None:
        """Write the title, timestamp, mode, strategy and threshold."""
        self._write_separator()
        self._write_line("Student Folder Sorter - Sort Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        mode = "DRY RUN" if self._dry_run else "LIVE"
        self._write_line(f"Mode: {mode}")
        self._write_line(f"Strategy: {self._strategy.value}")
        if self._strategy is MatchStrategy.SCORED_THRESHOLD:
            self._write_line(f"Threshold: {self._threshold}")
        self._write_line("")

    def log_scan_phase(
        self,
        folder_root: Path,
        group_count: int,
        total_folders: int,
        errors: Optional[List[str]] = None,
    ) -> None:
        """Write the scan phase section.

        Args:
            folder_root: Root of the folder store.
            group_count: Number of letter folders found.
            total_folders: Number of student folders indexed.
            errors: Listing errors, if any.
        """
        self._write_separator()
        self._write_line("SCAN PHASE")
        self._write_separator()
        self._write_line(f"Folder Root: {folder_root}")
        self._write_line(f"Letter folders: {group_count}")
        self._write_line(f"Built index of {total_folders} total student folders.")
        if errors:
            self._write_line("Listing errors:")
            for error in errors:
                self._write_line(f"- {error}", indent=2)
        self._write_line("")

    def log_skipped(self, student: StudentRecord, row_number: int) -> None:
        """Record a student skipped because they already have a folder."""
        self._start_match_phase()
        self._write_line(
            f"Row {row_number}: Skipping student (has folder): {student.display_name}"
        )

    def log_decision(
        self,
        student: StudentRecord,
        decision: MatchDecision,
        row_number: int,
        suggestion: Optional[Tuple[CandidateFolder, float]] = None,
    ) -> None:
        """Record the decision made for one student.

        Args:
            student: The student that was matched.
            decision: Found or NotFound.
            row_number: Row of the student in the roster.
            suggestion: Closest folder by name similarity, for NotFound.
        """
        self._start_match_phase()
        self._write_line(f"Row {row_number}: Processing student: {student.display_name}")

        if decision.found:
            if decision.score is None:
                self._write_line(f"Match found: {decision.candidate.name}", indent=2)
            else:
                self._write_line(
                    f"Best match found with score {decision.score}: "
                    f"{decision.candidate.name}",
                    indent=2,
                )
        else:
            self._write_line(
                f"No confident match. Best score: {decision.best_score}", indent=2
            )
            if suggestion is not None:
                candidate, similarity = suggestion
                self._write_line(
                    f"Closest folder name: {candidate.name} ({similarity:.0f}% similar)",
                    indent=2,
                )

    def log_summary(self, summary: SortSummary) -> None:
        """Write the summary section.

        Args:
            summary: The SortSummary with aggregated statistics.
        """
        if self._student_counter:
            self._write_line("")
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Rows read: {summary.total_rows}")
        self._write_line(f"Skipped (already have a folder): {summary.skipped}")
        self._write_line(f"Folders found: {summary.found}")
        self._write_line(f"No folder found: {summary.not_found}")
        if summary.dry_run:
            self._write_line("Rows written: 0 (dry run)")
        else:
            self._write_line(f"Rows written: {summary.rows_written}")

        if summary.errors:
            self._write_line(f"Total errors: {len(summary.errors)}")
            self._write_line("Errors:")
            for error in summary.errors:
                self._write_line(f"  - {error}")

        self._write_line(f"Duration: {self._format_duration(summary.duration_seconds)}")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _start_match_phase(self) -> None:
        """Write the match phase heading before the first student entry."""
        if self._student_counter == 0:
            self._write_separator()
            self._write_line("MATCH PHASE")
            self._write_separator()
        self._student_counter += 1

    def _format_duration(self, seconds: float) -> str:
        """Format duration as "45s", "5m 23s" or "1h 5m 30s"."""
        total_seconds = int(seconds)

        if total_seconds < 60:
            return f"{total_seconds}s"

        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        secs = total_seconds % 60

        if hours > 0:
            return f"{hours}h {minutes}m {secs}s"
        return f"{minutes}m {secs}s"

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation."""
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
        except OSError as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
