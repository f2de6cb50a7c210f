"""SortOrchestrator for sorting roster students by whether they have a folder.

This module provides the SortOrchestrator class that runs the complete sort
workflow. It coordinates FolderLister, RosterReader, StudentMatcher,
ResultWriter, SortLogger and SortTUI:

    1. Scan - Enumerate the folder store once into a FolderIndex
    2. Read - Read the roster rows
    3. Match - Skip students that already have a folder, match the rest
    4. Write - Append found and not-found rows to their outputs in one batch
    5. Summary - Display and log the results

Example:
    from foldersort.orchestration import SortOrchestrator
    from pathlib import Path

    orchestrator = SortOrchestrator(
        roster_path=Path("students.csv"),
        folder_root=Path("/data/students"),
        found_output=Path("with_folder.csv"),
        not_found_output=Path("without_folder.csv"),
    )
    summary = orchestrator.run()
"""

import sys
import time
from contextlib import nullcontext
from pathlib import Path
from typing import List, Optional

from foldersort.matching import StudentMatcher, build_letter_index, letters_covered
from foldersort.models import (
    CandidateFolder,
    ColumnLayout,
    FolderIndex,
    MatchStrategy,
    RosterRow,
    SortResult,
    SortSummary,
)
from foldersort.orchestration.result_writer import ResultWriter
from foldersort.orchestration.sort_logger import SortLogger
from foldersort.scanning import FolderLister, RosterReader
from foldersort.ui import SortTUI


class SortOrchestrator:
    """Orchestrates the roster sort workflow.

    The matcher only returns decisions; turning decisions into output rows
    and writing them is done here, after every student is processed.

    Attributes:
        folder_root: Root of the folder store holding the letter folders.
        matcher: The StudentMatcher deciding each student.
        layout: Column positions of the roster.
        link_template: Format string rendering a found folder into the
            folder column. Receives ``id`` and ``name``.
        dry_run: If True, output files are not written.
        verbose: If True, display the decision table and lister warnings.
    """

    NOT_FOUND_MARKER = "No Folder Found"

    def __init__(
        self,
        roster_path: Path,
        folder_root: Path,
        found_output: Path,
        not_found_output: Path,
        matcher: Optional[StudentMatcher] = None,
        layout: Optional[ColumnLayout] = None,
        sheet_name: Optional[str] = None,
        link_template: str = "{id}",
        log_file_path: Optional[Path] = None,
        dry_run: bool = False,
        verbose: bool = False,
        tui: Optional[SortTUI] = None,
    ) -> None:
        """Initialize the SortOrchestrator.

        Args:
            roster_path: CSV or Excel file with the students to search.
            folder_root: Root folder holding the letter folders.
            found_output: CSV receiving students whose folder was found.
            not_found_output: CSV receiving students without a folder.
            matcher: StudentMatcher to use. Defaults to the scored strategy.
            layout: Roster column positions. Defaults to ColumnLayout().
            sheet_name: Worksheet to read when the roster is a workbook.
            link_template: Format string for the folder column of found rows.
            log_file_path: Optional log file path. A timestamped file in the
                current directory is used when omitted.
            dry_run: Skip writing the output files.
            verbose: Display extra details.
            tui: SortTUI for console output. Defaults to a new SortTUI.

        Raises:
            ValueError: If the folder root or roster is missing or invalid,
                or the link template is malformed.
        """
        resolved_root = folder_root.resolve()
        if not resolved_root.exists():
            raise ValueError(f"Folder root does not exist: {folder_root}")
        if not resolved_root.is_dir():
            raise ValueError(f"Folder root is not a directory: {folder_root}")

        self.layout = layout if layout is not None else ColumnLayout()
        self._reader = RosterReader(roster_path, layout=self.layout, sheet_name=sheet_name)

        validate_link_template(link_template)

        self.folder_root = resolved_root
        self.matcher = matcher if matcher is not None else StudentMatcher()
        self.link_template = link_template
        self._writer = ResultWriter(found_output, not_found_output)
        self.log_file_path = log_file_path
        self.dry_run = dry_run
        self.verbose = verbose

        self._lister = FolderLister()
        self._tui = tui if tui is not None else SortTUI()

        # Orchestrator-level errors
        self._errors: List[str] = []

    def run(self) -> SortSummary:
        """Execute the sort workflow.

        Returns:
            SortSummary with the counts of the run.

        Raises:
            ValueError: If the roster cannot be read.
            OSError: If an output file cannot be written.
        """
        start_time = time.time()
        self._errors.clear()

        index = self._execute_scan_phase()
        total_folders = len(index.all_candidates())
        self._tui.display_scan_summary(
            group_count=len(index.groups),
            total_folders=total_folders,
            strategy=self.matcher.strategy,
            threshold=self.matcher.threshold,
        )

        rows = self._reader.read_rows()

        logger: Optional[SortLogger] = None
        try:
            logger = SortLogger(
                log_file_path=self.log_file_path,
                dry_run=self.dry_run,
                strategy=self.matcher.strategy,
                threshold=self.matcher.threshold,
            )
        except OSError as e:
            print(f"Warning: Could not create log file: {e}", file=sys.stderr)

        with logger if logger is not None else nullcontext():
            if logger is not None:
                logger.log_header()
                logger.log_scan_phase(
                    folder_root=self.folder_root,
                    group_count=len(index.groups),
                    total_folders=total_folders,
                    errors=self._errors,
                )

            result = self.sort_rows(rows, index, logger)

            rows_written = 0
            if not self.dry_run:
                self._writer.header = self._reader.read_header()
                rows_written = self._writer.write(result)

            summary = SortSummary(
                total_rows=len(rows),
                skipped=result.skipped,
                found=len(result.found_rows),
                not_found=len(result.not_found_rows),
                total_folders=total_folders,
                rows_written=rows_written,
                errors=self._errors.copy(),
                duration_seconds=time.time() - start_time,
                dry_run=self.dry_run,
            )

            if self.verbose:
                self._tui.display_decisions(result.decisions)
            self._tui.display_sort_summary(summary)

            if logger is not None:
                logger.log_summary(summary)
                if self.verbose:
                    self._tui.console.print(f"[dim]Log file: {logger.get_log_path()}[/dim]")

        return summary

    def sort_rows(
        self,
        rows: List[RosterRow],
        index: FolderIndex,
        logger: Optional[SortLogger] = None,
    ) -> SortResult:
        """Decide every row and build the two output lists.

        Rows whose student already has a folder reference are skipped. The
        rows passed in are not modified; output rows are copies.

        Args:
            rows: Roster rows in file order.
            index: The folder index built for this run.
            logger: Optional SortLogger receiving one entry per student.

        Returns:
            SortResult with found rows, not-found rows and every decision.
        """
        result = SortResult()
        candidates = index.all_candidates()
        letter_index = build_letter_index(index.groups)

        progress, callback = self._tui.create_progress_callback(len(rows))
        with progress:
            for position, row in enumerate(rows, start=1):
                student = row.student

                if student.existing_folder_ref:
                    result.skipped += 1
                    if logger is not None:
                        logger.log_skipped(student, row.row_number)
                    callback(position)
                    continue

                decision = self.matcher.match(student, index, letter_index)
                result.decisions.append((student, decision))

                if logger is not None:
                    suggestion = None
                    if not decision.found:
                        suggestion = self.matcher.suggest_closest(student, candidates)
                    logger.log_decision(student, decision, row.row_number, suggestion)

                output_row = list(row.values)
                if decision.found:
                    output_row[self.layout.folder_col] = self.render_link(decision.candidate)
                    result.found_rows.append(output_row)
                else:
                    output_row[self.layout.folder_col] = self.NOT_FOUND_MARKER
                    result.not_found_rows.append(output_row)

                callback(position)

        return result

    def render_link(self, candidate: CandidateFolder) -> str:
        """Render a found folder for the folder column."""
        return self.link_template.format(id=candidate.id, name=candidate.name)

    def _execute_scan_phase(self) -> FolderIndex:
        """Enumerate the folder store once and collect listing errors.

        Under the bucketed strategy, letter folders whose name covers no
        letter are reported as well.
        """
        self._lister.clear_errors()

        index = self._lister.build_index(self.folder_root)

        lister_errors = self._lister.get_errors()
        if self.matcher.strategy is MatchStrategy.BUCKETED_SUBSTRING:
            lister_errors.extend(
                f"Letter folder covers no surname initial, not searched: {group.name}"
                for group in index.groups
                if not letters_covered(group.name)
            )
        self._errors.extend(lister_errors)

        if self.verbose and lister_errors:
            self._tui.console.print("[yellow]Folder listing warnings:[/yellow]")
            for error in lister_errors:
                self._tui.console.print(f"  [dim]- {error}[/dim]")

        return index


def validate_link_template(link_template: str) -> None:
    """Check that a link template only uses the ``id`` and ``name`` fields.

    Raises:
        ValueError: If the template is malformed or uses other fields.
    """
    try:
        link_template.format(id="", name="")
    except (KeyError, IndexError, ValueError) as e:
        raise ValueError(
            f"Invalid link template '{link_template}': use {{id}} and {{name}} only ({e})"
        )
