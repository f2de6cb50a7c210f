"""Terminal output for the student folder sorter.

This module provides the SortTUI class, a Rich-based console view of a sort
run: the folder index that was built, a progress bar while students are
matched, the decision table, and the final summary.

Example:
    from foldersort.ui import SortTUI

    tui = SortTUI()
    tui.display_scan_summary(group_count=26, total_folders=1200,
                             strategy=MatchStrategy.SCORED_THRESHOLD, threshold=15)
    tui.display_sort_summary(summary)
"""

from typing import Callable, List, Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from foldersort.models import (
    MatchDecision,
    MatchStrategy,
    ScoreBreakdown,
    SortSummary,
    StudentRecord,
)


class SortTUI:
    """Rich-based console output for sort runs.

    Args:
        console: Optional Rich Console instance for output. Pass a Console
            writing to a StringIO to capture output in tests.

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_scan_summary(
        self,
        group_count: int,
        total_folders: int,
        strategy: MatchStrategy,
        threshold: int,
    ) -> None:
        """Display the folder index statistics and matching settings."""
        lines = [
            f"Letter folders: {group_count:,}",
            f"Student folders indexed: {total_folders:,}",
            f"Strategy: {strategy.value}",
        ]
        if strategy is MatchStrategy.SCORED_THRESHOLD:
            lines.append(f"Score threshold: {threshold}")

        self.console.print(Panel("\n".join(lines), title="Folder Index", border_style="blue"))

    def display_decisions(
        self, decisions: List[Tuple[StudentRecord, MatchDecision]]
    ) -> None:
        """Display one table row per matched student."""
        if not decisions:
            self.console.print("[yellow]No students needed a folder search.[/yellow]")
            return

        table = Table(title="Decisions")
        table.add_column("#", justify="right", style="cyan", no_wrap=True)
        table.add_column("Student", style="white")
        table.add_column("ID", style="dim")
        table.add_column("Score", justify="right")
        table.add_column("Folder", style="white")

        for idx, (student, decision) in enumerate(decisions, start=1):
            if decision.found:
                score = "-" if decision.score is None else str(decision.score)
                folder = self._truncate_name(decision.candidate.name, max_length=50)
                table.add_row(
                    str(idx), student.display_name, student.prison_id,
                    f"[green]{score}[/green]", folder,
                )
            else:
                table.add_row(
                    str(idx), student.display_name, student.prison_id,
                    f"[red]{decision.best_score}[/red]", "[red]No Folder Found[/red]",
                )

        self.console.print(table)

    def display_sort_summary(self, summary: SortSummary) -> None:
        """Display final statistics after all students are processed."""
        title = "Sort Summary"
        if summary.dry_run:
            title += " [yellow][DRY RUN][/yellow]"

        self.console.print(
            Panel(title, border_style="yellow" if summary.dry_run else "green")
        )

        table = Table(show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Rows read", f"{summary.total_rows:,}")
        table.add_row("Skipped (already have a folder)", f"{summary.skipped:,}")
        table.add_row("Folders found", f"{summary.found:,}")
        table.add_row("No folder found", f"{summary.not_found:,}")
        table.add_row("Rows written", f"{summary.rows_written:,}")
        table.add_row("Duration", self._format_duration(summary.duration_seconds))

        self.console.print(table)

        if summary.errors:
            self._display_errors(summary.errors)

    def display_score_breakdown(
        self, student: StudentRecord, folder_name: str, breakdown: ScoreBreakdown, threshold: int
    ) -> None:
        """Display how each scoring rule contributed for one folder name."""
        parts = breakdown.name_parts
        table = Table(title=f"{student.display_name} vs '{folder_name}'")
        table.add_column("Rule", style="cyan")
        table.add_column("Looked for", style="white")
        table.add_column("Points", justify="right")

        table.add_row("Student ID", ", ".join(breakdown.student_ids) or "-",
                      str(breakdown.id_points))
        table.add_row("Primary first name", parts.primary_first or "-",
                      str(breakdown.first_name_points))
        table.add_row("Primary last name", parts.primary_last or "-",
                      str(breakdown.last_name_points))
        table.add_row("Extra name parts", ", ".join(parts.extra_parts) or "-",
                      str(breakdown.extra_part_points))
        table.add_row("[bold]Total[/bold]", "", f"[bold]{breakdown.total}[/bold]")
        table.caption = f"Folder tokens: {', '.join(breakdown.folder_tokens) or '-'}"

        self.console.print(table)

        if breakdown.total >= threshold:
            self.console.print(f"[green]Match[/green] at threshold {threshold}.")
        else:
            self.console.print(f"[red]No match[/red] at threshold {threshold}.")

    def create_progress_callback(
        self, total_students: int
    ) -> Tuple[Progress, Callable[[int], None]]:
        """Create a progress bar and a callback taking the completed count.

        The caller must use the returned Progress as a context manager so the
        bar renders and cleans up properly.

        Example:
            progress, callback = tui.create_progress_callback(len(rows))
            with progress:
                for i, row in enumerate(rows):
                    match(row)
                    callback(i + 1)
        """
        progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=self.console,
        )
        task_id = progress.add_task("Matching students...", total=total_students)

        def callback(completed: int) -> None:
            progress.update(task_id, completed=completed)

        return progress, callback

    def _display_errors(self, errors: List[str]) -> None:
        """Display up to 10 errors in a red panel."""
        max_display = 10
        displayed_errors = errors[:max_display]
        remaining = len(errors) - max_display

        error_text = "\n".join(f"- {e}" for e in displayed_errors)
        if remaining > 0:
            error_text += f"\n\n... and {remaining} more errors"

        self.console.print(
            Panel(error_text, title=f"Errors ({len(errors)})", border_style="red")
        )

    def _format_duration(self, seconds: float) -> str:
        if seconds < 0:
            seconds = 0
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"

    def _truncate_name(self, name: str, max_length: int = 60) -> str:
        if len(name) > max_length:
            return name[: max_length - 3] + "..."
        return name
