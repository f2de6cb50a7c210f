"""
Student Folder Sorter - CLI Interface.

A command-line interface for sorting the students of a roster by whether a
folder for them already exists in a folder store of letter folders.

Usage Examples:
    # Sort students into found / not-found lists
    foldersort sort students.csv /data/students

    # Read a workbook sheet and render Drive links
    foldersort sort roster.xlsx /data/students --sheet "Students to search" \\
        --link-template "https://drive.google.com/drive/u/0/folders/{id}"

    # Use the letter-bucketed substring strategy
    foldersort sort students.csv /data/students --strategy bucketed

    # Preview without writing outputs
    foldersort sort students.csv /data/students --dry-run --verbose

    # Explain the score of one folder name
    foldersort score "John A." "Doe-Smith" "01234/56789" "John Doe 1234"
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from foldersort.matching import StudentMatcher
from foldersort.models import ColumnLayout, MatchStrategy, StudentRecord
from foldersort.orchestration import SortOrchestrator
from foldersort.ui import SortTUI

__version__ = "1.0.0"

# Initialize Typer app
app = typer.Typer(
    name="foldersort",
    help="Student Folder Sorter - Find which students already have a folder.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"Student Folder Sorter v{__version__}")
        raise typer.Exit()


def validate_threshold(value: int) -> int:
    """
    Validate the score threshold is not negative.

    Raises:
        typer.BadParameter: If value is negative.
    """
    if value < 0:
        raise typer.BadParameter("Threshold must be 0 or higher")
    return value


def validate_column(value: int) -> int:
    """Validate a column position is not negative."""
    if value < 0:
        raise typer.BadParameter("Column positions are zero-based and must be 0 or higher")
    return value


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Student Folder Sorter - Find which students already have a folder."""
    pass


@app.command()
def sort(
    roster: Path = typer.Argument(
        ...,
        help="CSV or Excel roster of students to search.",
        exists=False,  # We do our own validation
    ),
    folder_root: Path = typer.Argument(
        ...,
        help="Folder holding the letter folders of student folders.",
        exists=False,
    ),
    found_output: Path = typer.Option(
        Path("students_with_folder.csv"),
        "--found-output",
        "-f",
        help="CSV receiving students whose folder was found.",
    ),
    not_found_output: Path = typer.Option(
        Path("students_without_folder.csv"),
        "--not-found-output",
        "-o",
        help="CSV receiving students without a folder.",
    ),
    strategy: MatchStrategy = typer.Option(
        MatchStrategy.SCORED_THRESHOLD,
        "--strategy",
        "-s",
        help="Matching strategy: scored (ranked token scoring) or bucketed (letter-folder substring lookup).",
    ),
    threshold: int = typer.Option(
        StudentMatcher.DEFAULT_THRESHOLD,
        "--threshold",
        "-t",
        help="Minimum score for the scored strategy.",
        callback=validate_threshold,
    ),
    keep_punctuation: bool = typer.Option(
        False,
        "--keep-punctuation",
        help="Compare names without stripping punctuation.",
    ),
    keep_initials: bool = typer.Option(
        False,
        "--keep-initials",
        help="Treat middle initials such as 'A.' as name parts.",
    ),
    link_template: str = typer.Option(
        "{id}",
        "--link-template",
        help="Text written to the folder column of found rows; {id} and {name} are substituted.",
    ),
    sheet: Optional[str] = typer.Option(
        None,
        "--sheet",
        help="Worksheet to read when the roster is an Excel workbook.",
    ),
    first_name_col: int = typer.Option(0, "--first-name-col", callback=validate_column,
                                       help="Zero-based first name column."),
    last_name_col: int = typer.Option(1, "--last-name-col", callback=validate_column,
                                      help="Zero-based last name column."),
    id_col: int = typer.Option(3, "--id-col", callback=validate_column,
                               help="Zero-based student ID column."),
    folder_col: int = typer.Option(5, "--folder-col", callback=validate_column,
                                   help="Zero-based existing folder column."),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Match students without writing the output files.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for log file output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output.",
    ),
) -> None:
    """
    Sort roster students by whether they already have a folder.

    Students whose folder column is already filled are skipped. Every other
    student is matched against the student folders; found students are
    appended to the found output with a link to their folder, the rest to
    the not-found output marked "No Folder Found".
    """
    if dry_run:
        console.print("[yellow][DRY RUN MODE][/yellow] No output files will be written.\n")

    try:
        matcher = StudentMatcher(
            strategy=strategy,
            threshold=threshold,
            strip_punctuation=not keep_punctuation,
            suppress_middle_initials=not keep_initials,
        )
        layout = ColumnLayout(
            first_name_col=first_name_col,
            last_name_col=last_name_col,
            prison_id_col=id_col,
            folder_col=folder_col,
        )
        orchestrator = SortOrchestrator(
            roster_path=roster,
            folder_root=folder_root,
            found_output=found_output,
            not_found_output=not_found_output,
            matcher=matcher,
            layout=layout,
            sheet_name=sheet,
            link_template=link_template,
            log_file_path=log_file,
            dry_run=dry_run,
            verbose=verbose,
            tui=SortTUI(console=console),
        )

        summary = orchestrator.run()

        if summary.errors:
            console.print(
                f"\n[yellow]Completed with {len(summary.errors)} warning(s).[/yellow]"
            )
        if not dry_run and summary.rows_written:
            console.print(
                f"[dim]Found: {found_output}  Not found: {not_found_output}[/dim]"
            )

    except KeyboardInterrupt:
        console.print("\n[yellow]Sort interrupted by user.[/yellow]")
        raise typer.Exit(130)

    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except PermissionError as e:
        console.print(f"[red]Error:[/red] Permission denied - {e}")
        raise typer.Exit(1)

    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def score(
    first_name: str = typer.Argument(..., help="Student first name."),
    last_name: str = typer.Argument(..., help="Student last name."),
    student_id: str = typer.Argument(..., help="Student ID, or two IDs separated by '/'."),
    folder_name: str = typer.Argument(..., help="Folder name to score."),
    threshold: int = typer.Option(
        StudentMatcher.DEFAULT_THRESHOLD,
        "--threshold",
        "-t",
        help="Threshold the score is compared against.",
        callback=validate_threshold,
    ),
    keep_punctuation: bool = typer.Option(
        False,
        "--keep-punctuation",
        help="Compare names without stripping punctuation.",
    ),
    keep_initials: bool = typer.Option(
        False,
        "--keep-initials",
        help="Treat middle initials such as 'A.' as name parts.",
    ),
) -> None:
    """
    Score one folder name for one student and explain the points.

    The sole-match bonus is not applied since only one folder is scored.
    """
    matcher = StudentMatcher(
        threshold=threshold,
        strip_punctuation=not keep_punctuation,
        suppress_middle_initials=not keep_initials,
    )
    student = StudentRecord(
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        prison_id=student_id.strip(),
    )
    breakdown = matcher.scorer.explain(student, folder_name)
    SortTUI(console=console).display_score_breakdown(
        student, folder_name, breakdown, threshold
    )


if __name__ == "__main__":
    app()
