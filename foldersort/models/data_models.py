"""
Core data models for the student folder sorter.

This module contains the following dataclasses:
- ColumnLayout: Column positions of the roster spreadsheet
- StudentRecord: One student as read from the roster
- RosterRow: A roster row with its parsed StudentRecord
- CandidateFolder: A student folder enumerated from the folder store
- FolderIndex: All folders enumerated once per run
- NameParts: A student's name split into primary and extra parts
- ScoredMatch: A candidate folder with its confidence score
- ScoreBreakdown: Per-rule points behind a score
- Found / NotFound: The MatchDecision variants
- SortResult: The two output lists of a sort run
- SortSummary: Summary of the sort workflow results
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class ColumnLayout:
    """Zero-based column positions of the roster spreadsheet."""
    first_name_col: int = 0
    last_name_col: int = 1
    state_col: int = 2
    prison_id_col: int = 3
    inactive_col: int = 4
    folder_col: int = 5
    released_col: int = 6
    contact_id_col: int = 7
    created_date_col: int = 8
    last_modified_col: int = 9
    header_rows: int = 1

    def __post_init__(self) -> None:
        for name, value in self.__dict__.items():
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")

    @property
    def width(self) -> int:
        """Minimum number of cells a row needs to cover every column."""
        return max(
            value for name, value in self.__dict__.items() if name.endswith("_col")
        ) + 1


@dataclass(frozen=True)
class StudentRecord:
    """One student as read from the roster. Never mutated by the matcher."""
    first_name: str                   # Given name(s), may include middle names
    last_name: str                    # Family name(s), may be compound
    prison_id: str                    # One id, or two separated by '/'
    existing_folder_ref: str = ""     # Empty when the student has no folder yet

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class RosterRow:
    """A roster row with its parsed student."""
    row_number: int                   # 1-based row number in the source file
    values: List[str]                 # All cells, padded to the layout width
    student: StudentRecord


@dataclass(frozen=True)
class CandidateFolder:
    """A student folder enumerated from the folder store."""
    id: str                           # Opaque handle, stable within a run
    name: str                         # Raw display name


@dataclass
class FolderIndex:
    """Folders enumerated once per run, grouped by their letter folder."""
    groups: List[CandidateFolder] = field(default_factory=list)
    children: Dict[str, List[CandidateFolder]] = field(default_factory=dict)

    def all_candidates(self) -> List[CandidateFolder]:
        """Flatten every group's folders, in enumeration order."""
        result: List[CandidateFolder] = []
        for group in self.groups:
            result.extend(self.children.get(group.id, []))
        return result


@dataclass(frozen=True)
class NameParts:
    """A student name split into the parts the scorer weighs."""
    primary_first: str
    primary_last: str
    extra_parts: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoredMatch:
    """A candidate folder with its confidence score."""
    candidate: CandidateFolder
    score: int


@dataclass(frozen=True)
class ScoreBreakdown:
    """Points awarded by each scoring rule for one student/folder pair."""
    name_parts: NameParts
    student_ids: Tuple[str, ...]
    folder_tokens: Tuple[str, ...]
    id_points: int = 0
    first_name_points: int = 0
    last_name_points: int = 0
    matched_extra_parts: Tuple[str, ...] = ()
    extra_part_points: int = 0

    @property
    def total(self) -> int:
        return (
            self.id_points
            + self.first_name_points
            + self.last_name_points
            + self.extra_part_points
        )


@dataclass(frozen=True)
class Found:
    """Decision: the student's folder was identified."""
    candidate: CandidateFolder
    score: Optional[int] = None       # None for the bucketed strategy, which does not score

    @property
    def found(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFound:
    """Decision: no candidate was confident enough."""
    best_score: int = 0

    @property
    def found(self) -> bool:
        return False


MatchDecision = Union[Found, NotFound]


@dataclass
class SortResult:
    """Rows destined for the two output lists, plus skipped rows."""
    found_rows: List[List[str]] = field(default_factory=list)
    not_found_rows: List[List[str]] = field(default_factory=list)
    skipped: int = 0
    decisions: List[Tuple[StudentRecord, MatchDecision]] = field(default_factory=list)


@dataclass
class SortSummary:
    """Summary of the sort workflow results returned by SortOrchestrator."""
    total_rows: int = 0               # Rows read from the roster
    skipped: int = 0                  # Rows that already had a folder reference
    found: int = 0                    # Students matched to a folder
    not_found: int = 0                # Students without a confident match
    total_folders: int = 0            # Student folders in the index
    rows_written: int = 0             # Rows appended to the output files
    errors: List[str] = field(default_factory=list)  # All error messages
    duration_seconds: float = 0.0     # Total workflow duration in seconds
    dry_run: bool = False             # Whether outputs were left untouched
