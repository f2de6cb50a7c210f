"""
Models package for the student folder sorter.

This package provides convenient imports for all data models:
- MatchStrategy: Enum for the available matching strategies
- ColumnLayout: Roster column positions
- StudentRecord, RosterRow: Roster input
- CandidateFolder, FolderIndex: Enumerated folders
- NameParts, ScoredMatch, ScoreBreakdown: Intermediate matching data
- Found, NotFound, MatchDecision: Matching outcome
- SortResult, SortSummary: Workflow output
"""

from .match_strategy import MatchStrategy
from .data_models import (
    CandidateFolder,
    ColumnLayout,
    FolderIndex,
    Found,
    MatchDecision,
    NameParts,
    NotFound,
    RosterRow,
    ScoreBreakdown,
    ScoredMatch,
    SortResult,
    SortSummary,
    StudentRecord,
)

__all__ = [
    "MatchStrategy",
    "CandidateFolder",
    "ColumnLayout",
    "FolderIndex",
    "Found",
    "MatchDecision",
    "NameParts",
    "NotFound",
    "RosterRow",
    "ScoreBreakdown",
    "ScoredMatch",
    "SortResult",
    "SortSummary",
    "StudentRecord",
]
