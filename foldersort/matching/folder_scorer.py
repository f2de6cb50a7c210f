"""Confidence scoring of a folder name against a student.

This module provides the FolderScorer class which awards points for every
piece of the student's identity found as an exact token of the folder name.

The scoring rules are independent and cumulative:
    1. Student ID (10 points, awarded once even if both IDs match)
    2. Primary first name (8 points)
    3. Primary last name (6 points)
    4. Each extra name part (1 point)

Example:
    >>> from foldersort.matching import FolderScorer
    >>> from foldersort.models import StudentRecord
    >>> scorer = FolderScorer()
    >>> scorer.score(StudentRecord("John", "Doe", "1234"), "John Doe 1234")
    24
"""

from foldersort.models import ScoreBreakdown, StudentRecord

from .name_parts import decompose, extract_ids
from .normalizer import normalize, tokenize


class FolderScorer:
    """Scores folder names by exact token overlap with a student's name and ID.

    Tokens are compared after normalization, never by substring, so "Ann"
    does not score against a folder named "Annabel".

    Attributes:
        strip_punctuation: Whether normalization applies the strict filter.
        suppress_middle_initials: Whether lone initials are ignored.
    """

    ID_POINTS = 10
    FIRST_NAME_POINTS = 8
    LAST_NAME_POINTS = 6
    EXTRA_PART_POINTS = 1

    def __init__(
        self, strip_punctuation: bool = True, suppress_middle_initials: bool = True
    ) -> None:
        self.strip_punctuation = strip_punctuation
        self.suppress_middle_initials = suppress_middle_initials

    def score(self, student: StudentRecord, folder_name: str) -> int:
        """Score a folder name for a student.

        Args:
            student: The student to look for.
            folder_name: Raw folder display name.

        Returns:
            The summed points, 0 or higher.
        """
        return self.explain(student, folder_name).total

    def explain(self, student: StudentRecord, folder_name: str) -> ScoreBreakdown:
        """Score a folder name and report which rule contributed what.

        Args:
            student: The student to look for.
            folder_name: Raw folder display name.

        Returns:
            ScoreBreakdown whose ``total`` equals ``score()``.
        """
        name_parts = decompose(
            student.first_name,
            student.last_name,
            strip_punctuation=self.strip_punctuation,
            suppress_middle_initials=self.suppress_middle_initials,
        )
        # IDs are compared in the same normalized form as folder tokens
        student_ids = {
            normalize(piece, self.strip_punctuation)
            for piece in extract_ids(student.prison_id)
        }

        folder_tokens = tokenize(normalize(folder_name, self.strip_punctuation))
        token_set = set(folder_tokens)

        id_points = 0
        if student_ids & token_set:
            id_points = self.ID_POINTS

        first_name_points = 0
        if name_parts.primary_first and name_parts.primary_first in token_set:
            first_name_points = self.FIRST_NAME_POINTS

        last_name_points = 0
        if name_parts.primary_last and name_parts.primary_last in token_set:
            last_name_points = self.LAST_NAME_POINTS

        matched_extra_parts = tuple(
            part for part in name_parts.extra_parts if part in token_set
        )

        return ScoreBreakdown(
            name_parts=name_parts,
            student_ids=tuple(sorted(student_ids)),
            folder_tokens=tuple(folder_tokens),
            id_points=id_points,
            first_name_points=first_name_points,
            last_name_points=last_name_points,
            matched_extra_parts=matched_extra_parts,
            extra_part_points=len(matched_extra_parts) * self.EXTRA_PART_POINTS,
        )
