"""Student folder matching package.

This package contains the normalizer, the name decomposition helpers, the
FolderScorer, and the StudentMatcher that decides which folder, if any,
belongs to a student.

Example:
    >>> from foldersort.matching import StudentMatcher
    >>> from foldersort.models import CandidateFolder, StudentRecord
    >>> matcher = StudentMatcher(threshold=15)
    >>> student = StudentRecord("John", "Doe", "1234")
    >>> decision = matcher.decide(student, [CandidateFolder("f1", "John Doe 1234")])
    >>> decision.score
    25
"""

from .folder_scorer import FolderScorer
from .letter_index import build_letter_index, letters_covered, surname_initial
from .name_parts import decompose, extract_ids
from .normalizer import normalize, strip_middle_initials, tokenize
from .student_matcher import StudentMatcher

__all__ = [
    "FolderScorer",
    "StudentMatcher",
    "build_letter_index",
    "decompose",
    "extract_ids",
    "letters_covered",
    "normalize",
    "strip_middle_initials",
    "surname_initial",
    "tokenize",
]
