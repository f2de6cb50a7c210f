"""Student-to-folder matching.

This module provides the StudentMatcher class which decides whether one of
the enumerated folders belongs to a student. Two strategies are available:

    1. Scored Threshold: every folder is scored by FolderScorer, the lone
       scoring folder gets a bonus point, and the best folder is accepted
       when its score reaches the threshold.
    2. Bucketed Substring: only the letter folders covering the student's
       surname initial are searched, and the first folder whose name contains
       the student's ID or names is accepted.

Example:
    >>> from foldersort.matching import StudentMatcher
    >>> matcher = StudentMatcher(threshold=15)
    >>> decision = matcher.decide(student, index.all_candidates())
    >>> if decision.found:
    ...     print(decision.candidate.id, decision.score)
"""

from typing import Dict, List, Optional, Sequence, Tuple, Union

from rapidfuzz import fuzz, process

from foldersort.models import (
    CandidateFolder,
    FolderIndex,
    Found,
    MatchDecision,
    MatchStrategy,
    NotFound,
    ScoredMatch,
    StudentRecord,
)

from .folder_scorer import FolderScorer
from .letter_index import build_letter_index, surname_initial
from .name_parts import extract_ids
from .normalizer import normalize


class StudentMatcher:
    """Matches students to candidate folders using the selected strategy.

    The matcher never mutates the student or the candidate list; every call
    returns a fresh MatchDecision.

    Attributes:
        strategy: The MatchStrategy used by ``match`` and ``score_or_match``.
        threshold: Minimum score a folder needs under the scored strategy.
        scorer: The FolderScorer used for the scored strategy.

    Example:
        >>> matcher = StudentMatcher(strategy=MatchStrategy.BUCKETED_SUBSTRING)
        >>> decision = matcher.match(student, index)
    """

    DEFAULT_THRESHOLD = 15
    SOLE_MATCH_BONUS = 1

    def __init__(
        self,
        strategy: Union[MatchStrategy, str] = MatchStrategy.SCORED_THRESHOLD,
        threshold: int = DEFAULT_THRESHOLD,
        strip_punctuation: bool = True,
        suppress_middle_initials: bool = True,
    ) -> None:
        """Initialize the StudentMatcher.

        Args:
            strategy: A MatchStrategy or its value ("scored", "bucketed").
            threshold: Minimum score for the scored strategy. Defaults to 15.
            strip_punctuation: Apply the strict character filter when scoring.
            suppress_middle_initials: Ignore lone initials when scoring.

        Raises:
            ValueError: If the strategy is unknown or the threshold is negative.
        """
        if threshold < 0:
            raise ValueError(f"threshold must not be negative, got {threshold}")
        self.strategy = MatchStrategy(strategy)
        self.threshold = threshold
        self.scorer = FolderScorer(
            strip_punctuation=strip_punctuation,
            suppress_middle_initials=suppress_middle_initials,
        )

    def score(self, student: StudentRecord, folder_name: str) -> int:
        """Score one folder name for a student (no sole-match bonus)."""
        return self.scorer.score(student, folder_name)

    def rank(
        self, student: StudentRecord, candidates: Sequence[CandidateFolder]
    ) -> List[ScoredMatch]:
        """Score every candidate and rank the ones that scored.

        Candidates scoring 0 are dropped. When exactly one candidate scored,
        it receives the sole-match bonus. Ties keep enumeration order.

        Args:
            student: The student to look for.
            candidates: Folders in enumeration order.

        Returns:
            ScoredMatch list sorted by score, highest first.
        """
        scored: List[ScoredMatch] = []
        for candidate in candidates:
            points = self.scorer.score(student, candidate.name)
            if points > 0:
                scored.append(ScoredMatch(candidate=candidate, score=points))

        if len(scored) == 1:
            only = scored[0]
            scored[0] = ScoredMatch(
                candidate=only.candidate, score=only.score + self.SOLE_MATCH_BONUS
            )

        # sorted() is stable, so equal scores stay in enumeration order
        return sorted(scored, key=lambda m: -m.score)

    def decide(
        self, student: StudentRecord, candidates: Sequence[CandidateFolder]
    ) -> MatchDecision:
        """Apply the scored strategy to a whole candidate set.

        Returns:
            Found with the best candidate when its score reaches the
            threshold, otherwise NotFound with the best score seen (0 when
            nothing scored).
        """
        ranked = self.rank(student, candidates)
        if not ranked:
            return NotFound(best_score=0)

        best = ranked[0]
        if best.score >= self.threshold:
            return Found(candidate=best.candidate, score=best.score)
        return NotFound(best_score=best.score)

    def search_within_group(
        self,
        candidates: Sequence[CandidateFolder],
        student_id: str,
        first_name: str,
        last_name: str,
    ) -> Optional[str]:
        """Find the first candidate whose name contains the student.

        Names are compared after removing accents and case only. A candidate
        matches when its name contains one of the student's IDs, or contains
        both the first name and the surname. For a dashed surname only the
        part before the first dash is required.

        Args:
            candidates: Folders of one letter group, in enumeration order.
            student_id: Raw ID cell, possibly two IDs separated by '/'.
            first_name: Raw first name.
            last_name: Raw last name.

        Returns:
            The id of the first matching candidate, or None.
        """
        ids = [normalize(piece, strip_punctuation=False) for piece in extract_ids(student_id)]
        ids = [piece for piece in ids if piece]

        first = normalize(first_name, strip_punctuation=False).strip()
        last = normalize(last_name, strip_punctuation=False).strip()
        if "-" in last:
            surname = last.split("-", 1)[0].strip()
        else:
            surname = last

        for candidate in candidates:
            name = normalize(candidate.name, strip_punctuation=False)

            if any(piece in name for piece in ids):
                return candidate.id

            if first and surname and first in name and surname in name:
                return candidate.id

        return None

    def search_buckets(
        self,
        student: StudentRecord,
        index: FolderIndex,
        letter_index: Optional[Dict[str, List[str]]] = None,
    ) -> MatchDecision:
        """Apply the bucketed strategy using the student's surname initial.

        Args:
            student: The student to look for.
            index: The enumerated folders.
            letter_index: Prebuilt letter index. Built from ``index`` when
                omitted.

        Returns:
            Found (without a score) for the first hit, otherwise NotFound(0).
        """
        if letter_index is None:
            letter_index = build_letter_index(index.groups)

        initial = surname_initial(student.last_name)
        if initial is None:
            return NotFound(best_score=0)

        for group_id in letter_index.get(initial, []):
            candidates = index.children.get(group_id, [])
            folder_id = self.search_within_group(
                candidates, student.prison_id, student.first_name, student.last_name
            )
            if folder_id is not None:
                for candidate in candidates:
                    if candidate.id == folder_id:
                        return Found(candidate=candidate)

        return NotFound(best_score=0)

    def match(
        self,
        student: StudentRecord,
        index: FolderIndex,
        letter_index: Optional[Dict[str, List[str]]] = None,
    ) -> MatchDecision:
        """Run the configured strategy against the enumerated folders."""
        if self.strategy is MatchStrategy.BUCKETED_SUBSTRING:
            return self.search_buckets(student, index, letter_index)
        return self.decide(student, index.all_candidates())

    def score_or_match(
        self,
        student: StudentRecord,
        candidates: Union[CandidateFolder, Sequence[CandidateFolder], FolderIndex],
    ) -> MatchDecision:
        """Decide for one candidate, a flat candidate list, or a FolderIndex.

        Under the bucketed strategy a flat list is searched as a single
        letter group.
        """
        if isinstance(candidates, FolderIndex):
            return self.match(student, candidates)

        if isinstance(candidates, CandidateFolder):
            candidates = [candidates]

        if self.strategy is MatchStrategy.BUCKETED_SUBSTRING:
            folder_id = self.search_within_group(
                candidates, student.prison_id, student.first_name, student.last_name
            )
            for candidate in candidates:
                if candidate.id == folder_id:
                    return Found(candidate=candidate)
            return NotFound(best_score=0)

        return self.decide(student, candidates)

    def suggest_closest(
        self, student: StudentRecord, candidates: Sequence[CandidateFolder]
    ) -> Optional[Tuple[CandidateFolder, float]]:
        """Find the folder name most similar to the student, for review.

        Uses RapidFuzz token_sort_ratio on normalized text. The suggestion is
        informational and never changes a decision.

        Returns:
            Tuple of (candidate, similarity 0-100), or None without candidates.
        """
        if not candidates:
            return None

        query = normalize(
            f"{student.first_name} {student.last_name} {student.prison_id}"
        )
        choices = [normalize(candidate.name) for candidate in candidates]
        result = process.extractOne(query, choices, scorer=fuzz.token_sort_ratio)
        if result is None:
            return None

        _, similarity, position = result
        return candidates[position], float(similarity)
