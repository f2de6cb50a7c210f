"""
Unit tests for FolderScorer in foldersort.matching.folder_scorer.

Each scoring rule is tested on its own, then in combination with the
examples the scoring was designed around.
"""

import pytest

from foldersort.matching import FolderScorer
from foldersort.models import StudentRecord


@pytest.fixture
def scorer() -> FolderScorer:
    return FolderScorer()


class TestScoringRules:
    """Each rule awards its points independently."""

    def test_id_only(self, scorer):
        assert scorer.score(StudentRecord("Zed", "Nobody", "1234"), "Folder 1234") == 10

    def test_first_name_only(self, scorer):
        assert scorer.score(StudentRecord("John", "Nobody", ""), "John's stuff") == 0
        assert scorer.score(StudentRecord("John", "Nobody", ""), "John stuff") == 8

    def test_last_name_only(self, scorer):
        assert scorer.score(StudentRecord("Zed", "Doe", ""), "Doe family") == 6

    def test_extra_part_only(self, scorer):
        assert scorer.score(StudentRecord("Mary Ann", "Nobody", ""), "Ann") == 1

    def test_id_awarded_once_for_two_matching_ids(self, scorer):
        student = StudentRecord("Zed", "Nobody", "1234/5678")
        assert scorer.score(student, "1234 5678") == 10

    def test_second_id_matches(self, scorer):
        student = StudentRecord("Zed", "Nobody", "1234/5678")
        assert scorer.score(student, "Folder 5678") == 10

    def test_leading_zeros_ignored(self, scorer):
        student = StudentRecord("Zed", "Nobody", "0001234")
        assert scorer.score(student, "1234") == 10

    def test_id_with_letters_compared_case_insensitively(self, scorer):
        student = StudentRecord("Zed", "Nobody", "AB1234")
        assert scorer.score(student, "ab1234 folder") == 10


class TestExactTokenMatching:
    """Scoring compares whole tokens, never substrings."""

    def test_substring_of_token_does_not_score(self, scorer):
        assert scorer.score(StudentRecord("Ann", "Lee", "123"), "Annabel Leeds 12345") == 0

    def test_id_inside_longer_number_does_not_score(self, scorer):
        assert scorer.score(StudentRecord("Zed", "Nobody", "234"), "Folder 1234") == 0

    def test_dash_separates_tokens(self, scorer):
        assert scorer.score(StudentRecord("John", "Doe", "1234"), "Doe-John-1234") == 24


class TestScoringExamples:
    """Full examples."""

    def test_full_name_and_id(self, scorer):
        assert scorer.score(StudentRecord("John", "Doe", "1234"), "John Doe 1234") == 24

    def test_compound_name_with_two_ids(self, scorer):
        student = StudentRecord("John A.", "Doe-Smith", "01234/56789")
        assert scorer.score(student, "John Doe 1234") == 19

    def test_unrelated_folder_scores_zero(self, scorer):
        assert scorer.score(StudentRecord("John", "Doe", "1234"), "Maria Lopez 9999") == 0

    def test_diacritics_in_folder_name(self, scorer):
        assert scorer.score(StudentRecord("Jose", "Perez", ""), "PÉREZ, José") == 14

    def test_empty_student_never_matches(self, scorer):
        assert scorer.score(StudentRecord("", "", ""), "John Doe 1234") == 0

    def test_empty_folder_name(self, scorer):
        assert scorer.score(StudentRecord("John", "Doe", "1234"), "") == 0

    @pytest.mark.parametrize("folder_name", [
        "", " ", "---", "John", "ñ", "1234/5678", "Doe, John (old)", "\t\n",
    ])
    def test_score_never_negative(self, scorer, folder_name):
        assert scorer.score(StudentRecord("John", "Doe", "1234"), folder_name) >= 0


class TestExplain:
    """Tests for the per-rule breakdown."""

    def test_breakdown_matches_score(self, scorer):
        student = StudentRecord("John A.", "Doe-Smith", "01234/56789")
        breakdown = scorer.explain(student, "John Doe 1234")

        assert breakdown.id_points == 10
        assert breakdown.first_name_points == 8
        assert breakdown.last_name_points == 0
        assert breakdown.matched_extra_parts == ("doe",)
        assert breakdown.extra_part_points == 1
        assert breakdown.total == 19
        assert breakdown.student_ids == ("1234", "56789")
        assert breakdown.folder_tokens == ("john", "doe", "1234")

    def test_punctuation_policy_changes_tokens(self):
        student = StudentRecord("Sean", "O'Brien", "")
        assert FolderScorer().score(student, "OBrien Sean") == 14
        assert FolderScorer(strip_punctuation=False).score(student, "OBrien Sean") == 8
