"""
MatchStrategy enum for selecting how a student is matched to a folder.

Two strategies are available:
1. Scored Threshold - Every folder is scored by exact token overlap; the best
   score wins if it reaches the threshold
2. Bucketed Substring - Only folders inside the letter group for the student's
   surname initial are searched; the first substring hit wins
"""

from enum import Enum


class MatchStrategy(Enum):
    """Encodes the matching strategies a StudentMatcher can run."""
    SCORED_THRESHOLD = "scored"         # Token-exact scoring, ranked, thresholded
    BUCKETED_SUBSTRING = "bucketed"     # Letter-bucketed substring lookup, first found
