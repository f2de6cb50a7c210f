"""Letter index over the letter folders of the folder store.

Student folders are usually filed under letter folders named after the
surname initials they hold: "A", "B-C", "D - F". The index maps each single
letter to the letter folders that cover it, in enumeration order.

Example:
    >>> groups = [CandidateFolder("g1", "A-B"), CandidateFolder("g2", "B")]
    >>> build_letter_index(groups)
    {'a': ['g1'], 'b': ['g1', 'g2']}
"""

import re
import string
from typing import Dict, List, Optional

from foldersort.models import CandidateFolder

from .normalizer import normalize

# "a", "a-c", "a - c"
_LETTER_RANGE_PATTERN = re.compile(r'^([a-z])(?:\s*-\s*([a-z]))?$')

# Unicode dashes accepted as the range separator
_DASH_PATTERN = re.compile(r'[\u2010-\u2015\u2212\ufe58\ufe63\uff0d]')


def letters_covered(group_name: str) -> List[str]:
    """Return the letters a letter folder name covers, or [] for other names."""
    text = _DASH_PATTERN.sub("-", normalize(group_name, strip_punctuation=False))
    match = _LETTER_RANGE_PATTERN.match(text.strip())
    if match is None:
        return []

    start, end = match.group(1), match.group(2) or match.group(1)
    if end < start:
        start, end = end, start
    return list(string.ascii_lowercase[ord(start) - ord("a"):ord(end) - ord("a") + 1])


def build_letter_index(groups: List[CandidateFolder]) -> Dict[str, List[str]]:
    """Map every letter to the ids of the letter folders that cover it."""
    index: Dict[str, List[str]] = {}
    for group in groups:
        for letter in letters_covered(group.name):
            index.setdefault(letter, []).append(group.id)
    return index


def surname_initial(last_name: str) -> Optional[str]:
    """First letter of a normalized surname, or None if it is not a-z.

    Leading punctuation is skipped, but a first letter with no ASCII form
    ("Ø") gives None rather than a later letter of the surname.
    """
    for ch in normalize(last_name, strip_punctuation=False):
        if ch.isalpha():
            return ch if ch in string.ascii_lowercase else None
    return None
