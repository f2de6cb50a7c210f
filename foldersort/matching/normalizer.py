"""Text normalization for comparing student names and folder names.

Names typed into a roster and names given to folders rarely agree on accents,
case, or punctuation. Everything compared by the matchers goes through
``normalize`` first so that "José O'Neil" and "jose oneil" end up equal.

Example:
    >>> normalize("José O'Neil-Ruiz")
    'jose oneil-ruiz'
    >>> tokenize(normalize("José O'Neil-Ruiz"))
    ['jose', 'oneil', 'ruiz']
"""

import re
import unicodedata
from typing import List

# Characters kept by the strict filter
_STRICT_PATTERN = re.compile(r'[^a-z0-9 -]')

# Runs of whitespace and/or dashes separate tokens
_TOKEN_DELIMITER_PATTERN = re.compile(r'[\s-]+')

# A lone letter, optionally followed by a period, preceded by whitespace
_MIDDLE_INITIAL_PATTERN = re.compile(r'\s+[^\W\d_]\.?(?=\s|$)')


def normalize(text: str, strip_punctuation: bool = True) -> str:
    """Canonicalize text for comparison.

    Lowercases, decomposes accented characters and drops their combining
    marks. With ``strip_punctuation`` every character other than ASCII
    letters, digits, space and dash is removed as well.

    Args:
        text: Raw text. None is treated as an empty string.
        strip_punctuation: Apply the strict character filter.

    Returns:
        The normalized text. Applying normalize again returns it unchanged.
    """
    if not text:
        return ""

    decomposed = unicodedata.normalize("NFD", text.lower())
    cleaned = "".join(ch for ch in decomposed if not unicodedata.combining(ch))

    if strip_punctuation:
        cleaned = _STRICT_PATTERN.sub("", cleaned)

    return cleaned


def tokenize(normalized: str) -> List[str]:
    """Split normalized text on whitespace and dashes, dropping empty tokens."""
    return [token for token in _TOKEN_DELIMITER_PATTERN.split(normalized) if token]


def strip_middle_initials(text: str) -> str:
    """Remove single-letter initials such as the "A." in "John A. Doe".

    Only initials preceded by whitespace are removed, so a leading initial
    (which would be the primary name) is kept.
    """
    if not text:
        return ""
    return _MIDDLE_INITIAL_PATTERN.sub("", text).strip()
