"""Student name decomposition and ID extraction."""

from typing import FrozenSet

from foldersort.models import NameParts

from .normalizer import normalize, strip_middle_initials, tokenize


def decompose(
    first_name: str,
    last_name: str,
    strip_punctuation: bool = True,
    suppress_middle_initials: bool = True,
) -> NameParts:
    """Split a student name into primary and extra parts.

    The primary first name is the first token of the first name, the primary
    last name is the last token of the last name. Every other token (middle
    names, the leading pieces of a compound surname) is an extra part, first
    name tokens before last name tokens.

    Args:
        first_name: Raw first name, possibly with middle names.
        last_name: Raw last name, possibly compound ("Doe-Smith").
        strip_punctuation: Passed through to ``normalize``.
        suppress_middle_initials: Drop lone initials like "A." first.

    Returns:
        NameParts with empty primary parts when a name is blank.

    Example:
        >>> decompose("John A.", "Doe-Smith")
        NameParts(primary_first='john', primary_last='smith', extra_parts=('doe',))
    """
    first_name = first_name or ""
    last_name = last_name or ""

    if suppress_middle_initials:
        first_name = strip_middle_initials(first_name)
        last_name = strip_middle_initials(last_name)

    first_tokens = tokenize(normalize(first_name, strip_punctuation))
    last_tokens = tokenize(normalize(last_name, strip_punctuation))

    primary_first = first_tokens[0] if first_tokens else ""
    primary_last = last_tokens[-1] if last_tokens else ""
    extra_parts = tuple(first_tokens[1:] + last_tokens[:-1])

    return NameParts(
        primary_first=primary_first,
        primary_last=primary_last,
        extra_parts=extra_parts,
    )


def extract_ids(raw_id: str) -> FrozenSet[str]:
    """Extract the comparable IDs from a roster ID cell.

    A cell may hold two IDs separated by '/'. Each piece is trimmed and loses
    its leading zeros. Pieces that end up empty are dropped.

    Example:
        >>> sorted(extract_ids("01234 / 56789"))
        ['1234', '56789']
    """
    if not raw_id or not raw_id.strip():
        return frozenset()

    ids = (piece.strip().lstrip("0") for piece in raw_id.split("/"))
    return frozenset(piece for piece in ids if piece)
