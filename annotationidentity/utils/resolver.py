"""Shared fuzzy-suggestion utilities.

Used to turn "unrecognized symbol" errors into actionable messages
("did you mean 'Pa'?") without ever accepting the misspelled input.
"""

from __future__ import annotations
from typing import Iterable, Optional

try:
    from rapidfuzz import fuzz, process
except ImportError as e:
    raise ImportError("rapidfuzz not installed. pip install rapidfuzz") from e


def score_candidate(query: str, candidate: str) -> float:
    """Score a candidate spelling against a query (0-100).

    Exact matches score 100. A case-insensitive match scores just below that so
    that ``"pa"`` still points at ``"Pa"`` ahead of any partial match.

    Examples:
        >>> score_candidate("Pa", "Pa")
        100.0
        >>> score_candidate("pa", "Pa")
        99.0
    """
    if query == candidate:
        return 100.0
    if query.lower() == candidate.lower():
        return 99.0
    return float(fuzz.ratio(query.lower(), candidate.lower()))


def closest_match(
    query: str,
    choices: Iterable[str],
    threshold: int = 75,
) -> Optional[str]:
    """Return the best-scoring choice at or above ``threshold``, or None.

    Args:
        query: Misspelled input (e.g., "hz")
        choices: Valid spellings
        threshold: Minimum score (0-100, default: 75)

    Examples:
        >>> closest_match("hz", ["Hz", "H", "N"])
        'Hz'
        >>> closest_match("Xyz", ["Hz", "H", "N"]) is None
        True
    """
    choices = list(choices)
    if not query or not choices:
        return None

    result = process.extractOne(
        query,
        choices,
        scorer=lambda q, c, **kwargs: score_candidate(q, c),
        score_cutoff=threshold,
    )
    if result is None:
        return None
    return result[0]


__all__ = [
    "score_candidate",
    "closest_match",
]
