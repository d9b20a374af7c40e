"""Edit classification for heading abbreviations.

Pure text operations with zero pipeline dependencies. The matcher counts
the Levenshtein edit operations that turn a query into each candidate
(query -> candidate, never the reverse) using rapidfuzz.

An optimal edit script that is insertions-only exists exactly when the
query is a subsequence of the candidate, so "top" classifies as 16
insertions against "a top-level heading" while "tpo" needs a
substitution or deletion and is rejected.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from rapidfuzz.distance import Levenshtein

from xrefmark.parsing_types import MatchCandidate


def classify_edits(query: str, candidate: str) -> MatchCandidate:
    """Count insertions, deletions and substitutions from query to candidate."""
    insertions = deletions = substitutions = 0
    for op in Levenshtein.editops(query, candidate):
        if op.tag == "insert":
            insertions += 1
        elif op.tag == "delete":
            deletions += 1
        else:  # "replace"
            substitutions += 1
    return MatchCandidate(
        original=candidate,
        insertions=insertions,
        deletions=deletions,
        substitutions=substitutions,
    )


def match_candidates(query: str, candidates: Iterable[str]) -> list[MatchCandidate]:
    """Classify ``query`` against every candidate, preserving input order.

    Deterministic for fixed inputs: no ordering comes from set or dict
    iteration here.
    """
    return [classify_edits(query, c) for c in candidates]


def acceptable_matches(query: str, candidates: Sequence[str]) -> list[MatchCandidate]:
    """Candidates the query abbreviates by insertions alone."""
    return [m for m in match_candidates(query, candidates) if m.is_acceptable]


def casefold_text(text: str) -> str:
    """Case folding used on both sides of a heading match."""
    return text.lower()
