"""Core types for the annotation pipeline.

Every stage shares these types. Line positions are always zero-based
indices into the sequence the stage received. All dataclasses use
slots=True.

Types:
  Heading            numbered heading target, owns a ``secN_M`` anchor
  ExplicitTarget     ``[name]: ...`` definition target, owns a ``name`` anchor
  MarkupRef          anchor name or link destination seen by the verifier
  MatchCandidate     edit counts for one (query, candidate) pair
  ResolutionFailure  why a heading reference did not resolve
  Ok[T], Err[E]      outcome of a resolution attempt
  Diagnostic         one warning or error raised during a run
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

# ---------------------------------------------------------------------------
# Resolution outcomes: Ok carries the value, Err the typed failure
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success case of Result[T, E].

    Usage::

        result: Result[Heading, ResolutionFailure] = Ok(heading)
        match result:
            case Ok(value=h): print(h.number)
            case Err(error=e): print(e.reason)
    """
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failure case of Result[T, E].

    Preserves the typed failure reason. An unresolved abbreviation and an
    ambiguous one are reported differently, so None is not enough.
    """
    error: E


type Result[T, E] = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Document types
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MarkupRef:
    """An anchor name or link destination found on line ``index``."""
    index: int
    name: str

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"MarkupRef.index must be >= 0, got {self.index}")


@dataclass(frozen=True, slots=True)
class Heading:
    """A numbered heading (e.g., ``## 2.1. Scope``).

    Invariants (enforced in __post_init__):
        - depth >= 1
        - number is non-empty
    """
    depth: int          # Count of leading '#' markers
    text: str           # "Scope" (trimmed, without the number)
    number: str         # "2.1"
    anchor_name: str    # "sec2_1"
    line_index: int     # Position of the heading in the numbering input

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"Heading.depth must be >= 1, got {self.depth}")
        if not self.number:
            raise ValueError("Heading.number cannot be empty")

    @property
    def text_lower(self) -> str:
        return self.text.lower()

    @property
    def parts(self) -> tuple[int, ...]:
        """Number parts for parts-wise ordering: "2.1" -> (2, 1)."""
        return tuple(int(p) for p in self.number.split("."))


@dataclass(frozen=True, slots=True)
class ExplicitTarget:
    """A reference-definition target (``[ref1]: A bibliographic reference.``)."""
    name: str           # Exactly as written, case preserved
    line_index: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ExplicitTarget.name cannot be empty")

    @property
    def anchor_name(self) -> str:
        return self.name


# ---------------------------------------------------------------------------
# Fuzzy match types
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MatchCandidate:
    """Edits needed to turn a query into ``original``.

    Direction is fixed: counts describe query -> candidate. A candidate is
    acceptable only when reachable by insertions alone, i.e. the query is
    a strict abbreviation of it. Near-miss spellings are rejected.
    """
    original: str
    insertions: int
    deletions: int
    substitutions: int

    @property
    def is_acceptable(self) -> bool:
        return (
            self.insertions > 0
            and self.deletions == 0
            and self.substitutions == 0
        )


type FailureReason = Literal["no_match", "ambiguous"]


@dataclass(frozen=True, slots=True)
class ResolutionFailure:
    """Typed failure for ``[sec ...]`` resolution."""
    reason: FailureReason
    abbreviation: str                 # As written inside the marker
    candidates: tuple[str, ...] = ()  # Original heading texts, document order


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

type Severity = Literal["warning", "error"]

DIAG_DEPTH_JUMP = "heading_depth_jump"
DIAG_UNRESOLVED = "unresolved_reference"
DIAG_AMBIGUOUS = "ambiguous_reference"
DIAG_DUPLICATE_ANCHOR = "duplicate_anchor"
DIAG_DANGLING_LINK = "dangling_link"

ALL_DIAGNOSTIC_CODES = (
    DIAG_DEPTH_JUMP, DIAG_UNRESOLVED, DIAG_AMBIGUOUS,
    DIAG_DUPLICATE_ANCHOR, DIAG_DANGLING_LINK,
)

# Warnings that still fail the run: the marker stays unrewritten.
RUN_FAILING_WARNINGS = frozenset({DIAG_UNRESOLVED, DIAG_AMBIGUOUS})


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One issue found during a run. ``line_index`` is None when not tied to a line."""
    severity: Severity
    code: str
    message: str
    subject: str
    line_index: int | None = None

    def __post_init__(self) -> None:
        if self.code not in ALL_DIAGNOSTIC_CODES:
            raise ValueError(f"Unknown diagnostic code: {self.code}")

    @property
    def fails_run(self) -> bool:
        return self.severity == "error" or self.code in RUN_FAILING_WARNINGS

    def to_dict(self) -> dict[str, object]:
        return {
            "severity": self.severity,
            "code": self.code,
            "message": self.message,
            "subject": self.subject,
            "line_index": self.line_index,
        }
