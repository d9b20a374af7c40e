"""Hierarchical section numbering for Markdown-style headings.

Assigns every ``#``-heading a number in document order and inserts its
anchor line:

    # Intro            ->   <a name="sec1"></a>
                            # 1. Intro
    ## Scope           ->   <a name="sec1_1"></a>
                            ## 1.1. Scope

Numbering state lives in a SectionCounter scoped to one run. Counters
deeper than the current heading restart at zero, so numbers increase
parts-wise as long as the outline never skips a level.

Skipped levels (``#`` followed directly by ``###``) raise a structural
warning and are numbered by raw depth. The gap policy decides how the
zero counter of a skipped level shows up in the composed number:
"collapse" drops it (``1.1``), "zero" keeps it (``1.0.1``).
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from xrefmark.config import AnnotatorConfig, GapPolicy
from xrefmark.diagnostics import Diagnostics
from xrefmark.markup import HEADING_RE, anchor_markup, section_anchor_name
from xrefmark.parsing_types import DIAG_DEPTH_JUMP, Heading
from xrefmark.registry import TargetRegistry

log = logging.getLogger("xrefmark.numbering")


class SectionCounter:
    """Depth-indexed counter vector. Grows with the deepest heading seen."""

    __slots__ = ("gap_policy", "_counters")

    def __init__(self, gap_policy: GapPolicy = "collapse") -> None:
        self.gap_policy = gap_policy
        self._counters: list[int] = []  # _counters[d - 1] is depth d

    def advance(self, depth: int) -> str:
        """Count a heading at ``depth`` and return its composed number."""
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")
        if len(self._counters) < depth:
            self._counters.extend([0] * (depth - len(self._counters)))
        self._counters[depth - 1] += 1
        # Restart every deeper level.
        for i in range(depth, len(self._counters)):
            self._counters[i] = 0
        return self.compose(depth)

    def compose(self, depth: int) -> str:
        parts = self._counters[:depth]
        if self.gap_policy == "collapse":
            # Only skipped levels are zero; the current level is >= 1.
            parts = [p for p in parts if p]
        return ".".join(str(p) for p in parts)

    @property
    def counters(self) -> tuple[int, ...]:
        return tuple(self._counters)


def parse_heading(line: str) -> tuple[int, str] | None:
    """Return (depth, trimmed text) for a heading line, else None."""
    m = HEADING_RE.match(line)
    if not m:
        return None
    text = m.group(2).strip()
    if not text:
        return None
    return len(m.group(1)), text


def number_headings(
    lines: Sequence[str],
    registry: TargetRegistry,
    diagnostics: Diagnostics,
    config: AnnotatorConfig | None = None,
) -> list[str]:
    """Number every heading, insert its anchor and register it.

    Heading.line_index is the heading's position in the returned lines.
    """
    cfg = config or AnnotatorConfig()
    counter = SectionCounter(cfg.gap_policy)
    prev_depth = 0
    out: list[str] = []
    for line in lines:
        parsed = parse_heading(line)
        if parsed is None:
            out.append(line)
            continue
        depth, text = parsed
        heading_index = len(out) + 1  # after its anchor line
        if depth > prev_depth + 1:
            diagnostics.warning(
                DIAG_DEPTH_JUMP,
                f"heading depth jumps from {prev_depth} to {depth} at {text!r}",
                subject=text,
                line_index=heading_index,
            )
        number = counter.advance(depth)
        heading = Heading(
            depth=depth,
            text=text,
            number=number,
            anchor_name=section_anchor_name(number, cfg.section_prefix),
            line_index=heading_index,
        )
        registry.add_heading(heading)
        out.append(anchor_markup(heading.anchor_name))
        out.append(f"{'#' * depth} {number}. {text}")
        prev_depth = depth
    log.debug("numbered %d heading(s)", len(registry.headings))
    return out
