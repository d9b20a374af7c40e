"""Heading-reference resolution: ``[sec top]`` -> ``[<a href="#sec1">sec 1</a>]``.

The abbreviation and every known heading text are case-folded, then
classified with the edit matcher. Only insertion-only matches count.

Policy:
    0 acceptable matches  -> warning, marker left as written, run fails
    1 acceptable match    -> rewritten to a link to that heading
    2+ acceptable matches -> warning listing every candidate, marker left,
                             run fails

Ties are never broken. An unresolved marker is visible to the author; a
confidently wrong link is not.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from xrefmark.config import AnnotatorConfig
from xrefmark.diagnostics import Diagnostics
from xrefmark.markup import link_markup, section_ref_re
from xrefmark.parsing_types import (
    DIAG_AMBIGUOUS,
    DIAG_UNRESOLVED,
    Err,
    Heading,
    Ok,
    ResolutionFailure,
    Result,
)
from xrefmark.registry import TargetRegistry
from xrefmark.textmatch import acceptable_matches, casefold_text

log = logging.getLogger("xrefmark.resolver")


def resolve_abbreviation(
    abbreviation: str, registry: TargetRegistry,
) -> Result[Heading, ResolutionFailure]:
    """Find the single heading ``abbreviation`` abbreviates.

    Headings sharing the same text are distinct candidates, so a match on
    a repeated heading text is ambiguous.
    """
    query = casefold_text(abbreviation)
    matched_texts = {
        m.original for m in acceptable_matches(query, registry.heading_texts())
    }
    # Document order, one entry per heading.
    matched = [h for h in registry.headings if h.text_lower in matched_texts]
    if not matched:
        return Err(ResolutionFailure("no_match", abbreviation))
    if len(matched) > 1:
        return Err(ResolutionFailure(
            "ambiguous", abbreviation, tuple(h.text for h in matched),
        ))
    return Ok(matched[0])


def resolve_section_references(
    lines: Sequence[str],
    registry: TargetRegistry,
    diagnostics: Diagnostics,
    config: AnnotatorConfig | None = None,
) -> list[str]:
    """Rewrite every resolvable ``[sec ...]`` marker into a heading link."""
    cfg = config or AnnotatorConfig()
    pattern = section_ref_re(cfg.section_marker)
    cache: dict[str, Result[Heading, ResolutionFailure]] = {}
    out: list[str] = []

    for idx, line in enumerate(lines):
        def _rewrite(m: re.Match[str], idx: int = idx) -> str:
            marker, abbreviation = m.group(0), m.group(1)
            if abbreviation not in cache:
                cache[abbreviation] = resolve_abbreviation(abbreviation, registry)
            result = cache[abbreviation]
            if isinstance(result, Err):
                _report(result.error, marker, idx, diagnostics)
                return marker
            heading = result.value
            log.debug("resolved %s -> %s", marker, heading.anchor_name)
            text = f"{cfg.section_marker} {heading.number}"
            return f"[{link_markup(heading.anchor_name, text)}]"

        out.append(pattern.sub(_rewrite, line))
    return out


def _report(
    failure: ResolutionFailure, marker: str, idx: int, diagnostics: Diagnostics,
) -> None:
    if failure.reason == "ambiguous":
        listed = ", ".join(repr(c) for c in failure.candidates)
        diagnostics.warning(
            DIAG_AMBIGUOUS,
            f"Multiple matches for unresolved reference {marker}: {listed}",
            subject=failure.abbreviation,
            line_index=idx,
        )
    else:
        diagnostics.warning(
            DIAG_UNRESOLVED,
            f"No matches for unresolved reference {marker}",
            subject=failure.abbreviation,
            line_index=idx,
        )
