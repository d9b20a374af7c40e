"""Post-pass consistency checks over the annotated document.

Two full scans, always run to completion:
    1. Anchors: every ``<a name="...">`` name must be unique.
    2. Links: every in-document ``<a href="#...">`` destination must name
       an anchor collected in scan 1. External hrefs are not checked.

Every failure is reported in document order, not only the first one.
The document is plain text, not HTML: only the anchor and link markup the
pipeline emits is recognised, line by line, so prose such as ``<script>``
or ``<!--`` cannot hide later markup.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from xrefmark.markup import ANCHOR_HREF_RE, ANCHOR_NAME_RE
from xrefmark.parsing_types import (
    DIAG_DANGLING_LINK,
    DIAG_DUPLICATE_ANCHOR,
    Diagnostic,
    MarkupRef,
)


@dataclass(frozen=True, slots=True)
class VerificationReport:
    """Result of verifying one annotated document."""
    anchors: tuple[MarkupRef, ...]   # document order
    links: tuple[MarkupRef, ...]     # in-document links only
    duplicates: tuple[Diagnostic, ...]
    dangling: tuple[Diagnostic, ...]

    @property
    def ok(self) -> bool:
        return not self.duplicates and not self.dangling

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [*self.duplicates, *self.dangling]

    @property
    def first_error(self) -> Diagnostic | None:
        diags = self.diagnostics
        return diags[0] if diags else None

    def to_dict(self) -> dict[str, object]:
        return {
            "ok": self.ok,
            "anchor_count": len(self.anchors),
            "link_count": len(self.links),
            "duplicate_anchors": [d.subject for d in self.duplicates],
            "dangling_links": [d.subject for d in self.dangling],
        }


def collect_markup(lines: Sequence[str]) -> tuple[list[MarkupRef], list[MarkupRef]]:
    """Return (anchor names, in-document link destinations) with positions."""
    anchors: list[MarkupRef] = []
    links: list[MarkupRef] = []
    for idx, line in enumerate(lines):
        anchors.extend(MarkupRef(idx, m.group(1)) for m in ANCHOR_NAME_RE.finditer(line))
        links.extend(MarkupRef(idx, m.group(1)) for m in ANCHOR_HREF_RE.finditer(line))
    return anchors, links


def verify_lines(lines: Sequence[str]) -> VerificationReport:
    """Check anchor uniqueness, then link resolvability."""
    anchors, links = collect_markup(lines)

    seen: set[str] = set()
    duplicates: list[Diagnostic] = []
    for anchor in anchors:
        if anchor.name in seen:
            duplicates.append(Diagnostic(
                "error",
                DIAG_DUPLICATE_ANCHOR,
                f"duplicate anchor {anchor.name!r}",
                anchor.name,
                anchor.index,
            ))
        seen.add(anchor.name)

    dangling: list[Diagnostic] = []
    for link in links:
        if link.name not in seen:
            dangling.append(Diagnostic(
                "error",
                DIAG_DANGLING_LINK,
                f"dangling link '#{link.name}' matches no anchor",
                link.name,
                link.index,
            ))

    return VerificationReport(
        anchors=tuple(anchors),
        links=tuple(links),
        duplicates=tuple(duplicates),
        dangling=tuple(dangling),
    )
