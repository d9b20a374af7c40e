"""End-to-end annotation pipeline.

Stages run strictly in order, each taking the full line sequence from its
predecessor and returning a new one:

    1. mark_explicit_targets        anchors before ``[name]: ...`` lines
    2. number_headings              numbers + anchors for ``#`` headings
    3. link_external_references     ``[name]`` -> link to ``#name``
    4. resolve_section_references   ``[sec abbrev]`` -> link to a heading
    5. verify_lines                 anchor uniqueness, link resolvability

The registry and diagnostics are created fresh for every call. Output is
always produced in full; failures only affect ``exit_code``.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from xrefmark.anchors import mark_explicit_targets
from xrefmark.config import AnnotatorConfig
from xrefmark.diagnostics import Diagnostics
from xrefmark.numbering import number_headings
from xrefmark.references import find_external_references, link_external_references
from xrefmark.registry import TargetRegistry
from xrefmark.resolver import resolve_section_references
from xrefmark.verify import VerificationReport, verify_lines

log = logging.getLogger("xrefmark.pipeline")

EXIT_OK = 0
EXIT_FAILED = 1


@dataclass(frozen=True, slots=True)
class ExternalReference:
    """One ``[name]`` occurrence and whether an explicit target defines it."""
    name: str
    line_index: int
    resolved: bool


@dataclass(frozen=True, slots=True)
class AnnotationResult:
    """Everything one run produced."""
    lines: list[str]
    registry: TargetRegistry
    diagnostics: Diagnostics
    verification: VerificationReport
    external_references: tuple[ExternalReference, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.diagnostics.has_errors

    @property
    def exit_code(self) -> int:
        return EXIT_OK if self.ok else EXIT_FAILED

    def to_dict(self) -> dict[str, object]:
        """JSON-ready run report."""
        return {
            "ok": self.ok,
            "exit_code": self.exit_code,
            "line_count": len(self.lines),
            **self.registry.to_dict(),
            "external_references": [
                {"name": r.name, "line_index": r.line_index, "resolved": r.resolved}
                for r in self.external_references
            ],
            "diagnostics": self.diagnostics.to_dict(),
            "verification": self.verification.to_dict(),
        }


def scan_external_references(
    lines: Sequence[str], registry: TargetRegistry,
) -> tuple[ExternalReference, ...]:
    """Exact, case-sensitive lookup of every ``[name]`` against explicit targets."""
    return tuple(
        ExternalReference(name, idx, registry.explicit(name) is not None)
        for idx, line in enumerate(lines)
        for name in find_external_references(line)
    )


def annotate_lines(
    lines: Sequence[str], config: AnnotatorConfig | None = None,
) -> AnnotationResult:
    """Run every stage over ``lines`` and verify the result."""
    cfg = config or AnnotatorConfig()
    registry = TargetRegistry()
    diagnostics = Diagnostics(strict=cfg.strict)

    log.debug("annotating %d line(s)", len(lines))
    out = mark_explicit_targets(lines, registry)
    out = number_headings(out, registry, diagnostics, cfg)
    # Linking adds no lines, so these indices match the output.
    external = scan_external_references(out, registry)
    out = link_external_references(out)
    out = resolve_section_references(out, registry, diagnostics, cfg)

    verification = verify_lines(out)
    diagnostics.extend(verification.diagnostics)
    log.debug(
        "%d heading(s), %d explicit target(s), %d issue(s)",
        len(registry.headings), len(registry.explicit_targets), len(diagnostics.items),
    )
    return AnnotationResult(
        lines=out,
        registry=registry,
        diagnostics=diagnostics,
        verification=verification,
        external_references=external,
    )
