"""Per-run accumulation of warnings and errors.

Each stage records issues here and keeps going; only the aggregate
``has_errors`` flag decides the exit status. Every issue is logged once,
when recorded, on the ``xrefmark.diagnostics`` logger.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from xrefmark.parsing_types import Diagnostic

log = logging.getLogger("xrefmark.diagnostics")


@dataclass(slots=True)
class Diagnostics:
    """Ordered collector of run diagnostics.

    ``strict`` escalates warnings to the exit status as well.
    """
    strict: bool = False
    items: list[Diagnostic] = field(default_factory=list[Diagnostic])

    def warning(
        self, code: str, message: str, *, subject: str, line_index: int | None = None,
    ) -> Diagnostic:
        diag = Diagnostic("warning", code, message, subject, line_index)
        self.items.append(diag)
        log.warning("%s", _format(diag))
        return diag

    def error(
        self, code: str, message: str, *, subject: str, line_index: int | None = None,
    ) -> Diagnostic:
        diag = Diagnostic("error", code, message, subject, line_index)
        self.items.append(diag)
        log.error("%s", _format(diag))
        return diag

    def extend(self, diags: list[Diagnostic]) -> None:
        """Record diagnostics produced elsewhere (e.g. by the verifier)."""
        for diag in diags:
            if diag.severity == "error":
                self.error(
                    diag.code, diag.message,
                    subject=diag.subject, line_index=diag.line_index,
                )
            else:
                self.warning(
                    diag.code, diag.message,
                    subject=diag.subject, line_index=diag.line_index,
                )

    def by_code(self, code: str) -> list[Diagnostic]:
        return [d for d in self.items if d.code == code]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.items if d.severity == "warning"]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.items if d.severity == "error"]

    @property
    def has_errors(self) -> bool:
        if self.strict:
            return bool(self.items)
        return any(d.fails_run for d in self.items)

    def to_dict(self) -> dict[str, object]:
        return {
            "warnings": len(self.warnings),
            "errors": len(self.errors),
            "items": [d.to_dict() for d in self.items],
        }


def _format(diag: Diagnostic) -> str:
    # Line numbers are 1-based for humans.
    if diag.line_index is None:
        return diag.message
    return f"line {diag.line_index + 1}: {diag.message}"
