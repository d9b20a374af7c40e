"""Registry of every resolvable anchor target in one document run.

Targets = ExplicitTargets ∪ Headings. Explicit targets are keyed by their
exact name (case-sensitive); headings by their lower-cased text. Both are
also kept in document order so diagnostics never depend on dict ordering.

The registry does not enforce anchor uniqueness. Collisions are user
errors reported by the verifier.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from xrefmark.markup import DEFINITION_RE, NUMBERED_HEADING_RE, section_anchor_name
from xrefmark.parsing_types import ExplicitTarget, Heading


@dataclass(slots=True)
class TargetRegistry:
    """Per-run target registry. Build a fresh one for every document."""
    explicit_targets: list[ExplicitTarget] = field(default_factory=list[ExplicitTarget])
    headings: list[Heading] = field(default_factory=list[Heading])
    _explicit_by_name: dict[str, ExplicitTarget] = field(default_factory=dict[str, ExplicitTarget])
    _headings_by_text: dict[str, list[Heading]] = field(default_factory=dict[str, list[Heading]])

    def add_explicit(self, target: ExplicitTarget) -> None:
        self.explicit_targets.append(target)
        # First definition wins for lookups; the duplicate anchor is still
        # emitted and caught by the verifier.
        self._explicit_by_name.setdefault(target.name, target)

    def add_heading(self, heading: Heading) -> None:
        self.headings.append(heading)
        self._headings_by_text.setdefault(heading.text_lower, []).append(heading)

    def explicit(self, name: str) -> ExplicitTarget | None:
        """Exact, case-sensitive lookup."""
        return self._explicit_by_name.get(name)

    def headings_with_text(self, text_lower: str) -> list[Heading]:
        return list(self._headings_by_text.get(text_lower, []))

    def heading_texts(self) -> list[str]:
        """Distinct lower-cased heading texts in first-seen document order."""
        return list(self._headings_by_text)

    def anchor_names(self) -> list[str]:
        """Every synthesized anchor name, duplicates preserved."""
        names = [t.anchor_name for t in self.explicit_targets]
        names.extend(h.anchor_name for h in self.headings)
        return names

    def __len__(self) -> int:
        return len(self.explicit_targets) + len(self.headings)

    @classmethod
    def from_lines(cls, lines: Sequence[str], *, prefix: str = "sec") -> TargetRegistry:
        """Rebuild a registry from already-annotated lines.

        Recognizes numbered headings (``## 2.3. Text``) and definition lines.
        Lets the resolver run on its own over a numbered document.
        """
        registry = cls()
        for idx, line in enumerate(lines):
            m = NUMBERED_HEADING_RE.match(line)
            if m:
                number = m.group(2)
                registry.add_heading(Heading(
                    depth=len(m.group(1)),
                    text=m.group(3).strip(),
                    number=number,
                    anchor_name=section_anchor_name(number, prefix),
                    line_index=idx,
                ))
                continue
            d = DEFINITION_RE.match(line)
            if d:
                registry.add_explicit(ExplicitTarget(name=d.group(1), line_index=idx))
        return registry

    def to_dict(self) -> dict[str, object]:
        return {
            "headings": [
                {
                    "depth": h.depth,
                    "number": h.number,
                    "text": h.text,
                    "anchor": h.anchor_name,
                    "line_index": h.line_index,
                }
                for h in self.headings
            ],
            "explicit_targets": [
                {"name": t.name, "anchor": t.anchor_name, "line_index": t.line_index}
                for t in self.explicit_targets
            ],
        }
