"""Anchor synthesis for explicit reference-definition targets."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from xrefmark.markup import DEFINITION_RE, anchor_markup
from xrefmark.parsing_types import ExplicitTarget
from xrefmark.registry import TargetRegistry

log = logging.getLogger("xrefmark.anchors")


def mark_explicit_targets(lines: Sequence[str], registry: TargetRegistry) -> list[str]:
    """Insert ``<a name="NAME"></a>`` before every ``[NAME]: ...`` line.

    Registers one ExplicitTarget per definition line. A document with no
    definitions comes back unchanged.
    """
    out: list[str] = []
    for idx, line in enumerate(lines):
        m = DEFINITION_RE.match(line)
        if m:
            name = m.group(1)
            registry.add_explicit(ExplicitTarget(name=name, line_index=idx))
            out.append(anchor_markup(name))
        out.append(line)
    log.debug("marked %d explicit target(s)", len(registry.explicit_targets))
    return out
