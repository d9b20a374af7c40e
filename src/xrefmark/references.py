"""External reference rewriting: ``[ref1]`` -> ``[<a href="#ref1">ref1</a>]``.

Purely syntactic. Whether ``ref1`` exists is the verifier's concern.
"""
from __future__ import annotations

import re
from collections.abc import Sequence

from xrefmark.markup import EXTERNAL_REF_RE, link_markup


def _link(match: re.Match[str]) -> str:
    name = match.group(1)
    return f"[{link_markup(name, name)}]"


def link_external_line(line: str) -> str:
    """Rewrite every external reference on one line, left to right."""
    return EXTERNAL_REF_RE.sub(_link, line)


def link_external_references(lines: Sequence[str]) -> list[str]:
    return [link_external_line(line) for line in lines]


def find_external_references(line: str) -> list[str]:
    """Identifiers of the external references on a line, in order."""
    return [m.group(1) for m in EXTERNAL_REF_RE.finditer(line)]
