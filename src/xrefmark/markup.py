"""Anchor and hyperlink markup, plus the document line patterns.

Anchors are emitted on their own line, immediately before the line they
target. Links are emitted inline, inside the original brackets:

    <a name="sec1_2"></a>
    ## 1.2. Scope
    ... see [<a href="#sec1_2">sec 1.2</a>] and [<a href="#ref1">ref1</a>].
"""
from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Document patterns
# ---------------------------------------------------------------------------

# "[ref1]: A bibliographic reference."
DEFINITION_RE = re.compile(r"^\[(\w+)\]:\s+")

# "## Scope" -> ("##", "Scope")
HEADING_RE = re.compile(r"^(#+)\s+(.+)")

# "## 1.2. Scope" -> ("##", "1.2", "Scope"); only matches annotated output
NUMBERED_HEADING_RE = re.compile(r"^(#+)\s+(\d+(?:\.\d+)*)\.\s+(.+)")

# "[ref1]" anywhere, except the "[ref1]:" of a definition.
# Lookahead rather than a consumed char so "[ref1]" at end of line counts.
EXTERNAL_REF_RE = re.compile(r"\[(\w+)\](?!:)")

# '<a name="sec1_2"></a>' -> "sec1_2"; also matches an unclosed anchor tag
ANCHOR_NAME_RE = re.compile(r'<a\s+name="([^"]+)"')

# '<a href="#sec1_2">sec 1.2</a>' -> "sec1_2"; external hrefs never match
ANCHOR_HREF_RE = re.compile(r'<a\s+href="#([^"]+)"')


def section_ref_re(marker: str = "sec") -> re.Pattern[str]:
    """Pattern for ``[sec abbreviation]``; group 1 is the abbreviation."""
    return re.compile(r"\[" + re.escape(marker) + r"\s+([^\]\[]+?)\s*\]")


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------

def anchor_markup(name: str) -> str:
    return f'<a name="{name}"></a>'


def link_markup(destination: str, text: str) -> str:
    """Inline hyperlink to an in-document anchor."""
    return f'<a href="#{destination}">{text}</a>'


def section_anchor_name(number: str, prefix: str = "sec") -> str:
    """Anchor for a section number: "2.1" -> "sec2_1"."""
    return prefix + number.replace(".", "_")
