"""Tests for xrefmark.resolver module."""
from xrefmark.config import AnnotatorConfig
from xrefmark.diagnostics import Diagnostics
from xrefmark.parsing_types import DIAG_AMBIGUOUS, DIAG_UNRESOLVED, Err, Ok
from xrefmark.registry import TargetRegistry
from xrefmark.resolver import resolve_abbreviation, resolve_section_references

ANNOTATED = [
    "This is a [reference] to something.",
    "This is a [sec fooee] reference.",
    "No refs here.",
    '<a name="sec1"></a>',
    "## 1. Title",
    '<a name="sec2_3"></a>',
    "## 2.3. Fun Object Overtone",
    '<a name="sec7_9">',
    "</a>## 7.9. Something",
]


def _registry(*headings: str) -> TargetRegistry:
    lines: list[str] = []
    for i, text in enumerate(headings, start=1):
        lines.append(f"# {i}. {text}")
    return TargetRegistry.from_lines(lines)


class TestResolveAbbreviation:
    def test_single_match(self) -> None:
        result = resolve_abbreviation("top", _registry("A Top-Level Heading", "References"))
        assert isinstance(result, Ok)
        assert result.value.number == "1"

    def test_case_folded(self) -> None:
        result = resolve_abbreviation("TOP", _registry("A Top-Level Heading"))
        assert isinstance(result, Ok)

    def test_no_match(self) -> None:
        result = resolve_abbreviation("xyz", _registry("A Top-Level Heading"))
        assert isinstance(result, Err)
        assert result.error.reason == "no_match"
        assert result.error.abbreviation == "xyz"

    def test_ambiguous_lists_candidates_in_document_order(self) -> None:
        result = resolve_abbreviation("alpha", _registry("Alpha Gamma", "Beta", "Alpha Beta"))
        assert isinstance(result, Err)
        assert result.error.reason == "ambiguous"
        assert result.error.candidates == ("Alpha Gamma", "Alpha Beta")

    def test_repeated_heading_text_is_ambiguous(self) -> None:
        result = resolve_abbreviation("sc", _registry("Scope", "Scope"))
        assert isinstance(result, Err)
        assert result.error.candidates == ("Scope", "Scope")

    def test_exact_heading_text_is_not_an_abbreviation(self) -> None:
        # Zero insertions never counts as a match.
        result = resolve_abbreviation("title", _registry("Title"))
        assert isinstance(result, Err)
        assert result.error.reason == "no_match"

    def test_near_miss_spelling_rejected(self) -> None:
        result = resolve_abbreviation("referemces", _registry("References"))
        assert isinstance(result, Err)

    def test_no_headings(self) -> None:
        assert isinstance(resolve_abbreviation("top", TargetRegistry()), Err)


class TestResolveSectionReferences:
    def test_rewrites_unique_match(self) -> None:
        diagnostics = Diagnostics()
        out = resolve_section_references(
            ANNOTATED, TargetRegistry.from_lines(ANNOTATED), diagnostics,
        )
        assert out == [
            "This is a [reference] to something.",
            'This is a [<a href="#sec2_3">sec 2.3</a>] reference.',
            "No refs here.",
            '<a name="sec1"></a>',
            "## 1. Title",
            '<a name="sec2_3"></a>',
            "## 2.3. Fun Object Overtone",
            '<a name="sec7_9">',
            "</a>## 7.9. Something",
        ]
        assert diagnostics.items == []

    def test_zero_matches_left_unrewritten(self) -> None:
        diagnostics = Diagnostics()
        lines = ["see [sec xyz] now"]
        out = resolve_section_references(lines, _registry("A Top-Level Heading"), diagnostics)
        assert out == lines
        [diag] = diagnostics.items
        assert diag.code == DIAG_UNRESOLVED
        assert diag.subject == "xyz"
        assert diag.line_index == 0
        assert "[sec xyz]" in diag.message
        assert diagnostics.has_errors

    def test_ambiguous_left_unrewritten(self) -> None:
        diagnostics = Diagnostics()
        lines = ["", "see [sec alpha]"]
        out = resolve_section_references(lines, _registry("Alpha Beta", "Alpha Gamma"), diagnostics)
        assert out == lines
        [diag] = diagnostics.items
        assert diag.code == DIAG_AMBIGUOUS
        assert diag.line_index == 1
        assert "'Alpha Beta'" in diag.message
        assert "'Alpha Gamma'" in diag.message
        assert diagnostics.has_errors

    def test_each_occurrence_reported(self) -> None:
        diagnostics = Diagnostics()
        lines = ["[sec xyz] and [sec xyz]", "[sec xyz]"]
        resolve_section_references(lines, _registry("Intro"), diagnostics)
        assert [d.line_index for d in diagnostics.by_code(DIAG_UNRESOLVED)] == [0, 0, 1]

    def test_mixed_line(self) -> None:
        diagnostics = Diagnostics()
        out = resolve_section_references(
            ["[sec top] vs [sec xyz]"], _registry("A Top-Level Heading"), diagnostics,
        )
        assert out == ['[<a href="#sec1">sec 1</a>] vs [sec xyz]']
        assert len(diagnostics.items) == 1

    def test_custom_marker(self) -> None:
        diagnostics = Diagnostics()
        cfg = AnnotatorConfig(section_marker="see")
        out = resolve_section_references(
            ["[see top] and [sec top]"], _registry("A Top-Level Heading"), diagnostics, cfg,
        )
        assert out == ['[<a href="#sec1">see 1</a>] and [sec top]']

    def test_external_links_untouched(self) -> None:
        lines = ['[<a href="#ref1">ref1</a>]']
        assert resolve_section_references(lines, _registry("Intro"), Diagnostics()) == lines
