#!/usr/bin/env python3
"""Annotate a Markdown-like document with section numbers and cross-reference anchors.

Reads the whole document, then:
- numbers headings (``## Scope`` -> ``## 1.2. Scope``) and anchors them (``sec1_2``)
- anchors reference definitions (``[ref1]: ...``)
- links ``[ref1]`` to its definition and ``[sec scope]`` to the heading it abbreviates
- verifies every anchor is unique and every in-document link resolves

Usage:
    python3 scripts/annotate_xrefs.py < doc.md > doc.annotated.md
    python3 scripts/annotate_xrefs.py --input doc.md --output out.md --report report.json
    python3 scripts/annotate_xrefs.py --check --input out.md

The annotated document goes to stdout (or --output); diagnostics go to stderr.

Exit codes:
    0  clean run
    1  unresolved/ambiguous heading references, duplicate anchors or dangling
       links (the document is still written in full)
    2  bad configuration or an input/output failure
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from xrefmark.config import GAP_POLICIES, AnnotatorConfig, ConfigError
from xrefmark.diagnostics import Diagnostics
from xrefmark.io_utils import read_lines, save_json, write_lines
from xrefmark.pipeline import EXIT_FAILED, EXIT_OK, annotate_lines
from xrefmark.verify import verify_lines

EXIT_USAGE = 2


def log(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Number headings and resolve cross-references in a Markdown-like document.",
    )
    parser.add_argument("--input", type=Path, default=None, help="Input document (default: stdin)")
    parser.add_argument("--output", type=Path, default=None, help="Annotated output (default: stdout)")
    parser.add_argument("--config", type=Path, default=None, help="JSON config file")
    parser.add_argument(
        "--gap-policy", choices=GAP_POLICIES, default=None,
        help="How skipped heading levels appear in numbers (default: collapse)",
    )
    parser.add_argument(
        "--strict", action="store_true", default=None,
        help="Structural warnings also fail the exit status",
    )
    parser.add_argument("--report", type=Path, default=None, help="Write a JSON run report")
    parser.add_argument(
        "--check", action="store_true",
        help="Only verify an already-annotated document; write nothing",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def load_config(args: argparse.Namespace) -> AnnotatorConfig:
    config = AnnotatorConfig.from_json(args.config) if args.config else AnnotatorConfig()
    return config.with_overrides(gap_policy=args.gap_policy, strict=args.strict)


def run_check(lines: list[str]) -> int:
    report = verify_lines(lines)
    Diagnostics().extend(report.diagnostics)
    log(
        f"checked {len(report.anchors)} anchor(s), {len(report.links)} link(s): "
        f"{'ok' if report.ok else 'FAILED'}"
    )
    return EXIT_OK if report.ok else EXIT_FAILED


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args)
    except (ConfigError, OSError) as exc:
        log(f"Error: invalid configuration: {exc}")
        return EXIT_USAGE

    try:
        lines = read_lines(args.input)
    except (OSError, UnicodeDecodeError) as exc:
        log(f"Error reading input: {exc}")
        return EXIT_USAGE

    if args.check:
        return run_check(lines)

    result = annotate_lines(lines, config)

    try:
        write_lines(result.lines, args.output)
        if args.report:
            save_json(result.to_dict(), args.report)
    except OSError as exc:
        log(f"Error writing output: {exc}")
        return EXIT_USAGE

    if args.verbose:
        log(
            f"{len(result.registry.headings)} heading(s), "
            f"{len(result.registry.explicit_targets)} explicit target(s), "
            f"{len(result.diagnostics.warnings)} warning(s), "
            f"{len(result.diagnostics.errors)} error(s)"
        )
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
