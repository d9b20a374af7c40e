"""I/O utilities: document lines in and out, JSON reports.

The pipeline never touches streams itself. The whole input is drained
before any stage runs, and output is written only after every stage has
finished. Read/write failures propagate as OSError / UnicodeDecodeError.
"""
from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TextIO

import orjson


def read_lines(source: Path | TextIO | None = None) -> list[str]:
    """Read every line (without line terminators) from a path or stream.

    ``None`` reads standard input. Lines split on line feeds only and lose one
    trailing carriage return, so form feeds and Unicode separators stay
    inside a line.
    """
    if isinstance(source, Path):
        text = source.read_bytes().decode("utf-8")
    else:
        text = (source or sys.stdin).read()
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def write_lines(lines: Sequence[str], dest: Path | TextIO | None = None) -> None:
    """Write lines, each newline-terminated. ``None`` writes standard output."""
    payload = "".join(f"{line}\n" for line in lines)
    if isinstance(dest, Path):
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(payload, encoding="utf-8")
        return
    stream = dest or sys.stdout
    stream.write(payload)
    stream.flush()


def load_json(path: Path) -> Any:
    """Load JSON from a file using orjson."""
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON using orjson."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS if pretty else orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(obj, option=opts))
