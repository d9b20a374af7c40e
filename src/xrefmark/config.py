"""Run configuration for the annotator.

Defaults reproduce the reference behaviour. A JSON file can override any
field; command-line flags override the file.

Example ``xrefmark.json``::

    {"gap_policy": "zero", "strict": true}
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Literal

import orjson

from xrefmark.io_utils import load_json

type GapPolicy = Literal["collapse", "zero"]

GAP_POLICIES: tuple[GapPolicy, ...] = ("collapse", "zero")

_IDENT_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_")


class ConfigError(ValueError):
    """Raised when a configuration file or override is invalid."""


@dataclass(frozen=True, slots=True)
class AnnotatorConfig:
    """Knobs for one annotation run.

    gap_policy:     How skipped heading levels appear in composed numbers.
                    "collapse" drops them ("1.1"), "zero" keeps them ("1.0.1").
    section_prefix: Prefix of heading anchor names ("sec" -> "sec2_1").
    section_marker: Keyword that opens a heading reference ("[sec top]").
    strict:         Structural warnings also fail the exit status.
    """
    gap_policy: GapPolicy = "collapse"
    section_prefix: str = "sec"
    section_marker: str = "sec"
    strict: bool = False

    def __post_init__(self) -> None:
        for name in ("gap_policy", "section_prefix", "section_marker"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {value!r}")
        if self.gap_policy not in GAP_POLICIES:
            raise ConfigError(
                f"gap_policy must be one of {GAP_POLICIES}, got {self.gap_policy!r}"
            )
        if not self.section_prefix or not set(self.section_prefix) <= _IDENT_CHARS:
            raise ConfigError(
                f"section_prefix must be a non-empty identifier, got {self.section_prefix!r}"
            )
        if not self.section_marker or any(c.isspace() or c in "[]" for c in self.section_marker):
            raise ConfigError(
                f"section_marker must be a single bracket-free word, got {self.section_marker!r}"
            )
        if not isinstance(self.strict, bool):
            raise ConfigError(f"strict must be a boolean, got {self.strict!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnnotatorConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path: Path) -> AnnotatorConfig:
        """Load from a JSON config file."""
        try:
            data = load_json(path)
        except orjson.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a JSON object in {path}")
        return cls.from_dict(data)

    def with_overrides(self, **overrides: Any) -> AnnotatorConfig:
        """Copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
