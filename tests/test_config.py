"""Tests for xrefmark.config module."""
from pathlib import Path

import pytest

from xrefmark.config import AnnotatorConfig, ConfigError


class TestAnnotatorConfig:
    def test_defaults(self) -> None:
        cfg = AnnotatorConfig()
        assert cfg.to_dict() == {
            "gap_policy": "collapse",
            "section_prefix": "sec",
            "section_marker": "sec",
            "strict": False,
        }

    def test_bad_gap_policy(self) -> None:
        with pytest.raises(ConfigError, match="gap_policy"):
            AnnotatorConfig(gap_policy="reject")  # type: ignore[arg-type]

    def test_bad_prefix(self) -> None:
        with pytest.raises(ConfigError, match="section_prefix"):
            AnnotatorConfig(section_prefix="se c")

    def test_bad_marker(self) -> None:
        with pytest.raises(ConfigError, match="section_marker"):
            AnnotatorConfig(section_marker="[sec")

    @pytest.mark.parametrize("field", ["gap_policy", "section_prefix", "section_marker"])
    def test_non_string_rejected(self, field: str) -> None:
        with pytest.raises(ConfigError, match=f"{field} must be a string"):
            AnnotatorConfig.from_dict({field: 5})

    def test_strict_must_be_bool(self) -> None:
        with pytest.raises(ConfigError, match="strict"):
            AnnotatorConfig(strict="yes")  # type: ignore[arg-type]

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)

    def test_with_overrides_ignores_none(self) -> None:
        cfg = AnnotatorConfig(gap_policy="zero")
        assert cfg.with_overrides(gap_policy=None, strict=None) is cfg
        assert cfg.with_overrides(strict=True).strict is True
        assert cfg.with_overrides(strict=True).gap_policy == "zero"


class TestFromJson:
    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "xrefmark.json"
        path.write_text('{"gap_policy": "zero", "strict": true}')
        cfg = AnnotatorConfig.from_json(path)
        assert cfg.gap_policy == "zero"
        assert cfg.strict is True
        assert cfg.section_prefix == "sec"

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "xrefmark.json"
        path.write_text('{"gap_polcy": "zero"}')
        with pytest.raises(ConfigError, match="gap_polcy"):
            AnnotatorConfig.from_json(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "xrefmark.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            AnnotatorConfig.from_json(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "xrefmark.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            AnnotatorConfig.from_json(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            AnnotatorConfig.from_json(tmp_path / "absent.json")
