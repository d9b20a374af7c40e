"""Tests for xrefmark.io_utils module."""
import io
from pathlib import Path

from xrefmark.io_utils import load_json, read_lines, save_json, write_lines


class TestReadLines:
    def test_stream(self) -> None:
        assert read_lines(io.StringIO("# A\n\nbody\n")) == ["# A", "", "body"]

    def test_no_trailing_newline(self) -> None:
        assert read_lines(io.StringIO("a\nb")) == ["a", "b"]

    def test_crlf(self) -> None:
        assert read_lines(io.StringIO("a\r\nb\r\n")) == ["a", "b"]

    def test_path(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.md"
        path.write_text("# Título\n", encoding="utf-8")
        assert read_lines(path) == ["# Título"]

    def test_empty(self) -> None:
        assert read_lines(io.StringIO("")) == []

    def test_form_feed_stays_in_line(self) -> None:
        assert read_lines(io.StringIO("a\fb\n")) == ["a\fb"]

    def test_unicode_separators_stay_in_line(self) -> None:
        assert read_lines(io.StringIO("a\u2028b\x85c\n")) == ["a\u2028b\x85c"]

    def test_path_keeps_form_feed(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.md"
        path.write_bytes("page one\fpage two\r\nend\n".encode())
        assert read_lines(path) == ["page one\fpage two", "end"]

    def test_plain_document_round_trips(self) -> None:
        text = "a\fb\n\nc\u2029d\n"
        buf = io.StringIO()
        write_lines(read_lines(io.StringIO(text)), buf)
        assert buf.getvalue() == text


class TestWriteLines:
    def test_newline_terminated(self) -> None:
        buf = io.StringIO()
        write_lines(["a", "", "b"], buf)
        assert buf.getvalue() == "a\n\nb\n"

    def test_empty(self) -> None:
        buf = io.StringIO()
        write_lines([], buf)
        assert buf.getvalue() == ""

    def test_path_creates_parent(self, tmp_path: Path) -> None:
        path = tmp_path / "out" / "doc.md"
        write_lines(["x"], path)
        assert path.read_text(encoding="utf-8") == "x\n"


def test_save_json_sorted_and_indented(tmp_path: Path) -> None:
    path = tmp_path / "report.json"
    save_json({"b": 1, "a": [1, 2]}, path)
    text = path.read_text()
    assert text.index('"a"') < text.index('"b"')
    assert load_json(path) == {"a": [1, 2], "b": 1}
