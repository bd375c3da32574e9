"""
Unit tests for the list and line-reader path sources.
"""
import io

import pytest

from sumtree.core.errors import InputResolutionError
from sumtree.core.sources import LineReaderSource, ListSource


class TestListSource:
    """Paths known upfront keep argument order."""

    def test_preserves_order(self):
        paths = ["z.txt", "a.txt", "m/n.txt"]
        assert list(ListSource(paths).iter_paths()) == paths

    def test_accepts_path_objects(self, tmp_path):
        assert list(ListSource([tmp_path / "x"]).iter_paths()) == [str(tmp_path / "x")]

    def test_duplicates_are_kept(self):
        assert list(ListSource(["a", "a"]).iter_paths()) == ["a", "a"]


class TestLineReaderSource:
    """One path per line, verbatim, in input order."""

    def test_reads_lines_in_order(self):
        stream = io.BytesIO(b"/data/b.txt\n/data/a.txt\n/data/c.txt\n")

        paths = list(LineReaderSource(stream).iter_paths())

        assert paths == ["/data/b.txt", "/data/a.txt", "/data/c.txt"]

    def test_last_line_without_newline(self):
        stream = io.BytesIO(b"one\ntwo")
        assert list(LineReaderSource(stream).iter_paths()) == ["one", "two"]

    def test_crlf_terminators_are_stripped(self):
        stream = io.BytesIO(b"one\r\ntwo\r\n")
        assert list(LineReaderSource(stream).iter_paths()) == ["one", "two"]

    def test_whitespace_is_preserved(self):
        """Lines are taken verbatim: leading/trailing spaces are part of the path."""
        stream = io.BytesIO(b" spaced name .txt\n")
        assert list(LineReaderSource(stream).iter_paths()) == [" spaced name .txt"]

    def test_empty_lines_are_not_validated(self):
        """Validation is deferred to open time, so an empty line is passed through."""
        stream = io.BytesIO(b"a\n\nb\n")
        assert list(LineReaderSource(stream).iter_paths()) == ["a", "", "b"]

    def test_empty_stream(self):
        assert list(LineReaderSource(io.BytesIO(b"")).iter_paths()) == []

    def test_text_stream(self):
        stream = io.StringIO("a.txt\nb.txt\n")
        assert list(LineReaderSource(stream).iter_paths()) == ["a.txt", "b.txt"]

    def test_defaults_to_stdin(self, monkeypatch):
        fake_stdin = io.TextIOWrapper(io.BytesIO(b"from_stdin.txt\n"))
        monkeypatch.setattr("sys.stdin", fake_stdin)

        assert list(LineReaderSource().iter_paths()) == ["from_stdin.txt"]

    def test_read_error_is_fatal(self):
        class _BrokenStream:
            def __iter__(self):
                yield b"first\n"
                raise OSError(5, "Input/output error")

        source = LineReaderSource(_BrokenStream())
        produced = []
        with pytest.raises(InputResolutionError, match="Failed to read path list"):
            for path in source.iter_paths():
                produced.append(path)

        assert produced == ["first"]
