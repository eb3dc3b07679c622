"""Tests for the document model and file loading."""

import os
import tempfile

import pytest

from fileviewer.document import Document, load_document, read_lines
from fileviewer.errors import DocumentLoadError, LineIndexError


def test_empty_document():
    doc = Document()
    assert doc.length() == 0
    assert len(doc) == 0
    assert doc.last_index == -1
    assert not doc.has_line(0)


def test_line_access():
    doc = Document(["a", "b", "c"])
    assert doc.length() == 3
    assert doc.line(0) == "a"
    assert doc.line(2) == "c"
    assert doc.last_index == 2
    assert list(doc) == ["a", "b", "c"]


def test_out_of_range_line_raises():
    """Negative indices are not wrapped around to the end."""
    doc = Document(["a", "b"])
    with pytest.raises(LineIndexError):
        doc.line(2)
    with pytest.raises(LineIndexError):
        doc.line(-1)
    # Also usable as a plain IndexError
    with pytest.raises(IndexError):
        doc.line(5)


def test_load_replaces_wholesale():
    doc = Document(["old 1", "old 2", "old 3"])
    doc.load(["new"])
    assert list(doc) == ["new"]


def test_lines_with_breaks_rejected():
    with pytest.raises(ValueError):
        Document(["fine", "not\nfine"])
    with pytest.raises(ValueError):
        Document(["carriage\rreturn"])


def test_document_is_immutable_copy():
    source = ["a", "b"]
    doc = Document(source)
    source.append("c")
    assert len(doc) == 2


class TestLoading:
    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write(self, name, data: bytes):
        path = os.path.join(self.temp_dir, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def test_load_strips_newlines(self):
        path = self._write("a.txt", b"one\ntwo\nthree\n")
        doc = load_document(path)
        assert list(doc) == ["one", "two", "three"]

    def test_last_line_without_newline(self):
        path = self._write("a.txt", b"one\ntwo")
        assert read_lines(path) == ["one", "two"]

    def test_crlf_line_endings(self):
        path = self._write("a.txt", b"one\r\ntwo\r\n")
        assert read_lines(path) == ["one", "two"]

    def test_empty_file(self):
        path = self._write("empty.txt", b"")
        assert len(load_document(path)) == 0

    def test_utf8_content(self):
        path = self._write("u.txt", "héllo\n日本語\n".encode("utf-8"))
        assert read_lines(path) == ["héllo", "日本語"]

    def test_missing_file(self):
        path = os.path.join(self.temp_dir, "missing.txt")
        with pytest.raises(DocumentLoadError) as excinfo:
            load_document(path)
        assert isinstance(excinfo.value.error, FileNotFoundError)
        assert excinfo.value.path == path
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)

    def test_decode_error(self):
        path = self._write("bad.txt", b"\xff\xfe\xfa not utf-8\n")
        with pytest.raises(DocumentLoadError) as excinfo:
            load_document(path)
        assert isinstance(excinfo.value.error, UnicodeDecodeError)

    def test_directory_is_a_load_error(self):
        with pytest.raises(DocumentLoadError):
            load_document(self.temp_dir)
