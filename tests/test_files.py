"""Tests for MIME detection and chunked base64 encoding."""

import base64

from epost.files import PDF_MIME_TYPE, chunk_split, detect_mime_type, encode_file


def test_detects_pdf_by_content(pdf_file):
    assert detect_mime_type(pdf_file) == PDF_MIME_TYPE


def test_text_file_is_not_pdf(text_file):
    assert detect_mime_type(text_file) != PDF_MIME_TYPE


class TestChunkSplit:
    def test_short_text_gets_single_terminator(self):
        assert chunk_split("abc") == "abc\r\n"

    def test_empty_text(self):
        assert chunk_split("") == "\r\n"

    def test_exact_line_length(self):
        assert chunk_split("a" * 76) == "a" * 76 + "\r\n"

    def test_wraps_at_76(self):
        text = "x" * 200
        assert chunk_split(text) == "x" * 76 + "\r\n" + "x" * 76 + "\r\n" + "x" * 48 + "\r\n"

    def test_custom_length_and_end(self):
        assert chunk_split("abcdef", 4, "\n") == "abcd\nef\n"


def test_encode_file(tmp_path):
    raw = bytes(range(256)) * 3
    path = tmp_path / "blob.bin"
    path.write_bytes(raw)

    encoded = encode_file(path)

    assert encoded.endswith("\r\n")
    assert base64.b64decode(encoded.replace("\r\n", "")) == raw
    assert max(len(line) for line in encoded.split("\r\n")) == 76
