"""Attachment file helpers: content-type sniffing and base64 encoding."""

import base64
from pathlib import Path

import magic

PDF_MIME_TYPE = "application/pdf"

# MIME line length used by the service when it decodes file data
CHUNK_LENGTH = 76
CHUNK_END = "\r\n"


def detect_mime_type(path: str | Path) -> str:
    """Detect a file's MIME type from its content, not its extension."""
    return magic.from_file(str(path), mime=True)


def chunk_split(text: str, length: int = CHUNK_LENGTH, end: str = CHUNK_END) -> str:
    """Split text into lines of ``length`` characters, each terminated by ``end``."""
    if len(text) <= length:
        return text + end
    return "".join(text[i : i + length] + end for i in range(0, len(text), length))


def encode_file(path: str | Path) -> str:
    """Read a file and return its content as chunked base64 text."""
    with open(path, "rb") as f:
        data = f.read()
    return chunk_split(base64.b64encode(data).decode("ascii"))
