"""Transport backends used by Letter."""

from epost.backends.base import LetterBackend
from epost.backends.http import DEFAULT_ENDPOINT, HttpBackend

__all__ = ["DEFAULT_ENDPOINT", "HttpBackend", "LetterBackend"]
