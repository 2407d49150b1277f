"""Exception taxonomy for the E-POST client.

Precondition errors are raised locally, before any network I/O, when a
``Letter`` is missing a piece it needs.  ``ErrorException`` wraps the error
body the remote service returned for a rejected request.
"""

from typing import Any


class EPostException(Exception):
    """Base class for all errors raised by this package."""


class MissingPreconditionException(EPostException):
    pass


class MissingAuthorizationTokenException(MissingPreconditionException):
    pass


class MissingEnvelopeException(MissingPreconditionException):
    pass


class MissingRecipientException(MissingPreconditionException):
    pass


class MissingAttachmentException(MissingPreconditionException):
    pass


class InvalidFileFormat(EPostException, ValueError):
    pass


class Error:
    """Decoded error body returned by the remote service."""

    def __init__(self, data: Any, status_code: int | None = None) -> None:
        self.data = data
        self.status_code = status_code

    @property
    def errors(self) -> list[Any]:
        if isinstance(self.data, dict):
            return self.data.get("errorList") or []
        return []

    def get(self, key: str, default: Any = None) -> Any:
        if isinstance(self.data, dict):
            return self.data.get(key, default)
        return default

    @property
    def message(self) -> str:
        parts = []
        for err in self.errors:
            if isinstance(err, dict):
                text = err.get("description") or err.get("message") or err.get("code")
                parts.append(str(text) if text is not None else str(err))
            else:
                parts.append(str(err))
        if not parts and isinstance(self.data, dict):
            for key in ("message", "title", "detail"):
                if self.data.get(key):
                    parts.append(str(self.data[key]))
                    break
        if not parts:
            parts.append(str(self.data))
        return "; ".join(parts)

    def __repr__(self) -> str:
        return f"Error(status_code={self.status_code!r}, data={self.data!r})"


class ErrorException(EPostException):
    """The remote service rejected a request."""

    def __init__(self, error: Error) -> None:
        self.error = error
        if error.status_code is not None:
            super().__init__(f"E-POST API error ({error.status_code}): {error.message}")
        else:
            super().__init__(f"E-POST API error: {error.message}")
