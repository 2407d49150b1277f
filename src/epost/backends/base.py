"""Backend protocol for Letter."""

from typing import Any, Protocol


class LetterBackend(Protocol):
    """Protocol that all backends must implement."""

    def request(
        self,
        method: str,
        path: str,
        token: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Issue an authenticated request and return the decoded JSON body.

        Raises ErrorException when the service answers with an error status.
        """
        ...
