"""Value objects a Letter is assembled from."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class DataProvider(Protocol):
    """Anything that serializes itself to letter payload fields."""

    def get_data(self) -> dict[str, Any] | None: ...


@dataclass(frozen=True)
class AccessToken:
    token: str

    def get_token(self) -> str:
        return self.token

    def __repr__(self) -> str:
        return "AccessToken(token='********')"


@dataclass
class Envelope:
    """Sender and recipient fields of a letter.

    Field names are passed through verbatim to the API payload.
    """

    recipient: dict[str, Any] = field(default_factory=dict)
    sender: dict[str, Any] = field(default_factory=dict)

    def set_recipient(self, **fields: Any) -> Envelope:
        self.recipient.update(fields)
        return self

    def set_sender(self, **fields: Any) -> Envelope:
        self.sender.update(fields)
        return self

    def get_data(self) -> dict[str, Any] | None:
        """Return the merged payload fields, or None without a recipient."""
        if not self.recipient:
            return None
        return {**self.sender, **self.recipient}


class DeliveryOptions:
    """Print and delivery fields for physical letters."""

    def __init__(self, **options: Any) -> None:
        self.options: dict[str, Any] = dict(options)

    def set(self, key: str, value: Any) -> DeliveryOptions:
        self.options[key] = value
        return self

    def get_data(self) -> dict[str, Any]:
        return dict(self.options)

    def __repr__(self) -> str:
        return f"DeliveryOptions({self.options!r})"
