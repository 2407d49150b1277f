"""Letter status results returned by the status queries."""

from enum import IntEnum
from typing import Any


class LetterStatusId(IntEnum):
    ACCEPTANCE_OF_SHIPMENT = 1
    PROCESSING_THE_SHIPMENT = 2
    DELIVERY_TO_THE_PRINTING_CENTER = 3
    PROCESSING_IN_PRINTING_CENTER = 4
    PROCESSING_ERROR = 99


class LetterStatus:
    """Read-only view over one decoded status object.

    The service may return status ids outside ``LetterStatusId``; those are
    passed through unchanged.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = dict(data or {})

    @property
    def letter_id(self) -> Any:
        return self._data["letterID"]

    @property
    def status_id(self) -> int:
        return self._data["statusID"]

    @property
    def status_details(self) -> str:
        return self._data["statusDetails"]

    @property
    def errors(self) -> list[Any]:
        return self._data["errorList"]

    @property
    def status(self) -> LetterStatusId | int:
        try:
            return LetterStatusId(self.status_id)
        except ValueError:
            return self.status_id

    @property
    def is_error(self) -> bool:
        return self._data.get("statusID") == LetterStatusId.PROCESSING_ERROR

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def __repr__(self) -> str:
        return (
            f"LetterStatus(letter_id={self._data.get('letterID')!r}, "
            f"status_id={self._data.get('statusID')!r})"
        )
