"""Letter draft: assembly, submission and status queries.

A ``Letter`` can be populated in any order.  Required pieces are validated
when they are read, so an operation that reaches the network never runs with
partial state.  A Letter is a single-owner object and is not thread-safe; use
one instance per letter in flight.

Usage:
    letter = (
        Letter()
        .set_access_token(AccessToken("..."))
        .set_envelope(Envelope().set_recipient(name="Jane Doe", zipCode="10115"))
        .set_attachment("invoice.pdf")
        .send()
    )
    status = letter.get_letter_status()
"""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any

from epost.backends.base import LetterBackend
from epost.backends.http import DEFAULT_ENDPOINT, HttpBackend
from epost.config import Settings
from epost.errors import (
    ErrorException,
    InvalidFileFormat,
    MissingAttachmentException,
    MissingAuthorizationTokenException,
    MissingEnvelopeException,
    MissingPreconditionException,
    MissingRecipientException,
)
from epost.files import PDF_MIME_TYPE, detect_mime_type, encode_file
from epost.models import AccessToken, DataProvider
from epost.status import LetterStatus

log = logging.getLogger("epost.letter")


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


def _date_param(value: date | str) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return value


class Letter:
    def __init__(
        self,
        endpoint: str | None = None,
        timeout: float | None = None,
        backend: LetterBackend | None = None,
        letter_id: Any = None,
    ) -> None:
        if backend is None:
            backend = HttpBackend(
                endpoint or DEFAULT_ENDPOINT,
                timeout=timeout if timeout is not None else 30.0,
            )
        self.backend = backend

        self._access_token: AccessToken | None = None
        self._envelope: DataProvider | None = None
        self._cover_letter: str | None = None
        self._attachment: str | None = None
        self._delivery_options: DataProvider | None = None
        self._letter_id: Any = letter_id
        self._test_environment = False
        self._test_email: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings, backend: LetterBackend | None = None) -> Letter:
        """Build a Letter configured from resolved settings."""
        letter = cls(endpoint=settings.endpoint, timeout=settings.timeout, backend=backend)
        if settings.access_token:
            letter.set_access_token(AccessToken(settings.access_token))
        letter.set_test_environment(settings.test_environment)
        if settings.test_email:
            letter.set_test_email(settings.test_email)
        return letter

    # ---- access token ----------------------------------------------------

    def set_access_token(self, access_token: AccessToken) -> Letter:
        self._access_token = access_token
        return self

    def get_access_token(self) -> AccessToken:
        if self._access_token is None:
            raise MissingAuthorizationTokenException("An AccessToken instance must be passed")
        return self._access_token

    # ---- envelope --------------------------------------------------------

    def set_envelope(self, envelope: DataProvider) -> Letter:
        self._envelope = envelope
        return self

    def get_envelope(self) -> DataProvider:
        """Return the envelope, which must carry recipient data."""
        if self._envelope is None:
            raise MissingEnvelopeException("No Envelope provided! Provide one beforehand")
        if not self._envelope.get_data():
            raise MissingRecipientException("No recipient provided! Add them beforehand")
        return self._envelope

    # ---- cover letter / attachment --------------------------------------

    def set_cover_letter(self, cover_letter: str | os.PathLike[str] | None) -> Letter:
        self._cover_letter = os.fspath(cover_letter) if cover_letter else None
        return self

    def get_cover_letter(self) -> str | None:
        return self._cover_letter

    def set_attachment(self, attachment: str | os.PathLike[str]) -> Letter:
        """Set the PDF attachment path.

        Raises InvalidFileFormat when the file content is not a PDF or the
        path cannot be read.
        """
        path = os.fspath(attachment)
        try:
            mime_type = detect_mime_type(path)
        except OSError as exc:
            raise InvalidFileFormat(f"Cannot read attachment {path}. Allowed: pdf") from exc
        if mime_type != PDF_MIME_TYPE:
            raise InvalidFileFormat(
                f"Unallowed file format {mime_type!r} for {path}. Allowed: pdf"
            )
        self._attachment = path
        return self

    def get_attachment(self) -> str:
        if not self._attachment:
            raise MissingAttachmentException("No attachment provided! Please add an attachment.")
        return self._attachment

    # ---- delivery options / ids / test mode -----------------------------

    def set_delivery_options(self, delivery_options: DataProvider | None) -> Letter:
        self._delivery_options = delivery_options
        return self

    def get_delivery_options(self) -> DataProvider | None:
        return self._delivery_options

    def set_letter_id(self, letter_id: Any) -> Letter:
        self._letter_id = letter_id
        return self

    def get_letter_id(self) -> Any:
        if not self._letter_id:
            raise MissingPreconditionException("No letter id provided! Set letter id beforehand")
        return self._letter_id

    def set_test_environment(self, test_environment: bool) -> Letter:
        self._test_environment = bool(test_environment)
        return self

    def is_test_environment(self) -> bool:
        return self._test_environment

    def set_test_email(self, test_email: str | None) -> Letter:
        self._test_email = test_email
        return self

    def get_test_email(self) -> str | None:
        return self._test_email

    # ---- remote operations ----------------------------------------------

    def build_payload(self) -> dict[str, Any]:
        """Assemble the letter object submitted by send()."""
        data = dict(self.get_envelope().get_data() or {})

        cover_letter = self.get_cover_letter()
        if cover_letter:
            data["coverLetter"] = True
            data["coverData"] = encode_file(cover_letter)
        else:
            data["coverLetter"] = False

        attachment = self.get_attachment()
        data["fileName"] = os.path.basename(attachment)
        data["data"] = encode_file(attachment)

        if self._delivery_options is not None:
            data.update(self._delivery_options.get_data() or {})

        if self._test_email:
            data.update({"testFlag": True, "testEMail": self._test_email})

        return data

    def send(self) -> Letter:
        """Submit the letter and record the id the service assigns to it.

        Calling send() again submits the letter again.
        """
        payload = self.build_payload()
        token = self.get_access_token().get_token()

        log.info("Submitting letter %s", payload["fileName"])
        result = self._request("POST", "/api/Letter", token, json=[payload])

        self.set_letter_id(result[0]["letterID"])
        log.info("Letter %s accepted with id %s", payload["fileName"], self._letter_id)
        return self

    def get_letter_status(self, letter_id: Any = None) -> LetterStatus:
        if letter_id is None:
            letter_id = self.get_letter_id()
        token = self.get_access_token().get_token()

        log.debug("Querying status of letter %s", letter_id)
        result = self._request("GET", f"/api/Letter/{letter_id}", token)
        return LetterStatus(result)

    def get_multiple_letter_statuses(
        self, letter_ids: list[Any] | None = None, only_issues: bool = False
    ) -> list[LetterStatus] | Any:
        """Query several letters at once, preserving the service's order."""
        token = self.get_access_token().get_token()
        letter_ids = list(letter_ids or [])

        log.debug("Querying status of %d letter(s)", len(letter_ids))
        result = self._request(
            "POST",
            "/api/Letter/StatusQuery",
            token,
            json=letter_ids,
            params={"onlyIssues": _bool_param(only_issues)},
        )
        statuses = [LetterStatus(item) for item in result]
        return statuses or result

    def get_letter_status_by_date_range(
        self, from_date: date | str, till_date: date | str, only_issues: bool = False
    ) -> Any:
        """Query letters in a date range.

        Returns the decoded response as-is; records are not wrapped in
        LetterStatus.
        """
        token = self.get_access_token().get_token()
        params = {
            "fromDate": _date_param(from_date),
            "tillDate": _date_param(till_date),
            "onlyIssues": _bool_param(only_issues),
        }

        log.debug("Querying letters from %s till %s", params["fromDate"], params["tillDate"])
        return self._request("GET", "/api/Letter/Date", token, params=params)

    def _request(
        self,
        method: str,
        path: str,
        token: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        try:
            return self.backend.request(method, path, token, json=json, params=params)
        except ErrorException as exc:
            log.warning("%s %s rejected: %s", method, path, exc)
            raise
