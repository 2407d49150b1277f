"""Shared fixtures: sample files and a recording mock HTTP backend."""

import json

import httpx
import pytest

from epost import AccessToken, Envelope, HttpBackend, Letter

PDF_BYTES = (
    b"%PDF-1.4\n"
    b"1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj\n"
    b"2 0 obj\n<< /Type /Pages /Kids [] /Count 0 >>\nendobj\n"
    b"trailer\n<< /Root 1 0 R >>\n%%EOF\n"
)

TEST_ENDPOINT = "https://epost.test"


class RecordingService:
    """Mock E-POST service that records requests and replays canned responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: object = []

    def respond(self, body: object, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> object:
        return json.loads(self.last.content)

    def backend(self) -> HttpBackend:
        return HttpBackend(TEST_ENDPOINT, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(PDF_BYTES)
    return path


@pytest.fixture
def cover_file(tmp_path):
    path = tmp_path / "cover.pdf"
    path.write_bytes(PDF_BYTES.replace(b"Catalog", b"Catalog /Lang (de)"))
    return path


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("Just some plain text, definitely not a PDF.\n")
    return path


@pytest.fixture
def service():
    return RecordingService()


@pytest.fixture
def envelope():
    return Envelope(
        recipient={"addressLine1": "Jane Doe", "zipCode": "10115", "city": "Berlin"},
        sender={"senderAddressLine1": "ACME GmbH"},
    )


@pytest.fixture
def letter(service, envelope, pdf_file):
    """A letter ready to be sent against the mock service."""
    return (
        Letter(backend=service.backend())
        .set_access_token(AccessToken("secret-token"))
        .set_envelope(envelope)
        .set_attachment(pdf_file)
    )
