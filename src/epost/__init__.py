"""E-POST client library - submit letters and track their delivery status."""

from epost.backends.http import DEFAULT_ENDPOINT, HttpBackend
from epost.config import Settings, load_settings
from epost.errors import (
    EPostException,
    Error,
    ErrorException,
    InvalidFileFormat,
    MissingAttachmentException,
    MissingAuthorizationTokenException,
    MissingEnvelopeException,
    MissingPreconditionException,
    MissingRecipientException,
)
from epost.letter import Letter
from epost.models import AccessToken, DeliveryOptions, Envelope
from epost.status import LetterStatus, LetterStatusId

__all__ = [
    "DEFAULT_ENDPOINT",
    "AccessToken",
    "DeliveryOptions",
    "EPostException",
    "Envelope",
    "Error",
    "ErrorException",
    "HttpBackend",
    "InvalidFileFormat",
    "Letter",
    "LetterStatus",
    "LetterStatusId",
    "MissingAttachmentException",
    "MissingAuthorizationTokenException",
    "MissingEnvelopeException",
    "MissingPreconditionException",
    "MissingRecipientException",
    "Settings",
    "load_settings",
]
