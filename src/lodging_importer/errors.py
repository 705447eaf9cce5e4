"""Exception hierarchy shared by the importer components."""
from __future__ import annotations

from typing import Optional


class ImporterError(RuntimeError):
    """Base class for every error raised by the importer."""


class ConfigurationError(ImporterError):
    """Raised when the run cannot start because its configuration is unusable."""


class TransportError(ImporterError):
    """Raised when a listing page cannot be retrieved or decoded."""

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class RequestFailedError(TransportError):
    """Connection, DNS or timeout failure while sending the request."""


class UnexpectedStatusError(TransportError):
    """The listing API answered with anything other than HTTP 200."""

    def __init__(self, status: int, body: str, *, url: Optional[str] = None) -> None:
        super().__init__(f"Listing request returned non-OK status ({status})", url=url)
        self.status = status
        self.body = body


class EnvelopeDecodeError(TransportError):
    """The response body is not a valid listing page envelope."""


class MappingError(ImporterError):
    """A single listing could not be projected; only that record is affected."""

    def __init__(self, message: str, *, identifier: str = "") -> None:
        super().__init__(message)
        self.identifier = identifier
