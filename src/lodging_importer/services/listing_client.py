"""Client for the paginated lodging listing API."""
from __future__ import annotations

import logging
import re
from contextlib import AbstractContextManager
from typing import Mapping, Optional

import httpx
from pydantic import ValidationError

from lodging_importer.accommodations.models import ListingPage
from lodging_importer.errors import (
    ConfigurationError,
    EnvelopeDecodeError,
    RequestFailedError,
    UnexpectedStatusError,
)

logger = logging.getLogger(__name__)

CONTINUATION_PARAM = "continuationToken"
_BODY_PREVIEW = 512

# RFC 9110 field-name token; values may not carry line breaks or NUL.
_HEADER_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_HEADER_VALUE_FORBIDDEN = re.compile(r"[\r\n\x00]")


def check_header(name: str, value: str) -> None:
    """Reject a header that the HTTP layer would refuse once the connection is open."""
    if not _HEADER_NAME.fullmatch(name):
        raise ConfigurationError(f"Invalid header name {name!r}")
    if _HEADER_VALUE_FORBIDDEN.search(value):
        raise ConfigurationError(f"Invalid value for header {name!r}: line breaks are not allowed")


def parse_base_url(raw: str) -> httpx.URL:
    """Validate the configured listing URL without touching the network."""
    if not raw:
        raise ConfigurationError("Listing URL is not configured (HTTP_URL)")
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Malformed listing URL {raw!r}: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"Malformed listing URL {raw!r}: expected an absolute http(s) URL")
    return url


class ListingClient(AbstractContextManager["ListingClient"]):
    """Fetches one listing page per call; no retries, no state between calls."""

    def __init__(
        self,
        base_url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        method: str = "GET",
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = parse_base_url(base_url)
        self._method = method.upper()
        for name, value in (headers or {}).items():
            check_header(name, value)
        try:
            self._client = httpx.Client(
                timeout=timeout,
                headers=dict(headers or {}),
                transport=transport,
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid request headers: {exc}") from exc

    def close(self) -> None:
        self._client.close()

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.close()

    def fetch_url(self, continuation_token: Optional[str] = None) -> httpx.URL:
        if not continuation_token:
            return self._base_url
        return self._base_url.copy_set_param(CONTINUATION_PARAM, continuation_token)

    def fetch_page(self, continuation_token: Optional[str] = None) -> ListingPage:
        url = self.fetch_url(continuation_token)
        logger.debug("%s %s", self._method, url)
        try:
            response = self._client.request(self._method, url)
        except httpx.HTTPError as exc:
            raise RequestFailedError(f"Listing request failed: {exc}", url=str(url)) from exc

        # Non-streamed requests are fully read, so the connection is already released here.
        if response.status_code != httpx.codes.OK:
            raise UnexpectedStatusError(
                response.status_code,
                response.text[:_BODY_PREVIEW],
                url=str(url),
            )

        try:
            page = ListingPage.model_validate_json(response.content)
        except ValidationError as exc:
            raise EnvelopeDecodeError(
                f"Listing response is not a valid page envelope: {exc.error_count()} error(s); "
                f"first: {exc.errors()[0]['msg']}",
                url=str(url),
            ) from exc

        logger.debug(
            "Page decoded: count=%s records=%s hasNextPage=%s token=%r",
            page.count,
            len(page.data),
            page.has_next_page,
            page.next_page_token,
        )
        return page
