"""Service clients for the lodging listing API."""

from .listing_client import CONTINUATION_PARAM, ListingClient, parse_base_url

__all__ = [
    "CONTINUATION_PARAM",
    "ListingClient",
    "parse_base_url",
]
