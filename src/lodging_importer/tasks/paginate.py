"""Pagination workflow: fetch every listing page and emit mapped accommodations."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Protocol

from lodging_importer.accommodations.mapper import AccommodationMapper
from lodging_importer.accommodations.models import Accommodation, ListingPage
from lodging_importer.errors import MappingError

logger = logging.getLogger(__name__)

AccommodationSink = Callable[[Accommodation], None]


class PageFetcher(Protocol):
    def fetch_page(self, continuation_token: Optional[str] = None) -> ListingPage:
        ...


@dataclass
class ImportStats:
    """Counters reported at the end of a run."""

    pages: int = 0
    emitted: int = 0
    skipped: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"pages": self.pages, "emitted": self.emitted, "skipped": self.skipped}


class PaginationDriver:
    """Walks the continuation-token chain until the listing API runs out of pages.

    Fetch errors propagate and end the run; whatever was emitted before stays
    emitted. A record that cannot be mapped or written is logged and skipped.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        sink: AccommodationSink,
        *,
        mapper: Optional[AccommodationMapper] = None,
    ) -> None:
        self._fetcher = fetcher
        self._sink = sink
        self._mapper = mapper or AccommodationMapper()

    def iter_pages(self) -> Iterator[ListingPage]:
        continuation_token = ""
        page_number = 0
        while True:
            page_number += 1
            logger.info("Fetching listing page %s", page_number)
            page = self._fetcher.fetch_page(continuation_token or None)
            yield page
            if page.is_last:
                if page.has_next_page:
                    logger.warning(
                        "Page %s reports more results but no continuation token; stopping",
                        page_number,
                    )
                return
            continuation_token = page.next_page_token

    def run(self) -> ImportStats:
        stats = ImportStats()
        for page in self.iter_pages():
            stats.pages += 1
            for record in page.data:
                try:
                    accommodation = self._mapper.map(record)
                    self._sink(accommodation)
                except MappingError as exc:
                    stats.skipped += 1
                    logger.warning("Skipping listing %r: %s", record.identifier, exc)
                    continue
                stats.emitted += 1
            logger.info(
                "Page %s done: %s records, %s emitted so far",
                stats.pages,
                len(page.data),
                stats.emitted,
            )
        logger.info(
            "Import finished: %s pages, %s emitted, %s skipped",
            stats.pages,
            stats.emitted,
            stats.skipped,
        )
        return stats
