"""Cursor-driven retrieval of the full registry listing."""

import logging
from dataclasses import dataclass
from typing import Callable

from ..errors import MalformedResponse
from ..reporting import NullReporter, Reporter
from .models import Entry, Page

logger = logging.getLogger(__name__)

MAX_PAGES = 200
PROGRESS_EVERY = 10

PageFetcher = Callable[[str | None], Page]


@dataclass(frozen=True)
class FetchResult:
    """Entries gathered by one pagination run."""
    entries: list[Entry]
    pages: int
    truncated: bool = False  # stopped by MAX_PAGES, listing may be incomplete


def fetch_all(
    page_fetcher: PageFetcher,
    limit: int | None = None,
    reporter: Reporter | None = None,
) -> FetchResult:
    """Fetch every page until the cursor runs out, `limit` is hit or MAX_PAGES.

    Pages are requested one at a time since each request needs the cursor
    returned by the previous one. Any exception raised by `page_fetcher`
    aborts the run and propagates; nothing gathered so far is returned.
    """
    if limit is not None and limit <= 0:
        raise ValueError(f"limit must be a positive integer, got {limit}")

    reporter = reporter or NullReporter()
    reporter.info("Fetching servers from MCP registry (with pagination)...")

    entries: list[Entry] = []
    cursor: str | None = None
    page = 0
    truncated = False

    try:
        while True:
            response = page_fetcher(cursor)
            page += 1

            batch = _page_entries(response)
            entries.extend(batch)
            cursor = getattr(response, "next_cursor", None) or None
            logger.debug("Page %d: %d entries, next cursor %r", page, len(batch), cursor)

            if page % PROGRESS_EVERY == 0:
                reporter.info(f"  Fetched {len(entries)} servers so far (page {page})...")

            if not cursor:
                break
            if limit is not None and len(entries) >= limit:
                break
            if page >= MAX_PAGES:
                truncated = True
                reporter.warning(
                    f"Hit max page limit ({MAX_PAGES}), results may be incomplete"
                )
                break
    except Exception as e:
        reporter.error(f"Failed to fetch MCP registry servers: {e}")
        raise

    if limit is not None:
        del entries[limit:]

    reporter.success(f"Fetched {len(entries)} servers from MCP registry ({page} pages)")

    return FetchResult(entries=entries, pages=page, truncated=truncated)


def _page_entries(response: Page) -> list[Entry]:
    """Return the entry list of a page, rejecting structurally invalid pages."""
    entries = getattr(response, "entries", None)
    if not isinstance(entries, (list, tuple)):
        raise MalformedResponse("Page response has no entry list")
    return list(entries)
