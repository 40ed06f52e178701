"""Paginated fetch of the complete function list."""

from __future__ import annotations

import logging

from .errors import PageLimitExceeded
from .lambda_client import ListingClient
from .models.function_record import FunctionRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 200


def fetch_all_functions(
    client: ListingClient, max_pages: int = DEFAULT_MAX_PAGES
) -> list[FunctionRecord]:
    """Walk every page of the listing and return all records in API order.

    Pages are requested one at a time until the API stops returning a cursor.
    Only a fully drained listing is returned; any page failure propagates.

    Raises:
        FunctionListError: If a page request fails.
        PageLimitExceeded: If the cursor chain is longer than max_pages.
    """
    records: list[FunctionRecord] = []
    marker: str | None = None
    pages = 0
    while True:
        if pages >= max_pages:
            logger.warning("Giving up after %d pages; listing not drained", pages)
            raise PageLimitExceeded(max_pages)
        page = client.list_page(marker)
        pages += 1
        records.extend(page.records)
        if not page.next_marker:
            break
        marker = page.next_marker
    logger.info("Fetched %d functions in %d page(s)", len(records), pages)
    return records
