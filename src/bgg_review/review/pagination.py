from __future__ import annotations

from datetime import date

import structlog

from bgg_review.ingestion.providers.base.errors import (
    ProviderMappingError,
    ProviderRequestError,
    UnknownUserError,
)
from bgg_review.ingestion.providers.bgg.client import BggClient
from bgg_review.ingestion.providers.bgg.types import PlayRecord, PlaysPage
from bgg_review.review.errors import NotFound, UpstreamError

log = structlog.stdlib.get_logger()

PAGE_SIZE = 100


def _fetch_page(client: BggClient, *, username: str, year: int, page: int) -> PlaysPage:
    try:
        return client.get_plays_page(
            username=username,
            min_date=date(year, 1, 1),
            max_date=date(year, 12, 31),
            page=page,
        )
    except UnknownUserError as e:
        raise NotFound(f"Unknown BoardGameGeek user {username!r}") from e
    except ProviderRequestError as e:
        raise UpstreamError(f"plays page {page} failed: {e}", status=e.status_code) from e
    except ProviderMappingError as e:
        raise UpstreamError(f"plays page {page} was malformed: {e}") from e


def fetch_all_plays(
    client: BggClient,
    username: str,
    year: int,
    *,
    page_size: int = PAGE_SIZE,
) -> list[PlayRecord]:
    """Every play a user logged in `year`, in upstream page order.

    Pages are requested one at a time. The stop condition uses the total
    reported by page 1 only; each requested page advances the fetched count by
    a full page, so a short page can never make the loop spin.
    """

    first = _fetch_page(client, username=username, year=year, page=1)
    if first.total == 0:
        raise NotFound(f"{username!r} logged no plays in {year}")

    plays = list(first.plays)
    fetched = page_size
    page = 2
    while fetched < first.total:
        nxt = _fetch_page(client, username=username, year=year, page=page)
        plays.extend(nxt.plays)
        fetched += page_size
        page += 1

    log.info("plays fetched", username=username, year=year, total=first.total, pages=page - 1, plays=len(plays))
    return plays
