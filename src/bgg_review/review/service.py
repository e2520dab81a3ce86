from __future__ import annotations

import structlog

from bgg_review.ingestion.providers.bgg.client import BggClient, make_bgg_http
from bgg_review.review.aggregate import aggregate_plays
from bgg_review.review.enrichment import fetch_enrichment
from bgg_review.review.errors import BadRequest
from bgg_review.review.pagination import fetch_all_plays
from bgg_review.review.ranking import enrichment_ids, rank
from bgg_review.review.summary import YearSummary, assemble_summary

log = structlog.stdlib.get_logger()


def normalize_username(username: str | None) -> str:
    """BoardGameGeek usernames are case-insensitive; the feed is queried lower-case."""

    return (username or "").strip().lower()


def _validate(username: str | None, year: int | None) -> tuple[str, int]:
    user = normalize_username(username)
    if not user:
        raise BadRequest("username is required")
    if year is None:
        raise BadRequest("year is required")
    if isinstance(year, bool) or not isinstance(year, int) or not 1000 <= year <= 9999:
        raise BadRequest(f"year must be a four-digit year, got {year!r}")
    return user, year


def compute_year_in_review(
    username: str | None,
    year: int | None,
    *,
    client: BggClient | None = None,
) -> YearSummary:
    """Build a user's year-in-review from their BoardGameGeek play log.

    Stages run strictly in sequence: all play pages, one aggregation pass,
    rankings, then a single detail request for the ranked games.

    Raises BadRequest, NotFound or UpstreamError. Nothing partial is returned.
    When `client` is omitted one is built from settings and closed afterwards.
    """

    user, year = _validate(username, year)

    owns_client = client is None
    if client is None:
        client = BggClient(http=make_bgg_http())

    try:
        plays = fetch_all_plays(client, user, year)
        aggregates = aggregate_plays(plays)

        rankings = rank(aggregates)
        ids = enrichment_ids(rankings.by_count, rankings.by_time, aggregates.longest_session)

        enrichment = fetch_enrichment(client, ids)
    finally:
        if owns_client:
            client.close()

    log.info(
        "year in review computed",
        username=user,
        year=year,
        total_played=aggregates.total_played,
        unique_played=aggregates.unique_played,
    )
    return assemble_summary(aggregates, rankings, enrichment)
