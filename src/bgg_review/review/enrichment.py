from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import structlog

from bgg_review.ingestion.providers.base.errors import ProviderMappingError, ProviderRequestError
from bgg_review.ingestion.providers.bgg.client import BggClient
from bgg_review.ingestion.providers.bgg.types import GameDetail, GameLink
from bgg_review.review.errors import UpstreamError

log = structlog.stdlib.get_logger()

TOP_LINKS = 3


@dataclass(frozen=True)
class LinkTally:
    """How many of the requested games carry a category/mechanic (not a play count)."""

    id: str
    name: str
    game_count: int


@dataclass(frozen=True)
class Enrichment:
    images: dict[str, str] = field(default_factory=dict)
    categories: list[LinkTally] = field(default_factory=list)
    mechanics: list[LinkTally] = field(default_factory=list)


def tally_links(link_sets: Iterable[Sequence[GameLink]], n: int = TOP_LINKS) -> list[LinkTally]:
    """Count link ids across games; first occurrence fixes the display name."""

    names: dict[str, str] = {}
    counts: dict[str, int] = {}
    for links in link_sets:
        for link in links:
            if link.id not in counts:
                names[link.id] = link.name
                counts[link.id] = 0
            counts[link.id] += 1

    ordered = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [LinkTally(id=i, name=names[i], game_count=c) for i, c in ordered[:n]]


def summarize_details(details: Sequence[GameDetail]) -> Enrichment:
    images = {d.game_id: d.image_url for d in details if d.image_url}
    return Enrichment(
        images=images,
        categories=tally_links(d.categories for d in details),
        mechanics=tally_links(d.mechanics for d in details),
    )


def fetch_enrichment(client: BggClient, game_ids: Sequence[str]) -> Enrichment:
    """One batched detail request for `game_ids`, reduced to images and top links."""

    if not game_ids:
        return Enrichment()

    try:
        details = client.get_things(game_ids)
    except ProviderRequestError as e:
        raise UpstreamError(f"game detail request failed: {e}", status=e.status_code) from e
    except ProviderMappingError as e:
        raise UpstreamError(f"game detail response was malformed: {e}") from e

    log.info("game details fetched", requested=len(game_ids), returned=len(details))
    return summarize_details(details)
