from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from bgg_review.core.config import Settings, settings
from bgg_review.ingestion.providers.base.client import BaseHttpClient
from bgg_review.ingestion.providers.bgg.parser import parse_plays_page, parse_thing_items
from bgg_review.ingestion.providers.bgg.types import GameDetail, PlaysPage


def make_bgg_http(config: Settings | None = None) -> BaseHttpClient:
    config = config or settings
    return BaseHttpClient(
        base_url=config.bgg_base_url,
        timeout_s=config.http_timeout_s,
        connect_timeout_s=config.http_connect_timeout_s,
        headers=config.bgg_headers(),
    )


class BggClient:
    """Typed access to the two BoardGameGeek XML API 2 endpoints we read."""

    def __init__(self, *, http: BaseHttpClient) -> None:
        self.http = http

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> BggClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_plays_page(
        self,
        *,
        username: str,
        min_date: date,
        max_date: date,
        page: int = 1,
    ) -> PlaysPage:
        """One page of a user's logged plays between two dates (inclusive).

        Endpoint: GET /plays?username=...&mindate=YYYY-MM-DD&maxdate=YYYY-MM-DD[&page=N]
        """

        params: dict[str, str] = {
            "username": username,
            "mindate": min_date.isoformat(),
            "maxdate": max_date.isoformat(),
        }
        if page > 1:
            params["page"] = str(page)

        return parse_plays_page(self.http.get_text("/plays", params=params))

    def get_things(self, game_ids: Iterable[str]) -> list[GameDetail]:
        """Detail records for every requested id in a single batched call.

        Endpoint: GET /thing?id=1,2,3
        """

        ids = ",".join(game_ids)
        return parse_thing_items(self.http.get_text("/thing", params={"id": ids}))
