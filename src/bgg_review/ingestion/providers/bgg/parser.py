from __future__ import annotations

from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from bgg_review.ingestion.providers.base.errors import ProviderMappingError, UnknownUserError
from bgg_review.ingestion.providers.bgg.types import GameDetail, GameLink, PlayRecord, PlaysPage

CATEGORY_LINK = "boardgamecategory"
MECHANIC_LINK = "boardgamemechanic"


def _soup(text: str) -> BeautifulSoup:
    return BeautifulSoup(text, "xml")


def _is_error_box(soup: BeautifulSoup) -> bool:
    for div in soup.find_all("div"):
        classes = (_attr(div, "class") or "").split()
        if "messagebox" in classes and "error" in classes:
            return True
    return False


def _attr(tag: Tag, name: str) -> str | None:
    value = tag.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value


def parse_plays_page(text: str) -> PlaysPage:
    """Parse one page of the `/plays` feed.

    Raises UnknownUserError when the body is the "invalid username" message box
    (the feed sends it with HTTP 200), ProviderMappingError for anything else
    that does not look like a plays document.
    """

    soup = _soup(text)
    if _is_error_box(soup):
        raise UnknownUserError("plays feed reported an invalid username")

    root = soup.find("plays")
    if not isinstance(root, Tag):
        raise ProviderMappingError("plays response missing <plays> root", {"body": text[:200]})

    plays: list[PlayRecord] = []
    for play in root.find_all("play"):
        item = play.find("item")
        if not isinstance(item, Tag):
            raise ProviderMappingError("play without <item>", {"play_id": _attr(play, "id")})
        try:
            plays.append(
                PlayRecord(
                    game_id=_attr(item, "objectid") or "",
                    game_name=_attr(item, "name") or "",
                    date=_attr(play, "date") or "",
                    length_minutes=_attr(play, "length"),
                    quantity=_attr(play, "quantity"),
                )
            )
        except ValidationError as e:
            raise ProviderMappingError(
                "invalid play record", {"play_id": _attr(play, "id"), "errors": e.errors()}
            ) from e

    try:
        return PlaysPage(
            total=_attr(root, "total") or 0,
            page=_attr(root, "page") or 1,
            plays=tuple(plays),
        )
    except ValidationError as e:
        raise ProviderMappingError("invalid <plays> header", {"errors": e.errors()}) from e


def _links(item: Tag, link_type: str) -> tuple[GameLink, ...]:
    links: list[GameLink] = []
    for link in item.find_all("link", attrs={"type": link_type}):
        link_id = _attr(link, "id")
        if not link_id:
            continue
        links.append(GameLink(id=link_id, name=_attr(link, "value") or ""))
    return tuple(links)


def parse_thing_items(text: str) -> list[GameDetail]:
    """Parse the `/thing` feed into one GameDetail per top-level `<item>`."""

    soup = _soup(text)
    root = soup.find("items")
    if not isinstance(root, Tag):
        raise ProviderMappingError("thing response missing <items> root", {"body": text[:200]})

    details: list[GameDetail] = []
    for item in root.find_all("item", recursive=False):
        image = item.find("image", recursive=False)
        image_url = image.get_text(strip=True) if isinstance(image, Tag) else None
        try:
            details.append(
                GameDetail(
                    game_id=_attr(item, "id") or "",
                    image_url=image_url or None,
                    categories=_links(item, CATEGORY_LINK),
                    mechanics=_links(item, MECHANIC_LINK),
                )
            )
        except ValidationError as e:
            raise ProviderMappingError("invalid thing item", {"errors": e.errors()}) from e
    return details
