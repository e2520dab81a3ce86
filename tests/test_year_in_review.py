from __future__ import annotations

import httpx
import pytest

from bgg_review.ingestion.providers.base.client import BaseHttpClient
from bgg_review.ingestion.providers.bgg.client import BggClient
from bgg_review.review.errors import BadRequest, NotFound, UpstreamError
from bgg_review.review.service import compute_year_in_review, normalize_username
from feeds import ERROR_BOX, Play, Thing, plays_xml, things_xml


def _alice_pages() -> dict[int, list[Play]]:
    # 150 plays over two pages: X logged 10 times at 30 minutes, Y once at 90,
    # the rest are untimed plays of Z.
    page1 = [Play("X", "Xenon", f"2023-03-{d:02d}", length=30) for d in range(1, 11)]
    page1 += [Play("Z", "Zoo", "2023-07-04") for _ in range(90)]
    page2 = [Play("Y", "Yggdrasil", "2023-11-20", length=90)]
    page2 += [Play("Z", "Zoo", "2023-08-01") for _ in range(49)]
    return {1: page1, 2: page2}


def _alice_client(requests: list[httpx.Request]) -> BggClient:
    pages = _alice_pages()

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/plays"):
            page = int(request.url.params.get("page", "1"))
            return httpx.Response(200, text=plays_xml(pages[page], total=150, page=page))
        return httpx.Response(
            200,
            text=things_xml(
                [
                    Thing("Z", image="https://img/z.jpg", categories=[("1", "Animals")], mechanics=[("10", "Set Collection")]),
                    Thing("X", image="https://img/x.jpg", categories=[("2", "Science")], mechanics=[("10", "Set Collection")]),
                    Thing("Y", image="https://img/y.jpg", categories=[("1", "Animals"), ("3", "Fantasy")]),
                ]
            ),
        )

    http = BaseHttpClient(base_url="https://boardgamegeek.com/xmlapi2", transport=httpx.MockTransport(handler))
    return BggClient(http=http)


def test_compute_year_in_review_end_to_end() -> None:
    requests: list[httpx.Request] = []

    summary = compute_year_in_review("  Alice ", 2023, client=_alice_client(requests))

    plays_requests = [r for r in requests if r.url.path.endswith("/plays")]
    assert [r.url.params.get("page") for r in plays_requests] == [None, "2"]
    assert plays_requests[0].url.params["username"] == "alice"
    thing_requests = [r for r in requests if r.url.path.endswith("/thing")]
    assert len(thing_requests) == 1
    assert thing_requests[0].url.params["id"] == "Z,X,Y"

    assert summary.total_played == 150
    assert summary.unique_played == 3
    assert summary.total_time_played == 300 + 90
    assert summary.days_played == 13

    assert [e.game_id for e in summary.most_played_by_count] == ["Z", "X", "Y"]
    assert [e.game_id for e in summary.most_played_by_time] == ["X", "Y", "Z"]
    assert summary.most_played_by_time[0].total_minutes == 300

    assert summary.longest_play_session is not None
    assert summary.longest_play_session.game_id == "Y"
    assert summary.longest_play_session.length_minutes == 90

    assert [(d.date, d.plays) for d in summary.days_most_played] == [("2023-07-04", 90)]
    assert summary.month_most_played is not None
    assert summary.month_most_played.month == "July"
    assert summary.month_most_played.play_count == 90

    assert summary.images == {"Z": "https://img/z.jpg", "X": "https://img/x.jpg", "Y": "https://img/y.jpg"}
    assert [(t.name, t.game_count) for t in summary.categories] == [("Animals", 2), ("Science", 1), ("Fantasy", 1)]
    assert [(t.name, t.game_count) for t in summary.mechanics] == [("Set Collection", 2)]


def test_year_summary_to_dict_shape() -> None:
    summary = compute_year_in_review("alice", 2023, client=_alice_client([]))

    out = summary.to_dict()

    assert out["totalPlayed"] == 150
    assert out["longestPlaySession"] == {"id": "Y", "name": "Yggdrasil", "length": 90, "date": "2023-11-20"}
    assert out["monthMostPlayed"] == {"month": "July", "playCount": 90}
    assert out["daysMostPlayed"] == [{"date": "2023-07-04", "plays": 90}]
    assert out["mostPlayedByCount"][0] == {"id": "Z", "name": "Zoo", "playCount": 139, "totalMinutes": 0}
    assert out["categories"][0] == {"id": "1", "name": "Animals", "gameCount": 2, "playCount": 2}
    assert set(out) == {
        "totalPlayed",
        "uniquePlayed",
        "totalTimePlayed",
        "longestPlaySession",
        "daysMostPlayed",
        "monthMostPlayed",
        "daysPlayed",
        "mostPlayedByCount",
        "mostPlayedByTime",
        "categories",
        "mechanics",
        "images",
    }


@pytest.mark.parametrize(
    ("username", "year"),
    [(None, 2023), ("", 2023), ("   ", 2023), ("alice", None), ("alice", 23), ("alice", True)],
)
def test_compute_year_in_review_rejects_bad_input(username: str | None, year: int | None) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    http = BaseHttpClient(base_url="https://boardgamegeek.com/xmlapi2", transport=httpx.MockTransport(handler))

    with pytest.raises(BadRequest):
        compute_year_in_review(username, year, client=BggClient(http=http))


def test_compute_year_in_review_unknown_user() -> None:
    http = BaseHttpClient(
        base_url="https://boardgamegeek.com/xmlapi2",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text=ERROR_BOX)),
    )

    with pytest.raises(NotFound):
        compute_year_in_review("nobody", 2023, client=BggClient(http=http))


def test_compute_year_in_review_no_plays() -> None:
    http = BaseHttpClient(
        base_url="https://boardgamegeek.com/xmlapi2",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text=plays_xml([], total=0))),
    )

    with pytest.raises(NotFound):
        compute_year_in_review("alice", 2023, client=BggClient(http=http))


def test_compute_year_in_review_detail_failure_returns_nothing() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/plays"):
            return httpx.Response(200, text=plays_xml([Play("X", "Xenon", "2023-01-01", length=30)]))
        return httpx.Response(500)

    http = BaseHttpClient(base_url="https://boardgamegeek.com/xmlapi2", transport=httpx.MockTransport(handler))

    with pytest.raises(UpstreamError) as excinfo:
        compute_year_in_review("alice", 2023, client=BggClient(http=http))

    assert excinfo.value.status == 500


def test_compute_year_in_review_ignores_page_size_in_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLAYS_PAGE_SIZE", "200")
    requests: list[httpx.Request] = []

    summary = compute_year_in_review("alice", 2023, client=_alice_client(requests))

    plays_requests = [r for r in requests if r.url.path.endswith("/plays")]
    assert [r.url.params.get("page") for r in plays_requests] == [None, "2"]
    assert summary.total_played == 150


@pytest.mark.parametrize(("raw", "expected"), [("  Alice ", "alice"), ("BOB", "bob"), (None, ""), ("   ", "")])
def test_normalize_username(raw: str | None, expected: str) -> None:
    assert normalize_username(raw) == expected
