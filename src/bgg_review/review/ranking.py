from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from bgg_review.review.aggregate import GameAggregate, LongestSession, PlayAggregates

TOP_N = 5

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class RankedEntry:
    game_id: str
    name: str
    play_count: int
    total_minutes: int


@dataclass(frozen=True)
class DayPlays:
    date: str
    plays: int


@dataclass(frozen=True)
class MonthPlays:
    month: str
    play_count: int


def month_name(month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")
    return MONTH_NAMES[month - 1]


def _ranked(game: GameAggregate) -> RankedEntry:
    return RankedEntry(
        game_id=game.game_id,
        name=game.name,
        play_count=game.play_count,
        total_minutes=game.total_minutes,
    )


# sorted() is stable, so ties keep the order games were first seen in.
def top_by_count(games: Mapping[str, GameAggregate], n: int = TOP_N) -> list[RankedEntry]:
    ordered = sorted(games.values(), key=lambda g: g.play_count, reverse=True)
    return [_ranked(g) for g in ordered[:n]]


def top_by_time(games: Mapping[str, GameAggregate], n: int = TOP_N) -> list[RankedEntry]:
    ordered = sorted(games.values(), key=lambda g: g.total_minutes, reverse=True)
    return [_ranked(g) for g in ordered[:n]]


def most_played_days(days: Mapping[str, int]) -> list[DayPlays]:
    """Every date tied for the highest play quantity, in first-seen order."""

    if not days:
        return []
    best = max(days.values())
    return [DayPlays(date=d, plays=p) for d, p in days.items() if p == best]


def most_played_month(months: Mapping[int, int]) -> MonthPlays | None:
    if not months:
        return None
    # max() returns the first maximal item.
    month, plays = max(months.items(), key=lambda kv: kv[1])
    return MonthPlays(month=month_name(month), play_count=plays)


@dataclass(frozen=True)
class Rankings:
    by_count: list[RankedEntry]
    by_time: list[RankedEntry]
    days: list[DayPlays]
    month: MonthPlays | None


def rank(aggregates: PlayAggregates, n: int = TOP_N) -> Rankings:
    return Rankings(
        by_count=top_by_count(aggregates.games, n),
        by_time=top_by_time(aggregates.games, n),
        days=most_played_days(aggregates.days),
        month=most_played_month(aggregates.months),
    )


def enrichment_ids(
    by_count: Iterable[RankedEntry],
    by_time: Iterable[RankedEntry],
    longest_session: LongestSession | None,
) -> tuple[str, ...]:
    """Ordered, de-duplicated ids whose details the summary needs."""

    ids: dict[str, None] = {}
    for entry in (*by_count, *by_time):
        ids.setdefault(entry.game_id, None)
    if longest_session is not None:
        ids.setdefault(longest_session.game_id, None)
    return tuple(ids)
