from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bgg_review.review.aggregate import LongestSession, PlayAggregates
from bgg_review.review.enrichment import Enrichment, LinkTally
from bgg_review.review.ranking import DayPlays, MonthPlays, RankedEntry, Rankings


@dataclass(frozen=True)
class YearSummary:
    total_played: int
    unique_played: int
    total_time_played: int
    longest_play_session: LongestSession | None
    days_most_played: tuple[DayPlays, ...]
    month_most_played: MonthPlays | None
    days_played: int
    most_played_by_count: tuple[RankedEntry, ...]
    most_played_by_time: tuple[RankedEntry, ...]
    categories: tuple[LinkTally, ...]
    mechanics: tuple[LinkTally, ...]
    images: dict[str, str]

    def to_dict(self) -> dict[str, Any]:
        """External camelCase shape consumed by the web client."""

        session = self.longest_play_session
        return {
            "totalPlayed": self.total_played,
            "uniquePlayed": self.unique_played,
            "totalTimePlayed": self.total_time_played,
            "longestPlaySession": {
                "id": session.game_id if session else "",
                "name": session.name if session else "",
                "length": session.length_minutes if session else 0,
                "date": session.date if session else "",
            },
            "daysMostPlayed": [{"date": d.date, "plays": d.plays} for d in self.days_most_played],
            "monthMostPlayed": (
                {"month": self.month_most_played.month, "playCount": self.month_most_played.play_count}
                if self.month_most_played
                else None
            ),
            "daysPlayed": self.days_played,
            "mostPlayedByCount": [_entry_dict(e) for e in self.most_played_by_count],
            "mostPlayedByTime": [_entry_dict(e) for e in self.most_played_by_time],
            "categories": [_tally_dict(t) for t in self.categories],
            "mechanics": [_tally_dict(t) for t in self.mechanics],
            "images": dict(self.images),
        }


def _entry_dict(entry: RankedEntry) -> dict[str, Any]:
    return {
        "id": entry.game_id,
        "name": entry.name,
        "playCount": entry.play_count,
        "totalMinutes": entry.total_minutes,
    }


def _tally_dict(tally: LinkTally) -> dict[str, Any]:
    # playCount is kept as an alias of gameCount for older clients.
    return {
        "id": tally.id,
        "name": tally.name,
        "gameCount": tally.game_count,
        "playCount": tally.game_count,
    }


def assemble_summary(
    aggregates: PlayAggregates,
    rankings: Rankings,
    enrichment: Enrichment,
) -> YearSummary:
    return YearSummary(
        total_played=aggregates.total_played,
        unique_played=aggregates.unique_played,
        total_time_played=aggregates.total_time_played,
        longest_play_session=aggregates.longest_session,
        days_most_played=tuple(rankings.days),
        month_most_played=rankings.month,
        days_played=aggregates.days_played,
        most_played_by_count=tuple(rankings.by_count),
        most_played_by_time=tuple(rankings.by_time),
        categories=tuple(enrichment.categories),
        mechanics=tuple(enrichment.mechanics),
        images=dict(enrichment.images),
    )
