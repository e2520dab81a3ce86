from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from bgg_review.ingestion.providers.bgg.types import PlayRecord


@dataclass
class GameAggregate:
    game_id: str
    name: str
    play_count: int = 0
    total_minutes: int = 0


@dataclass(frozen=True)
class LongestSession:
    game_id: str
    name: str
    length_minutes: int
    date: str


@dataclass(frozen=True)
class PlayAggregates:
    """Finalized result of one aggregation pass. Dicts keep first-seen order."""

    games: dict[str, GameAggregate]
    days: dict[str, int]
    months: dict[int, int]
    longest_session: LongestSession | None
    total_played: int
    total_time_played: int

    @property
    def unique_played(self) -> int:
        return len(self.games)

    @property
    def days_played(self) -> int:
        return len(self.days)


@dataclass
class PlayAggregator:
    """Single-writer accumulator for one pass over a user's plays."""

    games: dict[str, GameAggregate] = field(default_factory=dict)
    days: dict[str, int] = field(default_factory=dict)
    months: dict[int, int] = field(default_factory=dict)
    longest_session: LongestSession | None = None
    total_played: int = 0
    total_time_played: int = 0

    def add(self, play: PlayRecord) -> None:
        self.total_played += play.quantity

        length = play.length_minutes
        if length > 0:
            self.total_time_played += length
            # Strict comparison: the first record reaching a length keeps it.
            current = self.longest_session.length_minutes if self.longest_session else 0
            if length > current:
                self.longest_session = LongestSession(
                    game_id=play.game_id,
                    name=play.game_name,
                    length_minutes=length,
                    date=play.date,
                )

        game = self.games.get(play.game_id)
        if game is None:
            game = self.games[play.game_id] = GameAggregate(game_id=play.game_id, name=play.game_name)
        game.play_count += play.quantity
        game.total_minutes += length

        self.days[play.date] = self.days.get(play.date, 0) + play.quantity
        self.months[play.month] = self.months.get(play.month, 0) + play.quantity

    def finalize(self) -> PlayAggregates:
        return PlayAggregates(
            games=dict(self.games),
            days=dict(self.days),
            months=dict(self.months),
            longest_session=self.longest_session,
            total_played=self.total_played,
            total_time_played=self.total_time_played,
        )


def aggregate_plays(plays: Iterable[PlayRecord]) -> PlayAggregates:
    agg = PlayAggregator()
    for play in plays:
        agg.add(play)
    return agg.finalize()
