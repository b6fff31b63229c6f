"""Domain models for the cycling_league project.

Raw facts (players, categories, races, results) are immutable dataclasses
supplied by the repository. The derived records (stats, summary, chart
points) are produced by :mod:`cycling_league.standings` and are never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple


NO_DATA = "---"


class RaceStatus(Enum):
    """A race is either already scored or still on the calendar."""

    PLAYED = "played"
    UPCOMING = "upcoming"


@dataclass(frozen=True)
class Player:
    """A fantasy team taking part in the league."""

    id: str
    name: str
    color: str


@dataclass(frozen=True)
class Category:
    """Scoring tier; the name carries the points scale, e.g. ``15-10-7-4``."""

    id: str
    name: str


@dataclass(frozen=True)
class Race:
    id: str
    name: str
    category_id: str
    date: date
    status: RaceStatus

    @property
    def is_played(self) -> bool:
        return self.status is RaceStatus.PLAYED


@dataclass(frozen=True)
class Result:
    """One player's score for one race."""

    id: str
    race_id: str
    player_id: str
    points: int


@dataclass(frozen=True)
class MortadelaEntry:
    """A cheap pick that scored far above its price."""

    cyclist: str
    points: int
    player_id: str
    race_name: str


@dataclass(frozen=True)
class WithdrawalRecord:
    """Riders a player lost to abandons, per race label."""

    player_id: str
    races: Mapping[str, str] = field(hash=False)
    total: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "races", MappingProxyType(dict(self.races)))


@dataclass(frozen=True)
class GlobalStats:
    """Aggregate statistics for a player across the whole season."""

    player_id: str
    total_points: int = 0
    races_won: int = 0
    average_points: float = 0.0


@dataclass(frozen=True)
class LeagueSummary:
    leader_name: str
    leader_color: str
    total_races: int
    completed_races: int
    most_wins_players: Tuple[str, ...] = (NO_DATA,)
    most_wins: int = 0
    top_score: int = 0
    top_score_player: str = NO_DATA


@dataclass(frozen=True)
class ChartDataPoint:
    """Cumulative points of every player right after one played race."""

    race_id: str
    race_name: str
    date: date
    totals: Mapping[str, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "totals", MappingProxyType(dict(self.totals)))

    def totals_by_name(self, players: Iterable[Player]) -> Dict[str, int]:
        """Return the totals keyed by display name, for chart series."""

        return {player.name: self.totals.get(player.id, 0) for player in players}


__all__ = [
    "NO_DATA",
    "Category",
    "ChartDataPoint",
    "GlobalStats",
    "LeagueSummary",
    "MortadelaEntry",
    "Player",
    "Race",
    "RaceStatus",
    "Result",
    "WithdrawalRecord",
]
