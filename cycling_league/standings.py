"""Standings aggregation over a snapshot of players, races and results.

Every function here is pure: it reads the collections it is given, never
mutates them, and returns freshly built values. Degenerate inputs (no
players, races without results, all-zero races) yield zeros or placeholders
rather than errors.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import (
    NO_DATA,
    ChartDataPoint,
    GlobalStats,
    LeagueSummary,
    MortadelaEntry,
    Player,
    Race,
    Result,
)


NO_LEADER_COLOR = "#fff"


def _results_by_race(results: Iterable[Result]) -> Dict[str, List[Result]]:
    grouped: Dict[str, List[Result]] = {}
    for result in results:
        grouped.setdefault(result.race_id, []).append(result)
    return grouped


def race_winner_ids(race_id: str, results: Iterable[Result]) -> List[str]:
    """Return the ids of the players with the race's top score.

    A race where nobody scored (or nobody has a result yet) has no winner.
    """

    race_results = [result for result in results if result.race_id == race_id]
    if not race_results:
        return []
    max_points = max(result.points for result in race_results)
    if max_points <= 0:
        return []
    return [result.player_id for result in race_results if result.points == max_points]


def compute_global_stats(
    players: Iterable[Player],
    races: Iterable[Race],
    results: Iterable[Result],
) -> List[GlobalStats]:
    """Compute totals, wins and per-race averages for every player."""

    results = list(results)
    by_race = _results_by_race(results)

    wins: Dict[str, int] = {}
    for race in races:
        if not race.is_played:
            continue
        for player_id in race_winner_ids(race.id, by_race.get(race.id, ())):
            wins[player_id] = wins.get(player_id, 0) + 1

    stats: List[GlobalStats] = []
    for player in players:
        points = [result.points for result in results if result.player_id == player.id]
        total = sum(points)
        stats.append(
            GlobalStats(
                player_id=player.id,
                total_points=total,
                races_won=wins.get(player.id, 0),
                average_points=total / len(points) if points else 0.0,
            )
        )
    return stats


def compute_league_summary(
    players: Sequence[Player],
    stats: Iterable[GlobalStats],
    races: Sequence[Race],
    results: Iterable[Result] = (),
) -> LeagueSummary:
    """Summarise the league: leader, progress, most wins and best race score.

    Ties for the lead go to the player listed first in ``players``.
    """

    stats_by_player = {entry.player_id: entry for entry in stats}
    players_by_id = {player.id: player for player in players}

    def _stat(player: Player) -> GlobalStats:
        return stats_by_player.get(player.id, GlobalStats(player_id=player.id))

    leader: Optional[Player] = None
    for player in players:
        if leader is None or _stat(player).total_points > _stat(leader).total_points:
            leader = player

    most_wins = max((_stat(player).races_won for player in players), default=0)
    if most_wins > 0:
        most_wins_players: Tuple[str, ...] = tuple(
            player.name for player in players if _stat(player).races_won == most_wins
        )
    else:
        most_wins_players = (NO_DATA,)

    top_score = 0
    top_score_player_id: Optional[str] = None
    for result in results:
        if result.points > top_score:
            top_score = result.points
            top_score_player_id = result.player_id
    top_player = players_by_id.get(top_score_player_id) if top_score_player_id else None

    return LeagueSummary(
        leader_name=leader.name if leader else NO_DATA,
        leader_color=leader.color if leader else NO_LEADER_COLOR,
        total_races=len(races),
        completed_races=sum(1 for race in races if race.is_played),
        most_wins_players=most_wins_players,
        most_wins=most_wins,
        top_score=top_score,
        top_score_player=top_player.name if top_player else NO_DATA,
    )


def compute_evolution_series(
    players: Sequence[Player],
    races: Iterable[Race],
    results: Iterable[Result],
) -> List[ChartDataPoint]:
    """Build the cumulative points series, one point per played race."""

    played = sorted((race for race in races if race.is_played), key=lambda race: race.date)
    points: Dict[Tuple[str, str], int] = {
        (result.race_id, result.player_id): result.points for result in results
    }

    running: Dict[str, int] = {player.id: 0 for player in players}
    series: List[ChartDataPoint] = []
    for race in played:
        for player in players:
            running[player.id] += points.get((race.id, player.id), 0)
        series.append(
            ChartDataPoint(
                race_id=race.id,
                race_name=race.name,
                date=race.date,
                totals=dict(running),
            )
        )
    return series


def filter_races_by_category(races: Iterable[Race], category_id: Optional[str] = None) -> List[Race]:
    """Return races ordered by date, optionally restricted to one category."""

    ordered = sorted(races, key=lambda race: race.date)
    if not category_id:
        return ordered
    return [race for race in ordered if race.category_id == category_id]


def rank_standings(stats: Iterable[GlobalStats]) -> List[GlobalStats]:
    """Order stats for the general classification, best total first."""

    return sorted(stats, key=lambda entry: entry.total_points, reverse=True)


def rank_mortadelas(entries: Iterable[MortadelaEntry]) -> List[MortadelaEntry]:
    return sorted(entries, key=lambda entry: entry.points, reverse=True)


__all__ = [
    "compute_evolution_series",
    "compute_global_stats",
    "compute_league_summary",
    "filter_races_by_category",
    "race_winner_ids",
    "rank_mortadelas",
    "rank_standings",
]
