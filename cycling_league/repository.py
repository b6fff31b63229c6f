"""In-memory repository for the cycling_league domain models."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, TypeVar

from .models import Category, MortadelaEntry, Player, Race, Result, WithdrawalRecord


_T = TypeVar("_T")


def _unique_ids(kind: str, items: Iterable[_T]) -> Tuple[_T, ...]:
    items = tuple(items)
    seen = set()
    for item in items:
        item_id = item.id
        if item_id in seen:
            raise ValueError(f"Duplicate {kind} id: {item_id}")
        seen.add(item_id)
    return items


class LeagueRepository:
    """Immutable snapshot of the league's raw facts.

    The collections are validated once at construction, so every consumer can
    rely on foreign keys resolving and on at most one result per race and
    player.
    """

    def __init__(
        self,
        players: Iterable[Player],
        categories: Iterable[Category],
        races: Iterable[Race],
        results: Iterable[Result],
        *,
        mortadelas: Iterable[MortadelaEntry] = (),
        withdrawals: Iterable[WithdrawalRecord] = (),
    ) -> None:
        self._players = _unique_ids("player", players)
        self._categories = _unique_ids("category", categories)
        self._races = _unique_ids("race", races)
        self._results = _unique_ids("result", results)
        self._mortadelas = tuple(mortadelas)
        self._withdrawals = tuple(withdrawals)
        self._validate()

    @classmethod
    def season_2026(cls) -> "LeagueRepository":
        """Build the repository from the bundled 2026 season data."""

        from . import fixtures

        return cls(
            fixtures.PLAYERS,
            fixtures.CATEGORIES,
            fixtures.RACES,
            fixtures.RESULTS,
            mortadelas=fixtures.MORTADELAS,
            withdrawals=fixtures.WITHDRAWALS,
        )

    def _validate(self) -> None:
        player_ids = {player.id for player in self._players}
        category_ids = {category.id for category in self._categories}
        races = {race.id: race for race in self._races}

        for race in self._races:
            if race.category_id not in category_ids:
                raise ValueError(f"Race {race.id} references unknown category: {race.category_id}")

        scored = set()
        for result in self._results:
            race = races.get(result.race_id)
            if race is None:
                raise ValueError(f"Result {result.id} references unknown race: {result.race_id}")
            if result.player_id not in player_ids:
                raise ValueError(f"Result {result.id} references unknown player: {result.player_id}")
            if not race.is_played:
                raise ValueError(f"Result {result.id} belongs to upcoming race: {race.id}")
            if result.points < 0:
                raise ValueError(f"Result {result.id} has negative points: {result.points}")
            key = (result.race_id, result.player_id)
            if key in scored:
                raise ValueError(
                    f"Duplicate result for race {result.race_id} and player {result.player_id}"
                )
            scored.add(key)

        for entry in self._mortadelas:
            if entry.player_id not in player_ids:
                raise ValueError(f"Mortadela {entry.cyclist} references unknown player: {entry.player_id}")
        for record in self._withdrawals:
            if record.player_id not in player_ids:
                raise ValueError(f"Withdrawal record references unknown player: {record.player_id}")

    # Player operations -------------------------------------------------
    def list_players(self) -> List[Player]:
        return list(self._players)

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((player for player in self._players if player.id == player_id), None)

    # Category operations -----------------------------------------------
    def list_categories(self) -> List[Category]:
        return list(self._categories)

    def get_category(self, category_id: str) -> Optional[Category]:
        return next((category for category in self._categories if category.id == category_id), None)

    # Race operations ---------------------------------------------------
    def list_races(self) -> List[Race]:
        return list(self._races)

    def get_race(self, race_id: str) -> Optional[Race]:
        return next((race for race in self._races if race.id == race_id), None)

    # Result operations -------------------------------------------------
    def list_results(self, race_id: Optional[str] = None) -> List[Result]:
        if race_id is None:
            return list(self._results)
        return [result for result in self._results if result.race_id == race_id]

    # Records -----------------------------------------------------------
    def list_mortadelas(self) -> List[MortadelaEntry]:
        return list(self._mortadelas)

    def list_withdrawals(self) -> List[WithdrawalRecord]:
        return list(self._withdrawals)


__all__ = ["LeagueRepository"]
