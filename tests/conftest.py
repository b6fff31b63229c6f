"""Shared fixtures for the cycling_league tests."""

from datetime import date

import pytest

from cycling_league.models import Category, Player, Race, RaceStatus, Result
from cycling_league.repository import LeagueRepository


@pytest.fixture
def season():
    """The bundled 2026 season."""
    return LeagueRepository.season_2026()


@pytest.fixture
def players():
    return [
        Player(id="p1", name="US POSTAL", color="#1e40af"),
        Player(id="p2", name="VOXDALÁS", color="#fbbf24"),
        Player(id="p3", name="TEAM CHARLOTTE", color="#3b82f6"),
        Player(id="p4", name="LA GALIA", color="#ef4444"),
    ]


@pytest.fixture
def categories():
    return [Category(id="c3", name="CATEGORÍA 3"), Category(id="c4", name="CATEGORÍA 4")]


def make_race(race_id, day, status=RaceStatus.PLAYED, category_id="c4", name=None):
    return Race(
        id=race_id,
        name=name or race_id,
        category_id=category_id,
        date=date(2026, 1, day),
        status=status,
    )


def make_results(race_id, points_by_player):
    return [
        Result(id=f"{race_id}_{player_id}", race_id=race_id, player_id=player_id, points=points)
        for player_id, points in points_by_player.items()
    ]
