"""Players, calendar and scored results of the 2026 season."""

from __future__ import annotations

from datetime import date
from typing import Tuple

from .models import Category, MortadelaEntry, Player, Race, RaceStatus, Result, WithdrawalRecord


PLAYED = RaceStatus.PLAYED
UPCOMING = RaceStatus.UPCOMING

PLAYERS: Tuple[Player, ...] = (
    Player(id="p1", name="US POSTAL", color="#1e40af"),
    Player(id="p2", name="VOXDALÁS", color="#fbbf24"),
    Player(id="p3", name="TEAM CHARLOTTE", color="#3b82f6"),
    Player(id="p4", name="LA GALIA", color="#ef4444"),
)

CATEGORIES: Tuple[Category, ...] = (
    Category(id="c1", name="CATEGORÍA 1 (15-10-7-4)"),
    Category(id="c2", name="CATEGORÍA 2 (9-6-4-2)"),
    Category(id="c3", name="CATEGORÍA 3 (5-3-2-1)"),
    Category(id="c4", name="CATEGORÍA 4 (3-2-1-0)"),
)

RACES: Tuple[Race, ...] = (
    # Played
    Race("r_tdu", "Tour Down Under", "c3", date(2026, 1, 20), PLAYED),
    Race("r_alula", "Alula Tour", "c4", date(2026, 1, 27), PLAYED),
    Race("r_besseges", "Etoile de Bessèges", "c4", date(2026, 2, 4), PLAYED),
    Race("r_valenciana", "Comunidad Valenciana", "c4", date(2026, 2, 4), PLAYED),
    Race("r_oman", "Tour de Omán", "c4", date(2026, 2, 10), PLAYED),
    # Upcoming
    Race("r_uae", "UAE Tour", "c3", date(2026, 2, 16), UPCOMING),
    Race("r_alg", "Vuelta al Algarve", "c4", date(2026, 2, 18), UPCOMING),
    Race("r_sol", "Ruta del Sol", "c4", date(2026, 2, 18), UPCOMING),
    Race("r_pn", "París-Niza", "c2", date(2026, 3, 8), UPCOMING),
    Race("r_ta", "Tirreno-Adriático", "c2", date(2026, 3, 9), UPCOMING),
    Race("r_cat", "Volta a Catalunya", "c2", date(2026, 3, 23), UPCOMING),
    Race("r_itz", "Itzulia Basque Country", "c2", date(2026, 4, 6), UPCOMING),
    Race("r_gc", "O Gran Camiño", "c4", date(2026, 4, 14), UPCOMING),
    Race("r_rom", "Tour de Romandía", "c3", date(2026, 4, 28), UPCOMING),
    Race("r_giro", "Giro d'Italia", "c1", date(2026, 5, 8), UPCOMING),
    Race("r_dau", "Critérium du Dauphiné", "c2", date(2026, 6, 7), UPCOMING),
    Race("r_sui", "Tour de Suiza", "c3", date(2026, 6, 17), UPCOMING),
    Race("r_tour", "Tour de France", "c1", date(2026, 7, 4), UPCOMING),
    Race("r_pol", "Tour de Polonia", "c3", date(2026, 8, 3), UPCOMING),
    Race("r_ren", "Renewi Tour", "c3", date(2026, 8, 19), UPCOMING),
    Race("r_vuelta", "Vuelta a España", "c1", date(2026, 8, 22), UPCOMING),
)


def _race_results(race_id: str, first_id: int, points: Tuple[int, int, int, int]) -> Tuple[Result, ...]:
    return tuple(
        Result(id=f"res_{first_id + offset}", race_id=race_id, player_id=player.id, points=value)
        for offset, (player, value) in enumerate(zip(PLAYERS, points))
    )


RESULTS: Tuple[Result, ...] = (
    _race_results("r_tdu", 1, (6, 1, 3, 2))
    + _race_results("r_alula", 5, (2, 0, 1, 3))
    + _race_results("r_besseges", 9, (2, 1, 0, 4))
    + _race_results("r_valenciana", 13, (7, 0, 2, 1))
    + _race_results("r_oman", 17, (1, 0, 4, 2))
)

# Filled in by hand as the season goes; empty until the first entries arrive.
MORTADELAS: Tuple[MortadelaEntry, ...] = ()
WITHDRAWALS: Tuple[WithdrawalRecord, ...] = ()


__all__ = ["CATEGORIES", "MORTADELAS", "PLAYERS", "RACES", "RESULTS", "WITHDRAWALS"]
