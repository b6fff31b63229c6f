"""cycling_league package exposing domain models, repository and standings."""

from .models import (
    Category,
    ChartDataPoint,
    GlobalStats,
    LeagueSummary,
    MortadelaEntry,
    Player,
    Race,
    RaceStatus,
    Result,
    WithdrawalRecord,
)
from .repository import LeagueRepository
from .standings import (
    compute_evolution_series,
    compute_global_stats,
    compute_league_summary,
    filter_races_by_category,
)

__all__ = [
    "Category",
    "ChartDataPoint",
    "GlobalStats",
    "LeagueRepository",
    "LeagueSummary",
    "MortadelaEntry",
    "Player",
    "Race",
    "RaceStatus",
    "Result",
    "WithdrawalRecord",
    "compute_evolution_series",
    "compute_global_stats",
    "compute_league_summary",
    "filter_races_by_category",
]
