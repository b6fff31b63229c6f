"""
Tests for the standings aggregator.

Covers per-player stats, the league summary, the cumulative evolution
series and the race filters, both on small hand-built fixtures and on the
bundled 2026 season.
"""

from datetime import date

import pytest

from cycling_league.models import NO_DATA, GlobalStats, MortadelaEntry, RaceStatus
from cycling_league.standings import (
    compute_evolution_series,
    compute_global_stats,
    compute_league_summary,
    filter_races_by_category,
    race_winner_ids,
    rank_mortadelas,
    rank_standings,
)

from .conftest import make_race, make_results


def _stats_by_player(stats):
    return {entry.player_id: entry for entry in stats}


# =============================================================================
# Test compute_global_stats
# =============================================================================

class TestComputeGlobalStats:
    """Tests for compute_global_stats."""

    def test_single_race_winner(self, players):
        """Tour Down Under: 6 is the max, only p1 is credited a win."""
        race = make_race("r_tdu", 20, category_id="c3", name="Tour Down Under")
        results = make_results("r_tdu", {"p1": 6, "p2": 1, "p3": 3, "p4": 2})

        stats = _stats_by_player(compute_global_stats(players, [race], results))

        assert stats["p1"].total_points == 6
        assert stats["p1"].races_won == 1
        assert stats["p2"].races_won == 0
        assert stats["p3"].races_won == 0
        assert stats["p4"].races_won == 0

    def test_one_entry_per_player_in_order(self, players):
        stats = compute_global_stats(players, [], [])
        assert [entry.player_id for entry in stats] == ["p1", "p2", "p3", "p4"]

    def test_average_without_results_is_zero(self, players):
        """A player with no results averages exactly 0."""
        race = make_race("r1", 1)
        results = make_results("r1", {"p1": 4, "p2": 2})

        stats = _stats_by_player(compute_global_stats(players, [race], results))

        assert stats["p3"].average_points == 0.0
        assert stats["p3"].total_points == 0
        assert stats["p1"].average_points == 4.0

    def test_average_over_results(self, players):
        races = [make_race("r1", 1), make_race("r2", 2)]
        results = make_results("r1", {"p1": 3}) + make_results("r2", {"p1": 0})

        stats = _stats_by_player(compute_global_stats(players, races, results))

        assert stats["p1"].average_points == pytest.approx(1.5)

    def test_all_zero_race_credits_no_wins(self, players):
        race = make_race("r1", 1)
        results = make_results("r1", {"p1": 0, "p2": 0, "p3": 0, "p4": 0})

        stats = compute_global_stats(players, [race], results)

        assert all(entry.races_won == 0 for entry in stats)

    def test_tied_max_credits_every_tied_player(self, players):
        race = make_race("r1", 1)
        results = make_results("r1", {"p1": 5, "p2": 5, "p3": 1})

        stats = _stats_by_player(compute_global_stats(players, [race], results))

        assert stats["p1"].races_won == 1
        assert stats["p2"].races_won == 1
        assert stats["p3"].races_won == 0

    def test_played_race_without_results_is_skipped(self, players):
        races = [make_race("r1", 1), make_race("r2", 2)]
        results = make_results("r1", {"p1": 2, "p2": 1})

        stats = _stats_by_player(compute_global_stats(players, races, results))

        assert stats["p1"].races_won == 1

    def test_wins_ignore_races_not_played(self, players):
        race = make_race("r1", 1, status=RaceStatus.UPCOMING)
        results = make_results("r1", {"p1": 2})

        stats = _stats_by_player(compute_global_stats(players, [race], results))

        assert stats["p1"].races_won == 0
        assert stats["p1"].total_points == 2

    def test_sum_of_totals_matches_sum_of_points(self, season):
        stats = compute_global_stats(season.list_players(), season.list_races(), season.list_results())

        assert sum(entry.total_points for entry in stats) == sum(
            result.points for result in season.list_results()
        )

    def test_season_2026(self, season):
        stats = _stats_by_player(
            compute_global_stats(season.list_players(), season.list_races(), season.list_results())
        )

        assert [stats[p].total_points for p in ("p1", "p2", "p3", "p4")] == [18, 2, 10, 12]
        assert [stats[p].races_won for p in ("p1", "p2", "p3", "p4")] == [2, 0, 1, 2]
        assert stats["p1"].average_points == pytest.approx(3.6)

    def test_inputs_not_mutated(self, players):
        races = [make_race("r1", 1)]
        results = make_results("r1", {"p1": 1})
        snapshot = (list(players), list(races), list(results))

        compute_global_stats(players, races, results)

        assert (players, races, results) == snapshot


# =============================================================================
# Test compute_league_summary
# =============================================================================

class TestComputeLeagueSummary:
    """Tests for compute_league_summary."""

    def test_season_2026(self, season):
        players = season.list_players()
        races = season.list_races()
        results = season.list_results()
        stats = compute_global_stats(players, races, results)

        summary = compute_league_summary(players, stats, races, results)

        assert summary.leader_name == "US POSTAL"
        assert summary.leader_color == "#1e40af"
        assert summary.total_races == 21
        assert summary.completed_races == 5
        assert summary.most_wins_players == ("US POSTAL", "LA GALIA")
        assert summary.most_wins == 2
        assert summary.top_score == 7
        assert summary.top_score_player == "US POSTAL"

    def test_leader_after_first_four_played_races(self, season):
        """Without Tour de Omán, US POSTAL leads with 17 points."""
        players = season.list_players()
        races = [race for race in season.list_races() if race.id != "r_oman"]
        results = [result for result in season.list_results() if result.race_id != "r_oman"]
        stats = compute_global_stats(players, races, results)

        summary = compute_league_summary(players, stats, races, results)

        assert _stats_by_player(stats)["p1"].total_points == 17
        assert summary.leader_name == "US POSTAL"
        assert summary.completed_races == 4

    def test_leader_tie_goes_to_first_listed_player(self, players):
        stats = [
            GlobalStats(player_id="p1", total_points=3),
            GlobalStats(player_id="p2", total_points=9),
            GlobalStats(player_id="p3", total_points=9),
            GlobalStats(player_id="p4", total_points=1),
        ]

        summary = compute_league_summary(players, stats, [])

        assert summary.leader_name == "VOXDALÁS"

    def test_no_wins_yields_placeholder(self, players):
        stats = [GlobalStats(player_id=player.id) for player in players]

        summary = compute_league_summary(players, stats, [])

        assert summary.most_wins_players == (NO_DATA,)
        assert summary.most_wins == 0
        assert summary.top_score == 0
        assert summary.top_score_player == NO_DATA

    def test_empty_player_list(self):
        race = make_race("r1", 1)

        summary = compute_league_summary([], [], [race])

        assert summary.leader_name == NO_DATA
        assert summary.leader_color == "#fff"
        assert summary.most_wins_players == (NO_DATA,)
        assert summary.total_races == 1
        assert summary.completed_races == 1

    def test_stable_across_calls(self, season):
        players = season.list_players()
        races = season.list_races()
        results = season.list_results()
        stats = compute_global_stats(players, races, results)

        first = compute_league_summary(players, stats, races, results)
        second = compute_league_summary(players, stats, races, results)

        assert first == second

    def test_top_score_keeps_first_player_reaching_it(self, players):
        race = make_race("r1", 1)
        results = make_results("r1", {"p3": 5, "p1": 5})
        stats = compute_global_stats(players, [race], results)

        summary = compute_league_summary(players, stats, [race], results)

        assert summary.top_score == 5
        assert summary.top_score_player == "TEAM CHARLOTTE"


# =============================================================================
# Test compute_evolution_series
# =============================================================================

class TestComputeEvolutionSeries:
    """Tests for compute_evolution_series."""

    def test_season_2026(self, season):
        players = season.list_players()
        series = compute_evolution_series(players, season.list_races(), season.list_results())

        assert [point.race_id for point in series] == [
            "r_tdu",
            "r_alula",
            "r_besseges",
            "r_valenciana",
            "r_oman",
        ]
        assert [point.totals["p1"] for point in series] == [6, 8, 10, 17, 18]
        assert series[-1].totals == {"p1": 18, "p2": 2, "p3": 10, "p4": 12}
        assert series[0].date == date(2026, 1, 20)
        assert series[0].race_name == "Tour Down Under"

    def test_running_totals_never_decrease(self, season):
        series = compute_evolution_series(
            season.list_players(), season.list_races(), season.list_results()
        )

        for before, after in zip(series, series[1:]):
            for player_id, total in before.totals.items():
                assert after.totals[player_id] >= total

    def test_missing_result_carries_total_over(self, players):
        races = [make_race("r1", 1), make_race("r2", 2)]
        results = make_results("r1", {"p1": 3, "p2": 1}) + make_results("r2", {"p1": 2})

        series = compute_evolution_series(players, races, results)

        assert series[1].totals["p2"] == 1
        assert series[1].totals["p3"] == 0
        assert series[1].totals["p1"] == 5

    def test_sorted_by_date_with_stable_ties(self, players):
        races = [
            make_race("late", 9),
            make_race("same_a", 4),
            make_race("early", 1),
            make_race("same_b", 4),
        ]

        series = compute_evolution_series(players, races, [])

        assert [point.race_id for point in series] == ["early", "same_a", "same_b", "late"]

    def test_upcoming_races_are_excluded(self, players):
        races = [make_race("r1", 1), make_race("r2", 2, status=RaceStatus.UPCOMING)]

        series = compute_evolution_series(players, races, [])

        assert [point.race_id for point in series] == ["r1"]

    def test_totals_by_name(self, season):
        players = season.list_players()
        series = compute_evolution_series(players, season.list_races(), season.list_results())

        assert series[0].totals_by_name(players) == {
            "US POSTAL": 6,
            "VOXDALÁS": 1,
            "TEAM CHARLOTTE": 3,
            "LA GALIA": 2,
        }

    def test_idempotent(self, season):
        args = (season.list_players(), season.list_races(), season.list_results())
        assert compute_evolution_series(*args) == compute_evolution_series(*args)


# =============================================================================
# Test filter_races_by_category
# =============================================================================

class TestFilterRacesByCategory:
    """Tests for filter_races_by_category."""

    def test_no_filter_returns_all_sorted(self, season):
        races = filter_races_by_category(season.list_races(), None)

        assert len(races) == 21
        assert [race.date for race in races] == sorted(race.date for race in races)
        assert races == filter_races_by_category(season.list_races(), None)

    def test_category_filter(self, season):
        races = filter_races_by_category(season.list_races(), "c1")

        assert [race.id for race in races] == ["r_giro", "r_tour", "r_vuelta"]

    def test_same_day_races_keep_calendar_order(self, season):
        races = filter_races_by_category(season.list_races(), "c4")

        assert [race.id for race in races] == [
            "r_alula",
            "r_besseges",
            "r_valenciana",
            "r_oman",
            "r_alg",
            "r_sol",
            "r_gc",
        ]

    def test_unknown_category_is_empty(self, season):
        assert filter_races_by_category(season.list_races(), "c99") == []

    def test_empty_string_means_no_filter(self, season):
        assert len(filter_races_by_category(season.list_races(), "")) == 21


# =============================================================================
# Test rankings and winners
# =============================================================================

class TestRankings:
    """Tests for the ranking helpers."""

    def test_rank_standings_best_first_stable(self):
        stats = [
            GlobalStats(player_id="a", total_points=4),
            GlobalStats(player_id="b", total_points=9),
            GlobalStats(player_id="c", total_points=4),
        ]

        assert [entry.player_id for entry in rank_standings(stats)] == ["b", "a", "c"]

    def test_rank_mortadelas(self):
        entries = [
            MortadelaEntry(cyclist="Rider A", points=20, player_id="p1", race_name="UAE Tour"),
            MortadelaEntry(cyclist="Rider B", points=45, player_id="p2", race_name="Alula Tour"),
        ]

        assert [entry.cyclist for entry in rank_mortadelas(entries)] == ["Rider B", "Rider A"]

    def test_race_winner_ids(self, season):
        assert race_winner_ids("r_alula", season.list_results()) == ["p4"]
        assert race_winner_ids("r_uae", season.list_results()) == []

    def test_race_winner_ids_all_zero(self):
        results = make_results("r1", {"p1": 0, "p2": 0})
        assert race_winner_ids("r1", results) == []
