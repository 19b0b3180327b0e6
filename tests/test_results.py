"""Tests for player statistics, head-to-head records and standings."""

from datetime import datetime, timedelta

import numpy as np
import pytest

from match_elo import (
    EloConfig,
    MatchLog,
    MatchRecord,
    Standings,
    compute_player_stats,
    head_to_head,
)

START = datetime(2025, 1, 5, 10)


def generate_results(player_id, outcomes, opponents=("ben",)):
    """One record per outcome ('W' or 'L'), alternating opponents, ±16 each."""
    records = []
    for i, outcome in enumerate(outcomes):
        opponent = opponents[i % len(opponents)]
        won = outcome == "W"
        delta = 16 if won else -16
        records.append(
            MatchRecord(
                id=f"m{i}",
                session_date="2025-01-05",
                player1_id=player_id,
                player1_name=player_id.title(),
                player1_score=5 if won else 2,
                player1_delta=delta,
                player2_id=opponent,
                player2_name=opponent.title(),
                player2_score=2 if won else 5,
                player2_delta=-delta,
                winner_id=player_id if won else opponent,
                played_at=START + timedelta(hours=i),
            )
        )
    return records


# =============================================================================
# Player stats
# =============================================================================

def test_stats_and_streaks():
    records = generate_results("ana", "WWLLLW")
    stats = compute_player_stats(records, "ana", current_rating=1200)

    assert stats.total_matches == 6
    assert stats.wins == 3
    assert stats.losses == 3
    assert stats.win_rate == pytest.approx(0.5)
    assert stats.current_streak == 1
    assert stats.longest_win_streak == 2
    assert stats.longest_lose_streak == 3
    assert stats.highest_rating == 1232
    assert stats.lowest_rating == 1184


def test_losing_streak_is_negative():
    stats = compute_player_stats(generate_results("ana", "WLL"), "ana", 1184)
    assert stats.current_streak == -2


def test_stats_without_matches():
    stats = compute_player_stats([], "ana", config=EloConfig(initial_rating=1000))
    assert stats.total_matches == 0
    assert stats.win_rate == 0.0
    assert stats.current_streak == 0
    assert stats.highest_rating == stats.lowest_rating == 1000


# =============================================================================
# Head to head
# =============================================================================

def test_head_to_head_counts():
    records = generate_results("ana", "WWLWW", opponents=("ben", "cat"))
    # ben: W, L, W   cat: W, W
    stats = head_to_head(MatchLog(records), "ana")

    assert [s.opponent_id for s in stats] == ["ben", "cat"]
    ben, cat = stats
    assert (ben.wins, ben.losses, ben.total_matches, ben.win_rate) == (2, 1, 3, 67)
    assert (cat.wins, cat.losses, cat.total_matches, cat.win_rate) == (2, 0, 2, 100)
    assert ben.opponent_name == "Ben"


def test_head_to_head_from_opponent_side():
    records = generate_results("ana", "WWL")
    (ana,) = head_to_head(records, "ben")
    assert (ana.wins, ana.losses, ana.win_rate) == (1, 2, 33)


def test_head_to_head_with_unplayed_opponents():
    records = generate_results("ana", "W")
    stats = head_to_head(records, "ana", opponents=["dan", "ana", "ben"])

    assert [s.opponent_id for s in stats] == ["ben", "dan"]
    assert stats[1].total_matches == 0
    assert stats[1].win_rate is None


# =============================================================================
# Standings
# =============================================================================

def sample_standings():
    return Standings.from_ratings(
        {"ana": 1216, "ben": 1184, "cat": 1300, "dan": 1184},
        player_names={"ana": "Ana", "cat": "Cat"},
    )


def test_top_and_rank():
    standings = sample_standings()

    top = standings.top(2)
    assert top["player_id"].to_list() == ["cat", "ana"]
    assert top["rank"].to_list() == [1, 2]
    assert top["name"].to_list() == ["Cat", "Ana"]

    assert standings.rank("cat") == 1
    assert standings.rank("ben") == 3
    assert standings.rank("dan") == 4
    assert standings.to_dataframe().height == 4


def test_predict_and_matchup():
    standings = sample_standings()

    prob = standings.predict("ana", "ben")
    assert (prob.probability_a, prob.probability_b) == (55, 45)

    matchup = standings.matchup("ana", "ben")
    assert matchup["level"].to_list() == ["favorite", "underdog"]
    assert matchup["rating_diff"].to_list() == [32, -32]


def test_unknown_player():
    with pytest.raises(KeyError):
        sample_standings().rank("ghost")


def test_head_to_head_matrix():
    matrix = sample_standings().head_to_head_matrix(["cat", "ana", "ben"])

    assert matrix.columns == ["player_id", "name", "cat", "ana", "ben"]
    assert matrix["name"].to_list() == ["Cat", "Ana", "ben"]
    values = matrix.drop(["player_id", "name"]).to_numpy()
    np.testing.assert_allclose(np.diag(values), 0.5)
    np.testing.assert_allclose(values + values.T, 1.0)
    # row player beats column player
    assert values[0, 2] > 0.5
    assert values[2, 0] < 0.5


def test_mismatched_lengths_rejected():
    with pytest.raises(ValueError):
        Standings(["ana", "ben"], np.array([1200]))


def test_head_to_head_matrix_keeps_players_with_same_name():
    standings = Standings.from_ratings(
        {"p1": 1300, "p2": 1100, "p3": 1200},
        player_names={"p1": "Sam", "p2": "Sam", "p3": "player"},
    )
    matrix = standings.head_to_head_matrix()

    assert matrix.columns == ["player_id", "name", "p1", "p2", "p3"]
    assert matrix["name"].to_list() == ["Sam", "Sam", "player"]
    assert matrix["p2"][0] > 0.5
    assert matrix["p1"][1] < 0.5


def test_head_to_head_matrix_rejects_clashing_ids():
    standings = Standings.from_ratings({"name": 1200, "ben": 1184})
    with pytest.raises(ValueError):
        standings.head_to_head_matrix()
    with pytest.raises(ValueError):
        sample_standings().head_to_head_matrix(["ana", "ana"])
