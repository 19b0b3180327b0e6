"""Tests for the rating calculator and win probability estimator."""

import numpy as np
import pytest

from match_elo import (
    Elo,
    EloConfig,
    ProbabilityLevel,
    compute_rating_change,
    describe_rating_change,
    estimate_win_probabilities,
    estimate_win_probability,
    expected_points,
    format_rating_change,
    is_shutout,
    probability_level,
)


# =============================================================================
# Win probability
# =============================================================================

@pytest.mark.parametrize("rating", [0, 100, 1200, 1850])
def test_equal_ratings_are_even(rating):
    prob = estimate_win_probability(rating, rating)
    assert (prob.probability_a, prob.probability_b) == (50, 50)


def test_higher_rating_is_favored_and_grows_with_gap():
    previous = 50
    for gap in range(50, 401, 50):
        prob = estimate_win_probability(1200 + gap, 1200)
        assert prob.probability_a > previous
        previous = prob.probability_a


def test_known_probabilities():
    slight = estimate_win_probability(1216, 1184)
    assert (slight.probability_a, slight.probability_b) == (55, 45)

    large = estimate_win_probability(1300, 1100)
    assert (large.probability_a, large.probability_b) == (76, 24)

    extreme = estimate_win_probability(1500, 1000)
    assert extreme.probability_a > 90
    assert extreme.probability_b < 10

    reversed_ = estimate_win_probability(1184, 1216)
    assert reversed_.probability_a < 50 < reversed_.probability_b


def test_percentages_sum_close_to_hundred():
    for a, b in [(1250, 1180), (1203, 1200), (1337, 1024), (990, 1410)]:
        prob = estimate_win_probability(a, b)
        assert 99 <= prob.probability_a + prob.probability_b <= 101


def test_expected_points_reported_with_probability():
    prob = estimate_win_probability(1200, 1200)
    assert prob.expected_points_a == 16
    assert prob.expected_points_b == 16

    upset = estimate_win_probability(1000, 1400)
    assert upset.expected_points_a == 29
    assert upset.expected_points_b == 3


def test_batch_matches_scalar():
    rng = np.random.RandomState(7)
    ratings_a = rng.randint(900, 1600, 200)
    ratings_b = rng.randint(900, 1600, 200)

    batch = estimate_win_probabilities(ratings_a, ratings_b)
    assert batch.shape == (200, 2)

    for i in range(200):
        prob = estimate_win_probability(int(ratings_a[i]), int(ratings_b[i]))
        assert batch[i, 0] == prob.probability_a
        assert batch[i, 1] == prob.probability_b


def test_batch_rejects_mismatched_shapes():
    with pytest.raises(ValueError):
        estimate_win_probabilities([1200, 1300], [1200])


def test_probability_level_boundaries():
    assert probability_level(53) is ProbabilityLevel.FAVORITE
    assert probability_level(52) is ProbabilityLevel.EVEN
    assert probability_level(50) is ProbabilityLevel.EVEN
    assert probability_level(48) is ProbabilityLevel.EVEN
    assert probability_level(47) is ProbabilityLevel.UNDERDOG
    assert probability_level(100) == "favorite"
    assert probability_level(0) == "underdog"


def test_probability_level_thresholds_are_configurable():
    config = EloConfig(favorite_threshold=60, underdog_threshold=40)
    assert probability_level(55, config) is ProbabilityLevel.EVEN
    assert probability_level(61, config) is ProbabilityLevel.FAVORITE


# =============================================================================
# Rating changes
# =============================================================================

def test_upset_swings_more():
    change = compute_rating_change(1000, 1400)
    assert change.winner_delta > 20
    assert change.loser_delta < -20
    assert change.winner_new_rating == 1000 + change.winner_delta
    assert change.loser_new_rating == 1400 + change.loser_delta
    assert change.expected_win_probability == pytest.approx(1 / 11)


def test_expected_win_swings_little():
    change = compute_rating_change(1400, 1000)
    assert change.winner_delta < 10
    assert change.loser_delta > -10


def test_equal_ratings_give_half_k():
    change = compute_rating_change(1200, 1200)
    assert change.winner_delta == 16
    assert change.loser_delta == -16
    assert change.winner_delta == -change.loser_delta
    assert change.shutout_bonus is None

    zero = compute_rating_change(0, 0)
    assert (zero.winner_delta, zero.loser_delta) == (16, -16)


def test_close_ratings_are_symmetric():
    change = compute_rating_change(1200, 1220)
    assert 10 < abs(change.winner_delta) < 20
    assert change.winner_delta == -change.loser_delta


def test_k_factor_override():
    assert compute_rating_change(1200, 1200, k_factor=16).winner_delta == 8
    config = EloConfig(k_factor=40)
    assert compute_rating_change(1200, 1200, config=config).winner_delta == 20


def test_shutout_bonus():
    with_bonus = compute_rating_change(1200, 1200, 32, 5, 0)
    without_bonus = compute_rating_change(1200, 1200, 32, 5, 3)

    assert with_bonus.shutout_bonus == 10
    assert without_bonus.shutout_bonus is None
    assert with_bonus.winner_delta == without_bonus.winner_delta + 10
    assert with_bonus.loser_delta == without_bonus.loser_delta - 10
    assert with_bonus.winner_new_rating == 1226
    assert with_bonus.loser_new_rating == 1174


def test_no_shutout_for_close_games_or_missing_scores():
    assert compute_rating_change(1200, 1200, 32, 5, 4).shutout_bonus is None
    assert compute_rating_change(1200, 1200, 32, 6, 0).shutout_bonus is None
    assert compute_rating_change(1200, 1200, 32, 5, None).shutout_bonus is None
    assert not is_shutout(None, 0)
    assert is_shutout(5, 0)


def test_shutout_upset_adds_exactly_the_bonus():
    with_bonus = compute_rating_change(1000, 1400, 32, 5, 0)
    without_bonus = compute_rating_change(1000, 1400, 32)

    assert without_bonus.winner_delta == 29
    assert with_bonus.winner_delta - without_bonus.winner_delta == with_bonus.shutout_bonus
    assert without_bonus.loser_delta - with_bonus.loser_delta == with_bonus.shutout_bonus


def test_proportional_shutout_bonus():
    config = EloConfig(shutout_bonus_ratio=0.5)
    change = compute_rating_change(1200, 1200, winner_score=5, loser_score=0, config=config)
    assert change.shutout_bonus == 8
    assert change.winner_delta == 24
    assert change.loser_delta == -24


def test_custom_shutout_score():
    config = EloConfig(shutout_score=(11, 0))
    assert compute_rating_change(1200, 1200, 32, 11, 0, config=config).shutout_bonus == 10
    assert compute_rating_change(1200, 1200, 32, 5, 0, config=config).shutout_bonus is None


def test_expected_points():
    assert expected_points(1200, 1200) == 16
    assert expected_points(1400, 1000) == 3
    assert expected_points(1200, 1200, k_factor=20) == 10


def test_format_and_describe_changes():
    assert format_rating_change(16) == "+16"
    assert format_rating_change(-16) == "-16"
    assert format_rating_change(0) == "+0"

    assert describe_rating_change(-31) == "massive"
    assert describe_rating_change(20) == "large"
    assert describe_rating_change(12) == "moderate"
    assert describe_rating_change(-5) == "small"
    assert describe_rating_change(4) == "minimal"


# =============================================================================
# Elo facade
# =============================================================================

def test_elo_facade_uses_its_config():
    elo = Elo(k_factor=16, shutout_bonus=4)
    change = elo.rate(1200, 1200, winner_score=5, loser_score=0)
    assert change.winner_delta == 12
    assert change.shutout_bonus == 4

    assert elo.predict(1216, 1184).probability_a == 55
    assert elo.level(60) is ProbabilityLevel.FAVORITE
    assert "k_factor=16" in repr(elo)


def test_probability_matrix():
    elo = Elo()
    matrix = elo.probability_matrix([1400, 1200, 1000])

    assert matrix.shape == (3, 3)
    np.testing.assert_allclose(np.diag(matrix), 0.5)
    np.testing.assert_allclose(matrix + matrix.T, 1.0)
    assert matrix[0, 2] > matrix[0, 1] > 0.5
