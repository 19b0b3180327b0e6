"""Pre-match win probability for unplayed pairings."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Union

import numpy as np

from ..config import DEFAULT_CONFIG, EloConfig
from ._numba_core import expected_score, round_half_up, win_percentage, win_percentages_batch


class ProbabilityLevel(str, Enum):
    """Three-way label for a win percentage."""

    FAVORITE = "favorite"
    UNDERDOG = "underdog"
    EVEN = "even"


@dataclass(frozen=True)
class WinProbability:
    """
    Win percentages (0-100) for both sides of a pairing.

    Each side is rounded on its own, so the two may sum to 99, 100 or 101.
    """

    probability_a: int
    probability_b: int
    expected_points_a: int
    expected_points_b: int


def estimate_win_probability(
    rating_a: int,
    rating_b: int,
    config: EloConfig = DEFAULT_CONFIG,
) -> WinProbability:
    """
    Estimate win likelihood for both players from their current ratings.

    Args:
        rating_a: Rating of player A
        rating_b: Rating of player B
        config: Engine configuration (scale and K-factor)

    Returns:
        WinProbability with integer percentages and the points each side
        would gain by winning
    """
    e_a = expected_score(rating_a, rating_b, config.scale)
    e_b = expected_score(rating_b, rating_a, config.scale)
    return WinProbability(
        probability_a=int(win_percentage(rating_a, rating_b, config.scale)),
        probability_b=int(win_percentage(rating_b, rating_a, config.scale)),
        expected_points_a=int(round_half_up(config.k_factor * (1.0 - e_a))),
        expected_points_b=int(round_half_up(config.k_factor * (1.0 - e_b))),
    )


def estimate_win_probabilities(
    ratings_a: Union[Sequence[int], np.ndarray],
    ratings_b: Union[Sequence[int], np.ndarray],
    config: EloConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """
    Win percentages for many pairings at once.

    Returns an (N, 2) int64 array of [probability_a, probability_b] rows.
    """
    a = np.ascontiguousarray(ratings_a, dtype=np.float64)
    b = np.ascontiguousarray(ratings_b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Rating arrays differ in shape: {a.shape} vs {b.shape}")
    return win_percentages_batch(a, b, config.scale)


def probability_level(
    probability: int,
    config: EloConfig = DEFAULT_CONFIG,
) -> ProbabilityLevel:
    """
    Classify a win percentage.

    Above favorite_threshold (52) is a favorite, below underdog_threshold
    (48) an underdog, anything in between (inclusive) is even.
    """
    if probability > config.favorite_threshold:
        return ProbabilityLevel.FAVORITE
    if probability < config.underdog_threshold:
        return ProbabilityLevel.UNDERDOG
    return ProbabilityLevel.EVEN


def probability_levels(
    probabilities: Sequence[int],
    config: EloConfig = DEFAULT_CONFIG,
) -> List[ProbabilityLevel]:
    return [probability_level(int(p), config) for p in probabilities]
