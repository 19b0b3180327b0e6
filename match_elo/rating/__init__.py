"""Rating calculator and win probability estimator."""

from .calculator import (
    RatingChange,
    compute_rating_change,
    describe_rating_change,
    expected_points,
    format_rating_change,
    is_shutout,
)
from .elo import Elo
from .probability import (
    ProbabilityLevel,
    WinProbability,
    estimate_win_probabilities,
    estimate_win_probability,
    probability_level,
    probability_levels,
)

__all__ = [
    "Elo",
    "RatingChange",
    "compute_rating_change",
    "describe_rating_change",
    "expected_points",
    "format_rating_change",
    "is_shutout",
    "ProbabilityLevel",
    "WinProbability",
    "estimate_win_probabilities",
    "estimate_win_probability",
    "probability_level",
    "probability_levels",
]
