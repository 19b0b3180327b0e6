"""Elo facade bundling the calculator and estimator with one configuration."""

from typing import Optional, Sequence, Union

import numpy as np

from ..config import EloConfig
from ._numba_core import compute_all_vs_all_matrix
from .calculator import RatingChange, compute_rating_change
from .probability import (
    ProbabilityLevel,
    WinProbability,
    estimate_win_probabilities,
    estimate_win_probability,
    probability_level,
)


class Elo:
    """
    Fixed-K Elo rating engine.

    All methods are pure: the engine holds configuration only, never
    ratings, so one instance can be shared across threads.

    Parameters:
        initial_rating: Starting rating for new players (default: 1200)
        k_factor: Maximum rating change per match (default: 32)
        scale: Rating difference where one player is 10x stronger (default: 400)
        shutout_bonus: Flat rating bonus for a 5-0 win (default: 10)

    Example:
        >>> elo = Elo(k_factor=32)
        >>> change = elo.rate(1000, 1400, winner_score=5, loser_score=0)
        >>> change.winner_delta, change.shutout_bonus
        (39, 10)
        >>> elo.predict(1216, 1184).probability_a
        55
    """

    def __init__(
        self,
        initial_rating: int = 1200,
        k_factor: float = 32.0,
        scale: float = 400.0,
        shutout_bonus: int = 10,
        config: Optional[EloConfig] = None,
    ):
        self.config = config or EloConfig(
            initial_rating=initial_rating,
            k_factor=k_factor,
            scale=scale,
            shutout_bonus=shutout_bonus,
        )

    def rate(
        self,
        winner_rating: int,
        loser_rating: int,
        winner_score: Optional[int] = None,
        loser_score: Optional[int] = None,
    ) -> RatingChange:
        """Rating change for a completed match."""
        return compute_rating_change(
            winner_rating,
            loser_rating,
            winner_score=winner_score,
            loser_score=loser_score,
            config=self.config,
        )

    def predict(self, rating_a: int, rating_b: int) -> WinProbability:
        """Win percentages for an unplayed pairing."""
        return estimate_win_probability(rating_a, rating_b, self.config)

    def predict_batch(
        self,
        ratings_a: Union[Sequence[int], np.ndarray],
        ratings_b: Union[Sequence[int], np.ndarray],
    ) -> np.ndarray:
        """Win percentages for many pairings, shape (N, 2)."""
        return estimate_win_probabilities(ratings_a, ratings_b, self.config)

    def level(self, probability: int) -> ProbabilityLevel:
        return probability_level(probability, self.config)

    def probability_matrix(self, ratings: Union[Sequence[int], np.ndarray]) -> np.ndarray:
        """Matrix where result[i,j] = P(player i beats player j)."""
        r = np.ascontiguousarray(ratings, dtype=np.float64)
        return compute_all_vs_all_matrix(r, self.config.scale)

    def __repr__(self) -> str:
        return (
            f"Elo(k_factor={self.config.k_factor}, "
            f"initial_rating={self.config.initial_rating}, "
            f"shutout_bonus={self.config.shutout_bonus})"
        )
