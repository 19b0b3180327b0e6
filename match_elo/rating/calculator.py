"""
Rating changes for a single completed match.

Fixed-K logistic Elo:

- Expected score: E = 1 / (1 + 10^((opponent - player) / scale))
- Winner delta:   round(K * (1 - E_winner))
- Loser delta:    round(K * (0 - E_loser))

The two deltas come from two expected-score formulas and are rounded
separately, so their magnitudes can differ by one point.
"""

from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_CONFIG, EloConfig
from ._numba_core import expected_score, round_half_up


@dataclass(frozen=True)
class RatingChange:
    """Outcome of rating a single match."""

    winner_new_rating: int
    loser_new_rating: int
    winner_delta: int
    loser_delta: int
    expected_win_probability: float
    shutout_bonus: Optional[int] = None  # None means "not a shutout"


def is_shutout(
    winner_score: Optional[int],
    loser_score: Optional[int],
    config: EloConfig = DEFAULT_CONFIG,
) -> bool:
    """True only for the exact configured shutout score, e.g. 5-0."""
    if winner_score is None or loser_score is None:
        return False
    return (winner_score, loser_score) == tuple(config.shutout_score)


def _shutout_bonus(base_winner_delta: int, config: EloConfig) -> int:
    if config.shutout_bonus_ratio is not None:
        return int(round_half_up(config.shutout_bonus_ratio * abs(base_winner_delta)))
    return int(config.shutout_bonus)


def compute_rating_change(
    winner_rating: int,
    loser_rating: int,
    k_factor: Optional[float] = None,
    winner_score: Optional[int] = None,
    loser_score: Optional[int] = None,
    config: EloConfig = DEFAULT_CONFIG,
) -> RatingChange:
    """
    Compute rating deltas for a completed match.

    The caller must already have rejected drawn scores; this function
    assumes the winner is known.

    Args:
        winner_rating: Winner's rating before the match
        loser_rating: Loser's rating before the match
        k_factor: K-factor (default: config.k_factor)
        winner_score: Optional winner score, used for the shutout rule
        loser_score: Optional loser score, used for the shutout rule
        config: Engine configuration

    Returns:
        RatingChange with new ratings, deltas and expected win probability
    """
    k = config.k_factor if k_factor is None else k_factor

    expected_winner = expected_score(winner_rating, loser_rating, config.scale)
    expected_loser = expected_score(loser_rating, winner_rating, config.scale)

    winner_delta = int(round_half_up(k * (1.0 - expected_winner)))
    loser_delta = int(round_half_up(k * (0.0 - expected_loser)))

    bonus = None
    if is_shutout(winner_score, loser_score, config):
        bonus = _shutout_bonus(winner_delta, config)
        winner_delta += bonus
        loser_delta -= bonus

    return RatingChange(
        winner_new_rating=int(round_half_up(winner_rating + winner_delta)),
        loser_new_rating=int(round_half_up(loser_rating + loser_delta)),
        winner_delta=winner_delta,
        loser_delta=loser_delta,
        expected_win_probability=float(expected_winner),
        shutout_bonus=bonus,
    )


def expected_points(
    rating: int,
    opponent_rating: int,
    k_factor: Optional[float] = None,
    config: EloConfig = DEFAULT_CONFIG,
) -> int:
    """Points a player would gain by beating the opponent (no shutout)."""
    k = config.k_factor if k_factor is None else k_factor
    return int(round_half_up(k * (1.0 - expected_score(rating, opponent_rating, config.scale))))


def format_rating_change(delta: int) -> str:
    """Format a delta with an explicit sign: +16, -16, +0."""
    return f"+{delta}" if delta >= 0 else f"{delta}"


def describe_rating_change(delta: int) -> str:
    """Magnitude bucket of a rating change."""
    size = abs(delta)
    if size >= 30:
        return "massive"
    if size >= 20:
        return "large"
    if size >= 10:
        return "moderate"
    if size >= 5:
        return "small"
    return "minimal"
