"""
Numba-accelerated core functions for the Elo engine.

The expected score uses the plain power form 1 / (1 + 10^(diff / scale))
and no fastmath, so results round the same way as the scalar path.
Rounding is half-up (floor(x + 0.5)) everywhere.
"""

import numpy as np
from numba import njit, prange


@njit(cache=True, inline="always")
def round_half_up(x: float) -> float:
    """Round to the nearest integer, ties toward +infinity."""
    return np.floor(x + 0.5)


@njit(cache=True, inline="always")
def expected_score(rating_a: float, rating_b: float, scale: float) -> float:
    """Expected score for player A against player B."""
    return 1.0 / (1.0 + 10.0 ** ((rating_b - rating_a) / scale))


@njit(cache=True)
def win_percentage(rating_a: float, rating_b: float, scale: float) -> float:
    """Win probability for player A as a rounded percentage."""
    return round_half_up(100.0 * expected_score(rating_a, rating_b, scale))


@njit(cache=True, parallel=True)
def win_percentages_batch(
    ratings_a: np.ndarray,
    ratings_b: np.ndarray,
    scale: float,
) -> np.ndarray:
    """
    Rounded win percentages for a batch of pairings.

    Returns an (N, 2) int64 array: column 0 for side A, column 1 for side B.
    Each side is rounded independently.
    """
    n = len(ratings_a)
    out = np.empty((n, 2), dtype=np.int64)

    for i in prange(n):
        out[i, 0] = np.int64(round_half_up(100.0 * expected_score(ratings_a[i], ratings_b[i], scale)))
        out[i, 1] = np.int64(round_half_up(100.0 * expected_score(ratings_b[i], ratings_a[i], scale)))

    return out


@njit(cache=True, parallel=True)
def compute_all_vs_all_matrix(ratings: np.ndarray, scale: float) -> np.ndarray:
    """
    Win probability matrix for a roster.

    Returns matrix where result[i,j] = P(player i beats player j).
    """
    n = len(ratings)
    matrix = np.empty((n, n), dtype=np.float64)

    for i in prange(n):
        for j in range(n):
            if i == j:
                matrix[i, j] = 0.5
            else:
                matrix[i, j] = expected_score(ratings[i], ratings[j], scale)

    return matrix


@njit(cache=True)
def replay_deltas(
    starting_rating: float,
    deltas: np.ndarray,
) -> np.ndarray:
    """
    Running rating after each delta, starting from starting_rating.

    Returns array of length len(deltas).
    """
    n = len(deltas)
    out = np.empty(n, dtype=np.int64)
    current = starting_rating
    for i in range(n):
        current += deltas[i]
        out[i] = np.int64(current)
    return out
