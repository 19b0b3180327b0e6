"""
Queryable snapshot of current ratings.

Wraps a mapping of player id to rating and provides ranking, matchup
prediction and head-to-head probability queries.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np
import polars as pl

from ..config import DEFAULT_CONFIG, EloConfig
from ..rating import WinProbability, estimate_win_probability, probability_level
from ..rating._numba_core import compute_all_vs_all_matrix


def _compute_ranks(ratings: np.ndarray) -> np.ndarray:
    """
    Ranks for all players (1 = highest). Ties keep roster order.
    """
    n = len(ratings)
    sorted_indices = np.argsort(-ratings, kind="stable")
    ranks = np.empty(n, dtype=np.int32)
    ranks[sorted_indices] = np.arange(1, n + 1)
    return ranks


@dataclass
class Standings:
    """
    Current ratings of a roster.

    Attributes:
        player_ids: Roster order
        ratings: Ratings aligned with player_ids
        player_names: Optional mapping of player_id -> name
        config: Engine configuration used for predictions
    """

    player_ids: List[str]
    ratings: np.ndarray
    player_names: Optional[Dict[str, str]] = None
    config: EloConfig = DEFAULT_CONFIG

    _ranks: Optional[np.ndarray] = field(default=None, repr=False)
    _index: Dict[str, int] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        self.ratings = np.ascontiguousarray(self.ratings, dtype=np.int64)
        if len(self.ratings) != len(self.player_ids):
            raise ValueError(
                f"Got {len(self.player_ids)} players but {len(self.ratings)} ratings"
            )
        self._index = {pid: i for i, pid in enumerate(self.player_ids)}
        self._ranks = None

    @classmethod
    def from_ratings(
        cls,
        ratings: Mapping[str, int],
        player_names: Optional[Dict[str, str]] = None,
        config: EloConfig = DEFAULT_CONFIG,
    ) -> "Standings":
        """Build standings from a player_id -> rating mapping."""
        ids = list(ratings)
        return cls(ids, np.array([ratings[p] for p in ids]), player_names, config)

    @property
    def num_players(self) -> int:
        return len(self.player_ids)

    @property
    def ranks(self) -> np.ndarray:
        """Lazily computed ranks array (1 = highest rated)."""
        if self._ranks is None:
            self._ranks = _compute_ranks(self.ratings)
        return self._ranks

    def _position(self, player_id: str) -> int:
        if player_id not in self._index:
            raise KeyError(f"Player not found: {player_id}")
        return self._index[player_id]

    def get_rating(self, player_id: str) -> int:
        return int(self.ratings[self._position(player_id)])

    def get_name(self, player_id: str) -> str:
        if self.player_names and player_id in self.player_names:
            return self.player_names[player_id]
        return player_id

    def rank(self, player_id: str) -> int:
        """Rank of a player (1 = highest rated)."""
        return int(self.ranks[self._position(player_id)])

    def top(self, n: int = 10) -> pl.DataFrame:
        """
        Top N rated players.

        Returns DataFrame with columns: rank, player_id, name, rating
        """
        order = np.argsort(self.ranks)[:n]
        return self._indices_to_dataframe(order)

    def to_dataframe(self) -> pl.DataFrame:
        """Full leaderboard, highest rated first."""
        return self.top(self.num_players)

    def _indices_to_dataframe(self, indices: np.ndarray) -> pl.DataFrame:
        return pl.DataFrame({
            "rank": self.ranks[indices],
            "player_id": [self.player_ids[i] for i in indices],
            "name": [self.get_name(self.player_ids[i]) for i in indices],
            "rating": self.ratings[indices],
        })

    def predict(self, player_a: str, player_b: str) -> WinProbability:
        """Win percentages for a matchup between two roster players."""
        return estimate_win_probability(
            self.get_rating(player_a), self.get_rating(player_b), self.config
        )

    def matchup(self, player_a: str, player_b: str) -> pl.DataFrame:
        """Both perspectives of a matchup, with labels and rating difference."""
        ra, rb = self.get_rating(player_a), self.get_rating(player_b)
        prob = self.predict(player_a, player_b)
        return pl.DataFrame({
            "player_id": [player_a, player_b],
            "name": [self.get_name(player_a), self.get_name(player_b)],
            "rating": [ra, rb],
            "win_probability": [prob.probability_a, prob.probability_b],
            "level": [
                probability_level(prob.probability_a, self.config).value,
                probability_level(prob.probability_b, self.config).value,
            ],
            "expected_points": [prob.expected_points_a, prob.expected_points_b],
            "rating_diff": [ra - rb, rb - ra],
        })

    def head_to_head_matrix(self, player_ids: Optional[Sequence[str]] = None) -> pl.DataFrame:
        """
        Head-to-head win probability matrix.

        Returns DataFrame with "player_id" and "name" columns, then one
        column per player id holding P(row player beats column player).
        """
        ids = list(player_ids) if player_ids is not None else list(self.player_ids)
        if len(set(ids)) != len(ids):
            raise ValueError("Player ids must be unique")
        positions = np.array([self._position(p) for p in ids], dtype=np.int64)
        ratings = np.ascontiguousarray(self.ratings[positions], dtype=np.float64)
        matrix = compute_all_vs_all_matrix(ratings, self.config.scale)

        reserved = {"player_id", "name"}.intersection(ids)
        if reserved:
            raise ValueError(f"Player ids clash with matrix label columns: {sorted(reserved)}")

        data = {"player_id": ids, "name": [self.get_name(p) for p in ids]}
        for i, player_id in enumerate(ids):
            data[player_id] = matrix[:, i]
        return pl.DataFrame(data)

    def __repr__(self) -> str:
        if self.num_players == 0:
            return "Standings(players=0)"
        return (
            f"Standings(players={self.num_players}, "
            f"top={self.ratings.max()}, bottom={self.ratings.min()})"
        )
