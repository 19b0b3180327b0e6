"""Ratings derived purely from the match ledger.

Replaying forward from the initial rating treats the ledger as the only
source of truth. Comparing the result with stored ratings exposes any
drift between the two (a deleted match, an out-of-band adjustment).
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping

import polars as pl

from ..config import DEFAULT_CONFIG, EloConfig
from ..data import MatchLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingDrift:
    """A stored rating that disagrees with the ledger."""

    player_id: str
    stored_rating: int
    derived_rating: int

    @property
    def difference(self) -> int:
        return self.stored_rating - self.derived_rating


def net_deltas(log: MatchLog) -> Dict[str, int]:
    """Sum of applied deltas per player across the whole log."""
    frame = log.player_frame()
    if frame.height == 0:
        return {}
    totals = frame.group_by("player_id").agg(pl.col("delta").sum().alias("total"))
    return dict(zip(totals["player_id"].to_list(), totals["total"].to_list()))


def replay_ratings(log: MatchLog, config: EloConfig = DEFAULT_CONFIG) -> Dict[str, int]:
    """Every player's rating, starting at config.initial_rating and replaying the log."""
    totals = net_deltas(log)
    return {
        player_id: config.initial_rating + int(totals[player_id])
        for player_id in log.player_ids
    }


def detect_drift(
    log: MatchLog,
    current_ratings: Mapping[str, int],
    config: EloConfig = DEFAULT_CONFIG,
) -> List[RatingDrift]:
    """
    Compare stored ratings against ratings derived from the log.

    Players without matches are expected to sit at the initial rating.

    Returns:
        One RatingDrift per disagreeing player, in current_ratings order
    """
    derived = replay_ratings(log, config)
    drifts = []
    for player_id, stored in current_ratings.items():
        expected = derived.get(player_id, config.initial_rating)
        if int(stored) != expected:
            drifts.append(RatingDrift(player_id, int(stored), expected))
            logger.warning(
                f"Rating drift for {player_id}: stored {stored}, ledger implies {expected}"
            )
    return drifts
