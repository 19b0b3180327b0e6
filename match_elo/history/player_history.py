"""
Per-player rating trajectory.

Only a player's current rating is stored, so the trajectory is rebuilt
backwards: the starting rating is the current rating minus every delta
the player received, and the walk forward from there reproduces each
post-match rating.

This is only correct if the record list holds every rating-changing
event for the player with the delta that was actually applied. A missing
record shifts the whole curve without any error.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple, Union

import numpy as np
import polars as pl

from ..config import DEFAULT_CONFIG, EloConfig
from ..data import MatchLog, MatchRecord, as_records
from ..rating._numba_core import replay_deltas

MATCH_LABEL_FORMAT = "%b %d %H:%M"
START_LABEL_FORMAT = "%b %d"


@dataclass(frozen=True)
class RatingHistoryPoint:
    """Rating after one match (or the starting rating)."""

    label: str
    rating: int
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class RatingHistory:
    """Chart-ready rating trajectory with summary statistics."""

    points: Tuple[RatingHistoryPoint, ...]
    highest: int
    lowest: int
    lifetime_change: int
    current_rating: int
    starting_rating: int

    @property
    def ratings(self) -> list:
        return [p.rating for p in self.points]

    def to_dataframe(self) -> pl.DataFrame:
        """Convert points to a Polars DataFrame (label, rating, timestamp)."""
        return pl.DataFrame({
            "label": [p.label for p in self.points],
            "rating": [p.rating for p in self.points],
            "timestamp": [p.timestamp for p in self.points],
        })


def reconstruct_history(
    matches: Union[MatchLog, Iterable[MatchRecord]],
    player_id: str,
    current_rating: Optional[int] = None,
    player_created_at: Optional[datetime] = None,
    config: EloConfig = DEFAULT_CONFIG,
) -> RatingHistory:
    """
    Rebuild a player's rating history from their match records.

    Args:
        matches: Match records in any order; records without the player
            are ignored
        player_id: Player to reconstruct
        current_rating: Player's stored rating (default: config.initial_rating)
        player_created_at: If before the first match, a starting point is
            emitted at that time
        config: Engine configuration

    Returns:
        RatingHistory with one point per match, plus highest, lowest and
        lifetime change
    """
    if current_rating is None:
        current_rating = config.initial_rating
    current_rating = int(current_rating)

    records = [r for r in as_records(matches) if r.involves(player_id)]

    if not records:
        label = (
            player_created_at.strftime(START_LABEL_FORMAT)
            if player_created_at is not None
            else "Start"
        )
        return RatingHistory(
            points=(RatingHistoryPoint(label, current_rating, player_created_at),),
            highest=current_rating,
            lowest=current_rating,
            lifetime_change=0,
            current_rating=current_rating,
            starting_rating=current_rating,
        )

    deltas = np.array([r.delta_for(player_id) for r in records], dtype=np.int64)
    starting_rating = current_rating - int(deltas.sum())
    running = replay_deltas(starting_rating, deltas)

    points = []
    if player_created_at is not None and player_created_at < records[0].played_at:
        points.append(
            RatingHistoryPoint(
                player_created_at.strftime(START_LABEL_FORMAT),
                starting_rating,
                player_created_at,
            )
        )

    for record, rating in zip(records, running):
        points.append(
            RatingHistoryPoint(
                record.played_at.strftime(MATCH_LABEL_FORMAT),
                int(rating),
                record.played_at,
            )
        )

    final_rating = int(running[-1])
    return RatingHistory(
        points=tuple(points),
        highest=max(starting_rating, int(running.max())),
        lowest=min(starting_rating, int(running.min())),
        lifetime_change=final_rating - starting_rating,
        current_rating=final_rating,
        starting_rating=starting_rating,
    )
