"""Standings and player statistics."""

from .player_stats import HeadToHeadStat, PlayerStats, compute_player_stats, head_to_head
from .standings import Standings

__all__ = [
    "Standings",
    "PlayerStats",
    "HeadToHeadStat",
    "compute_player_stats",
    "head_to_head",
]
