"""Rating history reconstruction from the match ledger."""

from .monthly_history import (
    MonthlyHistory,
    MonthlyPoint,
    PlayerMonthlySeries,
    reconstruct_monthly_history,
)
from .player_history import RatingHistory, RatingHistoryPoint, reconstruct_history

__all__ = [
    "RatingHistory",
    "RatingHistoryPoint",
    "reconstruct_history",
    "MonthlyHistory",
    "MonthlyPoint",
    "PlayerMonthlySeries",
    "reconstruct_monthly_history",
]
