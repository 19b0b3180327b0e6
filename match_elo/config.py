"""Configuration shared by every rating component."""

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class EloConfig:
    """Configuration for the Elo engine.

    Parameters:
        initial_rating: Rating given to new players (default: 1200)
        k_factor: Maximum rating change per match (default: 32)
        scale: Rating difference where one player is 10x stronger (default: 400)
        shutout_bonus: Flat bonus moved from loser to winner on a shutout
        shutout_bonus_ratio: If set, the bonus is this fraction of the base
            winner delta instead of the flat value
        shutout_score: The exact (winner, loser) score that counts as a shutout
        favorite_threshold: Percentages above this are "favorite"
        underdog_threshold: Percentages below this are "underdog"
    """

    initial_rating: int = 1200
    k_factor: float = 32.0
    scale: float = 400.0
    shutout_bonus: int = 10
    shutout_bonus_ratio: Optional[float] = None
    shutout_score: Tuple[int, int] = (5, 0)
    favorite_threshold: int = 52
    underdog_threshold: int = 48

    def replace(self, **changes) -> "EloConfig":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)


DEFAULT_CONFIG = EloConfig()
