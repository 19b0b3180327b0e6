"""Round-robin scheduling."""

from .round_robin import Pairing, find_duplicate_pairings, generate_round_robin, total_matches
from .session import create_session

__all__ = [
    "Pairing",
    "generate_round_robin",
    "find_duplicate_pairings",
    "total_matches",
    "create_session",
]
