"""Rating ledger service, match resolution and ledger replay."""

from .ledger import InMemoryRatingLedger, RatingLedger
from .replay import RatingDrift, detect_drift, net_deltas, replay_ratings
from .resolution import ResolvedMatch, resolve_match, validate_scores

__all__ = [
    "RatingLedger",
    "InMemoryRatingLedger",
    "ResolvedMatch",
    "resolve_match",
    "validate_scores",
    "RatingDrift",
    "detect_drift",
    "net_deltas",
    "replay_ratings",
]
