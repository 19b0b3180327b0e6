"""Match data types and the match history ledger."""

from .match_log import MatchLog, as_records
from .types import Match, MatchParticipant, MatchRecord, MatchStatus

__all__ = [
    "Match",
    "MatchParticipant",
    "MatchRecord",
    "MatchStatus",
    "MatchLog",
    "as_records",
]
