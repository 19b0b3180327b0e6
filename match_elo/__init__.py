"""
Match Elo - rating and scheduling engine for a recreational league.

Converts match results into fixed-K Elo rating deltas, estimates win
probabilities for unplayed pairings, schedules round-robin sessions and
rebuilds rating trajectories from the immutable match history.

Quick Start:
    from match_elo import (
        InMemoryRatingLedger, create_session, resolve_match,
        reconstruct_history, estimate_win_probability,
    )

    ledger = InMemoryRatingLedger()
    for player_id in ["ana", "ben", "cat"]:
        ledger.register(player_id)

    # Schedule a round robin (3 players -> 3 matches)
    matches = create_session(["ana", "ben", "cat"], ledger, "2025-01-05")

    # Pre-match probabilities
    print(estimate_win_probability(1216, 1184))  # 55 / 45

    # Record a 5-0 result; both ratings update under the ledger lock
    resolved = resolve_match(ledger, matches[0], 5, 0)
    print(resolved.change.winner_delta, resolved.change.shutout_bonus)

    # Rebuild a trajectory from the ledger and the stored rating
    history = reconstruct_history(ledger.log, "ana", ledger.get_rating("ana"))
    print(history.to_dataframe())

Command-line interface:
    python -m match_elo rate 1000 1400 --scores 5 0
    python -m match_elo predict 1216 1184
    python -m match_elo pairings ana ben cat dan
    python -m match_elo history matches.parquet ana --current 1213
    python -m match_elo monthly matches.parquet
"""

from .config import DEFAULT_CONFIG, EloConfig
from .data import Match, MatchLog, MatchParticipant, MatchRecord, MatchStatus
from .rating import (
    Elo,
    ProbabilityLevel,
    RatingChange,
    WinProbability,
    compute_rating_change,
    describe_rating_change,
    estimate_win_probabilities,
    estimate_win_probability,
    expected_points,
    format_rating_change,
    is_shutout,
    probability_level,
)
from .scheduling import (
    Pairing,
    create_session,
    find_duplicate_pairings,
    generate_round_robin,
    total_matches,
)
from .history import (
    MonthlyHistory,
    MonthlyPoint,
    PlayerMonthlySeries,
    RatingHistory,
    RatingHistoryPoint,
    reconstruct_history,
    reconstruct_monthly_history,
)
from .ledger import (
    InMemoryRatingLedger,
    RatingDrift,
    RatingLedger,
    ResolvedMatch,
    detect_drift,
    replay_ratings,
    resolve_match,
)
from .results import HeadToHeadStat, PlayerStats, Standings, compute_player_stats, head_to_head

__version__ = "0.1.0"

__all__ = [
    # Config
    "EloConfig",
    "DEFAULT_CONFIG",
    # Data
    "Match",
    "MatchLog",
    "MatchParticipant",
    "MatchRecord",
    "MatchStatus",
    # Rating
    "Elo",
    "RatingChange",
    "compute_rating_change",
    "expected_points",
    "is_shutout",
    "format_rating_change",
    "describe_rating_change",
    # Probability
    "ProbabilityLevel",
    "WinProbability",
    "estimate_win_probability",
    "estimate_win_probabilities",
    "probability_level",
    # Scheduling
    "Pairing",
    "generate_round_robin",
    "find_duplicate_pairings",
    "total_matches",
    "create_session",
    # History
    "RatingHistory",
    "RatingHistoryPoint",
    "reconstruct_history",
    "MonthlyHistory",
    "MonthlyPoint",
    "PlayerMonthlySeries",
    "reconstruct_monthly_history",
    # Ledger
    "RatingLedger",
    "InMemoryRatingLedger",
    "ResolvedMatch",
    "resolve_match",
    "RatingDrift",
    "detect_drift",
    "replay_ratings",
    # Results
    "Standings",
    "PlayerStats",
    "HeadToHeadStat",
    "compute_player_stats",
    "head_to_head",
]
