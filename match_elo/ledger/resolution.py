"""Transactional resolution of a pending match."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..config import DEFAULT_CONFIG, EloConfig
from ..data import Match, MatchRecord
from ..rating import RatingChange, compute_rating_change
from .ledger import RatingLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedMatch:
    """A completed match with the ledger record and rating change behind it."""

    match: Match
    record: MatchRecord
    change: RatingChange


def validate_scores(player1_score: Optional[int], player2_score: Optional[int]) -> None:
    """Reject missing, negative or tied scores."""
    if player1_score is None or player2_score is None:
        raise ValueError("Both scores are required")
    if player1_score < 0 or player2_score < 0:
        raise ValueError(f"Scores must be non-negative, got {player1_score}-{player2_score}")
    if player1_score == player2_score:
        raise ValueError(f"Scores must differ, got a draw {player1_score}-{player2_score}")


def resolve_match(
    ledger: RatingLedger,
    match: Match,
    player1_score: int,
    player2_score: int,
    config: EloConfig = DEFAULT_CONFIG,
    played_at: Optional[datetime] = None,
) -> ResolvedMatch:
    """
    Record a match result and update both ratings.

    Ratings are re-read from the ledger while both players are locked,
    not taken from the snapshot stored on the match, so two resolutions
    sharing a player are serialized. The ledger, not the caller's copy of
    the match, decides whether the match was already recorded.

    Args:
        ledger: Rating ledger holding current ratings
        match: The pending match
        player1_score: Score of match.player1
        player2_score: Score of match.player2
        config: Engine configuration
        played_at: Completion time (default: now)

    Returns:
        ResolvedMatch with the completed match, its ledger record and the
        rating change
    """
    if not match.is_pending:
        raise ValueError(f"Match {match.id} has already been recorded ({match.status.value})")
    validate_scores(player1_score, player2_score)

    played_at = played_at or datetime.now()
    player1_won = player1_score > player2_score
    winner = match.player1 if player1_won else match.player2
    loser = match.player2 if player1_won else match.player1
    winner_score, loser_score = (
        (player1_score, player2_score) if player1_won else (player2_score, player1_score)
    )

    with ledger.lock(winner.id, loser.id):
        # must run under the lock: a concurrent resolution of this match waits here
        if ledger.has_record(match.id):
            raise ValueError(f"Match {match.id} has already been recorded")

        winner_rating = ledger.get_rating(winner.id)
        loser_rating = ledger.get_rating(loser.id)

        change = compute_rating_change(
            winner_rating,
            loser_rating,
            winner_score=winner_score,
            loser_score=loser_score,
            config=config,
        )

        winner_after = ledger.apply_delta(winner.id, change.winner_delta)
        loser_after = ledger.apply_delta(loser.id, change.loser_delta)

        winner_done = replace(
            winner,
            rating_before=winner_rating,
            score=winner_score,
            rating_after=winner_after,
            rating_delta=change.winner_delta,
        )
        loser_done = replace(
            loser,
            rating_before=loser_rating,
            score=loser_score,
            rating_after=loser_after,
            rating_delta=change.loser_delta,
        )
        player1, player2 = (winner_done, loser_done) if player1_won else (loser_done, winner_done)

        completed = match.with_result(player1, player2, winner.id, played_at)
        record = MatchRecord(
            id=match.id,
            session_date=match.session_date,
            player1_id=player1.id,
            player1_name=player1.name,
            player1_score=player1.score,
            player1_delta=player1.rating_delta,
            player2_id=player2.id,
            player2_name=player2.name,
            player2_score=player2.score,
            player2_delta=player2.rating_delta,
            winner_id=winner.id,
            played_at=played_at,
            created_at=played_at,
        )
        ledger.append_record(record)

    logger.info(
        f"Resolved match {match.id}: winner {winner.id} ({winner_rating} → {winner_after}), "
        f"loser {loser.id} ({loser_rating} → {loser_after})"
        + (f", shutout bonus {change.shutout_bonus}" if change.shutout_bonus is not None else "")
    )
    return ResolvedMatch(match=completed, record=record, change=change)
