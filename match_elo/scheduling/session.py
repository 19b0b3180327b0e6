"""Daily session creation."""

import logging
import uuid
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..data import Match, MatchParticipant
from ..ledger import RatingLedger
from .round_robin import Pairing, find_duplicate_pairings, generate_round_robin

logger = logging.getLogger(__name__)


def match_id(session_date: str, pairing: Pairing) -> str:
    """Unique id; a rematch scheduled on the same date gets a new one."""
    return f"{session_date}:{pairing.player1_id}:{pairing.player2_id}:{uuid.uuid4().hex[:8]}"


def create_session(
    participant_ids: Sequence[str],
    ledger: RatingLedger,
    session_date: Optional[str] = None,
    existing: Iterable[Match] = (),
) -> List[Match]:
    """
    Schedule a round robin among the selected players.

    Each match snapshots both players' current ratings as rating_before.

    Args:
        participant_ids: Selected roster, in display order
        ledger: Source of current ratings and names
        session_date: ISO date of the session (default: today)
        existing: Matches already scheduled; pending ones block duplicates

    Returns:
        Pending matches, one per pairing

    Raises:
        ValueError: fewer than two players, or a pairing that is already
            pending in existing
        KeyError: a participant unknown to the ledger
    """
    if len(participant_ids) < 2:
        raise ValueError("At least 2 players are required to create a session")

    session_date = session_date or date.today().isoformat()
    pairings = generate_round_robin(participant_ids)

    pending = [
        Pairing(m.player1.id, m.player2.id) for m in existing if m.is_pending
    ]
    duplicates = find_duplicate_pairings(pairings, pending)
    if duplicates:
        described = ", ".join(
            f"{ledger.get_name(d.player1_id)} vs {ledger.get_name(d.player2_id)}"
            for d in duplicates
        )
        raise ValueError(f"Pending matches already exist: {described}")

    matches = []
    for pairing in pairings:
        matches.append(
            Match(
                id=match_id(session_date, pairing),
                session_date=session_date,
                player1=MatchParticipant(
                    id=pairing.player1_id,
                    name=ledger.get_name(pairing.player1_id),
                    rating_before=ledger.get_rating(pairing.player1_id),
                ),
                player2=MatchParticipant(
                    id=pairing.player2_id,
                    name=ledger.get_name(pairing.player2_id),
                    rating_before=ledger.get_rating(pairing.player2_id),
                ),
            )
        )

    logger.info(
        f"Created session {session_date} with {len(participant_ids)} players, "
        f"{len(matches)} matches"
    )
    return matches
