"""Value types for matches and the match history ledger."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional


class MatchStatus(str, Enum):
    """Lifecycle state of a scheduled match."""

    PENDING = "pending"
    COMPLETED = "completed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class MatchParticipant:
    """One side of a match, with the rating snapshot taken at scheduling."""

    id: str
    name: str
    rating_before: int
    score: Optional[int] = None
    rating_after: Optional[int] = None
    rating_delta: Optional[int] = None


@dataclass(frozen=True)
class Match:
    """A scheduled pairing, pending until its result is resolved."""

    id: str
    session_date: str
    player1: MatchParticipant
    player2: MatchParticipant
    winner_id: Optional[str] = None
    status: MatchStatus = MatchStatus.PENDING
    played_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status is MatchStatus.PENDING

    @property
    def player_ids(self):
        return (self.player1.id, self.player2.id)

    def participant(self, player_id: str) -> MatchParticipant:
        """Get the participant with the given id."""
        if self.player1.id == player_id:
            return self.player1
        if self.player2.id == player_id:
            return self.player2
        raise KeyError(f"Player {player_id} is not in match {self.id}")

    def with_result(
        self,
        player1: MatchParticipant,
        player2: MatchParticipant,
        winner_id: str,
        played_at: datetime,
    ) -> "Match":
        """Return the completed copy of this match."""
        return replace(
            self,
            player1=player1,
            player2=player2,
            winner_id=winner_id,
            status=MatchStatus.COMPLETED,
            played_at=played_at,
        )


@dataclass(frozen=True)
class MatchRecord:
    """
    Immutable, denormalized copy of a completed match.

    Records are appended once, when a match completes, and never edited.
    The deltas are the ones actually applied to each player's rating, so
    history reconstruction can replay them without recomputing anything.
    """

    id: str
    session_date: str
    player1_id: str
    player1_name: str
    player1_score: int
    player1_delta: int
    player2_id: str
    player2_name: str
    player2_score: int
    player2_delta: int
    winner_id: str
    played_at: datetime
    created_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def winner_name(self) -> str:
        return self.player1_name if self.winner_id == self.player1_id else self.player2_name

    @property
    def loser_id(self) -> str:
        return self.player2_id if self.winner_id == self.player1_id else self.player1_id

    def involves(self, player_id: str) -> bool:
        return player_id == self.player1_id or player_id == self.player2_id

    def delta_for(self, player_id: str) -> int:
        """Rating change applied to the given player in this match."""
        if player_id == self.player1_id:
            return self.player1_delta
        if player_id == self.player2_id:
            return self.player2_delta
        raise KeyError(f"Player {player_id} did not play in match {self.id}")

    def score_for(self, player_id: str) -> int:
        if player_id == self.player1_id:
            return self.player1_score
        if player_id == self.player2_id:
            return self.player2_score
        raise KeyError(f"Player {player_id} did not play in match {self.id}")

    def opponent_of(self, player_id: str) -> str:
        if player_id == self.player1_id:
            return self.player2_id
        if player_id == self.player2_id:
            return self.player1_id
        raise KeyError(f"Player {player_id} did not play in match {self.id}")

    def name_of(self, player_id: str) -> str:
        return self.player1_name if player_id == self.player1_id else self.player2_name

    def won_by(self, player_id: str) -> bool:
        return self.winner_id == player_id
