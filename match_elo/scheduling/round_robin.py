"""Round-robin pairing generation."""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Sequence


@dataclass(frozen=True)
class Pairing:
    """Two participants scheduled to play. Orientation carries no meaning."""

    player1_id: str
    player2_id: str

    @property
    def key(self) -> FrozenSet[str]:
        """Orientation-free identity of the pairing."""
        return frozenset((self.player1_id, self.player2_id))

    def involves(self, player_id: str) -> bool:
        return player_id == self.player1_id or player_id == self.player2_id


def total_matches(num_players: int) -> int:
    """
    Number of matches in a full round robin: n * (n - 1) / 2.

    2 players → 1, 3 → 3, 4 → 6, 5 → 10.
    """
    return num_players * (num_players - 1) // 2


def generate_round_robin(participant_ids: Sequence[str]) -> List[Pairing]:
    """
    Every pair of participants, exactly once.

    Pair (i, j) is emitted with i before j in the input order, so the
    output is deterministic for a given roster order.

    Raises:
        ValueError: fewer than two participants, or a repeated id
    """
    ids = list(participant_ids)
    if len(ids) < 2:
        raise ValueError(f"At least 2 players are required, got {len(ids)}")
    if len(set(ids)) != len(ids):
        duplicates = sorted({p for p in ids if ids.count(p) > 1})
        raise ValueError(f"Participant ids must be unique, repeated: {duplicates}")

    pairings = []
    for i in range(len(ids)):
        for j in range(i + 1, len(ids)):
            pairings.append(Pairing(ids[i], ids[j]))
    return pairings


def find_duplicate_pairings(
    candidates: Iterable[Pairing],
    scheduled: Iterable[Pairing],
) -> List[Pairing]:
    """Candidates already present in scheduled, in either orientation."""
    taken = {p.key for p in scheduled}
    return [p for p in candidates if p.key in taken]
