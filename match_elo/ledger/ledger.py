"""Rating ledger: the single writer of current ratings.

Resolving a match is a read-modify-write on two ratings. Callers hold
``lock(a, b)`` across the read, the calculation and both writes so a
concurrent resolution touching either player cannot read a stale rating.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Protocol, Set, Tuple

from ..config import DEFAULT_CONFIG, EloConfig
from ..data import MatchLog, MatchRecord

logger = logging.getLogger(__name__)


class RatingLedger(Protocol):
    """Storage boundary the engine reads ratings from and writes them to."""

    def get_rating(self, player_id: str) -> int:
        ...

    def get_name(self, player_id: str) -> str:
        ...

    def apply_delta(self, player_id: str, delta: int) -> int:
        ...

    def lock(self, *player_ids: str):
        ...

    def has_record(self, match_id: str) -> bool:
        ...

    def append_record(self, record: MatchRecord) -> None:
        ...

    @property
    def log(self) -> MatchLog:
        ...


class InMemoryRatingLedger:
    """
    Thread-safe in-process rating ledger.

    Each player has its own re-entrant lock. lock() acquires them in sorted
    id order, so two resolutions over overlapping players cannot deadlock.
    Unknown players raise KeyError: there is no fallback rating.
    """

    def __init__(self, config: EloConfig = DEFAULT_CONFIG):
        self.config = config
        self._ratings: Dict[str, int] = {}
        self._names: Dict[str, str] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._records: List[MatchRecord] = []
        self._recorded_ids: Set[str] = set()
        self._registry_lock = threading.Lock()

    def register(
        self,
        player_id: str,
        name: Optional[str] = None,
        rating: Optional[int] = None,
    ) -> int:
        """Add a player, starting at config.initial_rating unless given."""
        with self._registry_lock:
            if player_id in self._ratings:
                raise ValueError(f"Player already registered: {player_id}")
            start = self.config.initial_rating if rating is None else int(rating)
            self._ratings[player_id] = start
            self._names[player_id] = name or player_id
            self._locks[player_id] = threading.RLock()
        logger.debug(f"Registered player {player_id} at {start}")
        return start

    def __contains__(self, player_id: str) -> bool:
        return player_id in self._ratings

    @property
    def player_ids(self) -> List[str]:
        return list(self._ratings)

    def ratings(self) -> Dict[str, int]:
        """Snapshot of every current rating."""
        with self._registry_lock:
            return dict(self._ratings)

    def _require(self, player_id: str) -> None:
        if player_id not in self._ratings:
            raise KeyError(f"Player not found: {player_id}")

    def get_rating(self, player_id: str) -> int:
        self._require(player_id)
        with self._locks[player_id]:
            return self._ratings[player_id]

    def get_name(self, player_id: str) -> str:
        self._require(player_id)
        return self._names[player_id]

    def apply_delta(self, player_id: str, delta: int) -> int:
        """Atomically add delta to a player's rating and return the new value."""
        self._require(player_id)
        with self._locks[player_id]:
            self._ratings[player_id] += int(delta)
            return self._ratings[player_id]

    @contextmanager
    def lock(self, *player_ids: str) -> Iterator[Tuple[str, ...]]:
        """Hold the locks of all given players for the duration of the block."""
        ordered = tuple(sorted(set(player_ids)))
        for player_id in ordered:
            self._require(player_id)

        acquired = []
        try:
            for player_id in ordered:
                self._locks[player_id].acquire()
                acquired.append(player_id)
            yield ordered
        finally:
            for player_id in reversed(acquired):
                self._locks[player_id].release()

    def has_record(self, match_id: str) -> bool:
        """Whether a record for this match id has already been appended."""
        with self._registry_lock:
            return match_id in self._recorded_ids

    def append_record(self, record: MatchRecord) -> None:
        """Append a record. Each match id can be recorded once."""
        with self._registry_lock:
            if record.id in self._recorded_ids:
                raise ValueError(f"Match {record.id} has already been recorded")
            self._recorded_ids.add(record.id)
            self._records.append(record)

    @property
    def log(self) -> MatchLog:
        """Match history recorded through this ledger."""
        with self._registry_lock:
            return MatchLog(self._records)

    def __repr__(self) -> str:
        return f"InMemoryRatingLedger(players={len(self._ratings)}, records={len(self._records)})"
