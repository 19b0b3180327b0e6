"""Match history ledger.

Uses Polars for loading, exporting and the long per-player view that
the reconstruction and statistics code groups over.
"""

from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

import polars as pl

from .types import MatchRecord

REQUIRED_COLUMNS = {
    "id",
    "session_date",
    "player1_id",
    "player1_name",
    "player1_score",
    "player1_delta",
    "player2_id",
    "player2_name",
    "player2_score",
    "player2_delta",
    "winner_id",
    "played_at",
}

_RECORD_SCHEMA = {
    "id": pl.Utf8,
    "session_date": pl.Utf8,
    "player1_id": pl.Utf8,
    "player1_name": pl.Utf8,
    "player1_score": pl.Int64,
    "player1_delta": pl.Int64,
    "player2_id": pl.Utf8,
    "player2_name": pl.Utf8,
    "player2_score": pl.Int64,
    "player2_delta": pl.Int64,
    "winner_id": pl.Utf8,
    "played_at": pl.Datetime("us"),
    "created_at": pl.Datetime("us"),
}

_PLAYER_SCHEMA = {
    "match_id": pl.Utf8,
    "player_id": pl.Utf8,
    "player_name": pl.Utf8,
    "opponent_id": pl.Utf8,
    "played_at": pl.Datetime("us"),
    "month": pl.Date,
    "score": pl.Int64,
    "delta": pl.Int64,
    "won": pl.Boolean,
}


def _by_played_at(record: MatchRecord) -> datetime:
    return record.played_at


class MatchLog:
    """
    Append-only, chronologically ordered collection of match records.

    A MatchLog never mutates: append() returns a new log. Records with the
    same played_at keep their insertion order.

    Provides methods for:
    - Loading from records, DataFrames (polars or pandas), parquet or CSV
    - Filtering to a single player's matches
    - Exporting to a wide (one row per match) or long (one row per player
      per match) Polars DataFrame
    """

    def __init__(self, records: Optional[Iterable[MatchRecord]] = None):
        self._records: Tuple[MatchRecord, ...] = tuple(
            sorted(records or (), key=_by_played_at)
        )
        self._frame: Optional[pl.DataFrame] = None

    @classmethod
    def from_records(cls, records: Iterable[MatchRecord]) -> "MatchLog":
        return cls(records)

    @classmethod
    def from_dataframe(cls, df) -> "MatchLog":
        """Create a log from a DataFrame (pandas or polars)."""
        if not isinstance(df, pl.DataFrame):
            df = pl.from_pandas(df)

        missing = REQUIRED_COLUMNS - set(df.columns)
        if missing:
            raise ValueError(f"Missing required columns: {sorted(missing)}")

        has_created = "created_at" in df.columns
        records = []
        for row in df.iter_rows(named=True):
            records.append(
                MatchRecord(
                    id=str(row["id"]),
                    session_date=str(row["session_date"]),
                    player1_id=str(row["player1_id"]),
                    player1_name=row["player1_name"],
                    player1_score=int(row["player1_score"]),
                    player1_delta=int(row["player1_delta"]),
                    player2_id=str(row["player2_id"]),
                    player2_name=row["player2_name"],
                    player2_score=int(row["player2_score"]),
                    player2_delta=int(row["player2_delta"]),
                    winner_id=str(row["winner_id"]),
                    played_at=row["played_at"],
                    created_at=row["created_at"] if has_created else None,
                )
            )
        return cls(records)

    @classmethod
    def from_parquet(cls, path: Union[str, Path]) -> "MatchLog":
        """Load a log from a parquet file."""
        return cls.from_dataframe(pl.read_parquet(path))

    @classmethod
    def from_csv(cls, path: Union[str, Path]) -> "MatchLog":
        """Load a log from a CSV file (played_at parsed as a datetime)."""
        df = pl.read_csv(path, try_parse_dates=True)
        if "played_at" in df.columns and df["played_at"].dtype == pl.Utf8:
            df = df.with_columns(pl.col("played_at").str.to_datetime())
        return cls.from_dataframe(df)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "MatchLog":
        """Load a log from parquet or CSV, chosen by file extension."""
        if Path(path).suffix.lower() == ".csv":
            return cls.from_csv(path)
        return cls.from_parquet(path)

    @property
    def records(self) -> Tuple[MatchRecord, ...]:
        """All records, oldest first."""
        return self._records

    @property
    def player_ids(self) -> List[str]:
        """Player ids in order of first appearance."""
        seen = {}
        for record in self._records:
            seen.setdefault(record.player1_id, None)
            seen.setdefault(record.player2_id, None)
        return list(seen)

    @property
    def first_played_at(self) -> datetime:
        if not self._records:
            raise ValueError("Match log is empty")
        return self._records[0].played_at

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MatchRecord]:
        return iter(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    def append(self, record: MatchRecord) -> "MatchLog":
        """Return a new log with the record added."""
        return MatchLog(self._records + (record,))

    def for_player(self, player_id: str) -> "MatchLog":
        """Return a log with only the given player's matches."""
        return MatchLog(r for r in self._records if r.involves(player_id))

    def to_dataframe(self) -> pl.DataFrame:
        """Convert to a wide Polars DataFrame (one row per match)."""
        if self._frame is None:
            if self._records:
                frame = pl.DataFrame([asdict(r) for r in self._records])
                if frame["created_at"].dtype == pl.Null:
                    frame = frame.with_columns(
                        pl.col("created_at").cast(frame["played_at"].dtype)
                    )
                self._frame = frame
            else:
                self._frame = pl.DataFrame(schema=_RECORD_SCHEMA)
        return self._frame

    def player_frame(self) -> pl.DataFrame:
        """
        Long Polars DataFrame with one row per player per match.

        Columns: match_id, player_id, player_name, opponent_id, played_at,
        month, score, delta, won

        month is the first day of played_at's calendar month in its own
        timezone, not UTC.
        """
        rows = []
        for r in self._records:
            month = date(r.played_at.year, r.played_at.month, 1)
            rows.append({
                "match_id": r.id,
                "player_id": r.player1_id,
                "player_name": r.player1_name,
                "opponent_id": r.player2_id,
                "played_at": r.played_at,
                "month": month,
                "score": r.player1_score,
                "delta": r.player1_delta,
                "won": r.winner_id == r.player1_id,
            })
            rows.append({
                "match_id": r.id,
                "player_id": r.player2_id,
                "player_name": r.player2_name,
                "opponent_id": r.player1_id,
                "played_at": r.played_at,
                "month": month,
                "score": r.player2_score,
                "delta": r.player2_delta,
                "won": r.winner_id == r.player2_id,
            })
        if not rows:
            return pl.DataFrame(schema=_PLAYER_SCHEMA)
        return pl.DataFrame(rows)

    def write_parquet(self, path: Union[str, Path]) -> None:
        """Save the log to a parquet file."""
        self.to_dataframe().write_parquet(path)

    def __repr__(self) -> str:
        if not self._records:
            return "MatchLog(matches=0)"
        return (
            f"MatchLog(matches={len(self._records)}, "
            f"players={len(self.player_ids)}, "
            f"first={self._records[0].played_at:%Y-%m-%d}, "
            f"last={self._records[-1].played_at:%Y-%m-%d})"
        )


def as_records(matches: Union[MatchLog, Iterable[MatchRecord]]) -> Tuple[MatchRecord, ...]:
    """Chronologically sorted records from a MatchLog or any iterable."""
    if isinstance(matches, MatchLog):
        return matches.records
    return MatchLog(matches).records
