"""
Cohort rating history bucketed by calendar month.

There is no stored rating to anchor against here, so every player starts
at the initial rating in the month of their first match and each month
adds that month's net delta. Order within a month does not matter.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, Optional, Tuple, Union

import polars as pl

from ..config import DEFAULT_CONFIG, EloConfig
from ..data import MatchLog, MatchRecord, as_records

MONTH_LABEL_FORMAT = "%m/%y"


@dataclass(frozen=True)
class MonthlyPoint:
    """Rating at the end of a month."""

    month: str
    rating: int
    is_current_month: bool
    month_start: date


@dataclass(frozen=True)
class PlayerMonthlySeries:
    """
    One player's monthly ratings, from their first active month onward.

    Months before the first match are absent (no data), not zero.
    """

    player_id: str
    player_name: str
    series: Tuple[MonthlyPoint, ...]

    @property
    def final_rating(self) -> int:
        return self.series[-1].rating


@dataclass(frozen=True)
class MonthlyHistory:
    """Monthly series for every player in the log."""

    months: Tuple[str, ...]
    per_player: Tuple[PlayerMonthlySeries, ...]

    def series_for(self, player_id: str) -> PlayerMonthlySeries:
        for entry in self.per_player:
            if entry.player_id == player_id:
                return entry
        raise KeyError(f"No monthly history for player {player_id}")

    def to_dataframe(self) -> pl.DataFrame:
        """Long Polars DataFrame: player_id, player_name, month, month_start, rating, is_current_month."""
        rows = [
            {
                "player_id": entry.player_id,
                "player_name": entry.player_name,
                "month": point.month,
                "month_start": point.month_start,
                "rating": point.rating,
                "is_current_month": point.is_current_month,
            }
            for entry in self.per_player
            for point in entry.series
        ]
        if not rows:
            return pl.DataFrame(schema={
                "player_id": pl.Utf8,
                "player_name": pl.Utf8,
                "month": pl.Utf8,
                "month_start": pl.Date,
                "rating": pl.Int64,
                "is_current_month": pl.Boolean,
            })
        return pl.DataFrame(rows)


def _monthly_net_deltas(log: MatchLog) -> Dict[Tuple[str, date], int]:
    """Net delta per (player, month start) using a Polars group-by."""
    monthly = (
        log.player_frame()
        .group_by(["player_id", "month"])
        .agg(pl.col("delta").sum().alias("net_delta"))
    )
    return {
        (row["player_id"], row["month"]): int(row["net_delta"])
        for row in monthly.iter_rows(named=True)
    }


def reconstruct_monthly_history(
    matches: Union[MatchLog, Iterable[MatchRecord]],
    now: Optional[datetime] = None,
    config: EloConfig = DEFAULT_CONFIG,
) -> MonthlyHistory:
    """
    Rebuild every player's month-end ratings from the full match log.

    Args:
        matches: All match records, in any order
        now: Reference time for the current month (default: now)
        config: Engine configuration (initial_rating is the start value)

    Returns:
        MonthlyHistory with the cohort's month labels and one series per
        player, sorted by final rating (highest first)
    """
    records = as_records(matches)
    if not records:
        return MonthlyHistory(months=(), per_player=())

    log = MatchLog(records)
    net = _monthly_net_deltas(log)

    now = now or datetime.now(records[0].played_at.tzinfo)
    current_month = date(now.year, now.month, 1)
    first_month = min(month for _, month in net)
    last_month = max(current_month, max(month for _, month in net))
    months = pl.date_range(first_month, last_month, interval="1mo", eager=True).to_list()

    names: Dict[str, str] = {}
    first_active: Dict[str, date] = {}
    for (player_id, month) in net:
        if player_id not in first_active or month < first_active[player_id]:
            first_active[player_id] = month
    for record in records:
        names.setdefault(record.player1_id, record.player1_name)
        names.setdefault(record.player2_id, record.player2_name)

    per_player = []
    for player_id in log.player_ids:
        rating = config.initial_rating
        series = []
        for month in months:
            if month < first_active[player_id]:
                continue
            rating += net.get((player_id, month), 0)
            series.append(
                MonthlyPoint(
                    month=month.strftime(MONTH_LABEL_FORMAT),
                    rating=rating,
                    is_current_month=month == current_month,
                    month_start=month,
                )
            )
        per_player.append(PlayerMonthlySeries(player_id, names[player_id], tuple(series)))

    per_player.sort(key=lambda entry: -entry.final_rating)

    return MonthlyHistory(
        months=tuple(m.strftime(MONTH_LABEL_FORMAT) for m in months),
        per_player=tuple(per_player),
    )
