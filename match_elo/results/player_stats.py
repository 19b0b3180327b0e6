"""Per-player statistics derived from the match ledger."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

import polars as pl

from ..config import DEFAULT_CONFIG, EloConfig
from ..data import MatchLog, MatchRecord, as_records
from ..history import reconstruct_history
from ..rating._numba_core import round_half_up


@dataclass(frozen=True)
class PlayerStats:
    """
    Win/loss record and streaks for one player.

    current_streak is positive for consecutive wins and negative for
    consecutive losses.
    """

    player_id: str
    total_matches: int
    wins: int
    losses: int
    win_rate: float
    highest_rating: int
    lowest_rating: int
    current_streak: int
    longest_win_streak: int
    longest_lose_streak: int


@dataclass(frozen=True)
class HeadToHeadStat:
    """A player's record against one opponent."""

    opponent_id: str
    opponent_name: str
    wins: int
    losses: int
    total_matches: int
    win_rate: Optional[int]  # percentage, None without matches


def compute_player_stats(
    matches: Union[MatchLog, Iterable[MatchRecord]],
    player_id: str,
    current_rating: Optional[int] = None,
    config: EloConfig = DEFAULT_CONFIG,
) -> PlayerStats:
    """
    Statistics for one player, replaying their matches in order.

    Highest and lowest ratings come from the reconstructed history, so
    they include the starting rating.
    """
    records = [r for r in as_records(matches) if r.involves(player_id)]
    history = reconstruct_history(records, player_id, current_rating, config=config)

    wins = losses = 0
    streak = longest_win = longest_lose = 0
    for record in records:
        if record.won_by(player_id):
            wins += 1
            streak = streak + 1 if streak >= 0 else 1
            longest_win = max(longest_win, streak)
        else:
            losses += 1
            streak = streak - 1 if streak <= 0 else -1
            longest_lose = max(longest_lose, -streak)

    total = wins + losses
    return PlayerStats(
        player_id=player_id,
        total_matches=total,
        wins=wins,
        losses=losses,
        win_rate=wins / total if total else 0.0,
        highest_rating=history.highest,
        lowest_rating=history.lowest,
        current_streak=streak,
        longest_win_streak=longest_win,
        longest_lose_streak=longest_lose,
    )


def head_to_head(
    matches: Union[MatchLog, Iterable[MatchRecord]],
    player_id: str,
    opponents: Optional[Sequence[str]] = None,
) -> List[HeadToHeadStat]:
    """
    A player's record against each opponent, most-played first.

    Args:
        matches: Match records
        player_id: The player whose record is computed
        opponents: Opponents to report; listed opponents without matches
            get zero counts and a None win rate. Default: everyone the
            player has faced.
    """
    log = matches if isinstance(matches, MatchLog) else MatchLog(matches)
    frame = log.player_frame().filter(pl.col("player_id") == player_id)

    summary = (
        frame.group_by("opponent_id", maintain_order=True)
        .agg(
            pl.col("won").sum().alias("wins"),
            pl.len().alias("total"),
        )
    )
    counts = {
        row["opponent_id"]: (int(row["wins"]), int(row["total"]))
        for row in summary.iter_rows(named=True)
    }

    names = {}
    for record in log:
        names.setdefault(record.player1_id, record.player1_name)
        names.setdefault(record.player2_id, record.player2_name)

    if opponents is None:
        opponents = list(counts)

    stats = []
    for opponent_id in opponents:
        if opponent_id == player_id:
            continue
        wins, total = counts.get(opponent_id, (0, 0))
        stats.append(
            HeadToHeadStat(
                opponent_id=opponent_id,
                opponent_name=names.get(opponent_id, opponent_id),
                wins=wins,
                losses=total - wins,
                total_matches=total,
                win_rate=int(round_half_up(100.0 * wins / total)) if total else None,
            )
        )

    stats.sort(key=lambda s: -s.total_matches)
    return stats
