"""
Command-line interface for the match Elo engine.

Usage:
    python -m match_elo rate <winner_rating> <loser_rating> [--scores W L] [options]
    python -m match_elo predict <rating_a> <rating_b> [options]
    python -m match_elo pairings <player_id> <player_id> [...]
    python -m match_elo history <matches> <player_id> [--current N] [--created-at T]
    python -m match_elo monthly <matches> [--now T]
    python -m match_elo standings <matches> [-n N]
    python -m match_elo drift <matches> <ratings.csv>

Match files are parquet or CSV match logs.
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import Optional, Sequence

import polars as pl


def _config(args):
    from ..config import EloConfig

    return EloConfig(
        k_factor=args.k_factor,
        initial_rating=args.initial_rating,
    )


def cmd_rate(args):
    """Rating change for one match."""
    from ..rating import compute_rating_change, format_rating_change

    winner_score, loser_score = args.scores if args.scores else (None, None)
    if winner_score is not None and winner_score == loser_score:
        print("Scores must differ: a match needs a winner")
        return 1

    change = compute_rating_change(
        args.winner_rating,
        args.loser_rating,
        winner_score=winner_score,
        loser_score=loser_score,
        config=_config(args),
    )

    print(f"Expected win probability: {change.expected_win_probability:.1%}")
    print(f"  Winner: {args.winner_rating} → {change.winner_new_rating} "
          f"({format_rating_change(change.winner_delta)})")
    print(f"  Loser:  {args.loser_rating} → {change.loser_new_rating} "
          f"({format_rating_change(change.loser_delta)})")
    if change.shutout_bonus is not None:
        print(f"  Shutout bonus: {change.shutout_bonus}")
    return 0


def cmd_predict(args):
    """Win probabilities for an unplayed pairing."""
    from ..rating import estimate_win_probability, probability_level

    config = _config(args)
    prob = estimate_win_probability(args.rating_a, args.rating_b, config)

    print(f"\nMatchup Prediction ({args.rating_a} vs {args.rating_b}):")
    print(f"  P(A wins) = {prob.probability_a}% "
          f"[{probability_level(prob.probability_a, config).value}], "
          f"+{prob.expected_points_a} if A wins")
    print(f"  P(B wins) = {prob.probability_b}% "
          f"[{probability_level(prob.probability_b, config).value}], "
          f"+{prob.expected_points_b} if B wins")
    return 0


def cmd_pairings(args):
    """List round-robin pairings."""
    from ..scheduling import generate_round_robin

    try:
        pairings = generate_round_robin(args.players)
    except ValueError as e:
        print(f"Cannot schedule: {e}")
        return 1

    print(f"{len(pairings)} matches for {len(args.players)} players:\n")
    for i, pairing in enumerate(pairings, start=1):
        print(f"  {i:3d}. {pairing.player1_id} vs {pairing.player2_id}")
    return 0


def cmd_history(args):
    """Rating trajectory for one player."""
    from ..data import MatchLog
    from ..history import reconstruct_history
    from ..rating import format_rating_change

    log = MatchLog.load(args.data)
    created_at = datetime.fromisoformat(args.created_at) if args.created_at else None
    history = reconstruct_history(
        log, args.player, args.current, created_at, config=_config(args)
    )

    print(history.to_dataframe())
    print(f"\nHighest: {history.highest}  Lowest: {history.lowest}  "
          f"Lifetime: {format_rating_change(history.lifetime_change)}  "
          f"Current: {history.current_rating}")

    if args.output:
        history.to_dataframe().write_csv(args.output)
        print(f"\nSaved to {args.output}")
    return 0


def cmd_monthly(args):
    """Monthly ratings for every player."""
    from ..data import MatchLog
    from ..history import reconstruct_monthly_history

    log = MatchLog.load(args.data)
    now = datetime.fromisoformat(args.now) if args.now else None
    monthly = reconstruct_monthly_history(log, now=now, config=_config(args))

    if not monthly.per_player:
        print("No matches recorded")
        return 0

    table = monthly.to_dataframe().pivot(
        on="month", index="player_name", values="rating"
    )
    print(f"Months: {', '.join(monthly.months)}\n")
    print(table)

    if args.output:
        monthly.to_dataframe().write_csv(args.output)
        print(f"\nSaved to {args.output}")
    return 0


def cmd_standings(args):
    """Leaderboard derived by replaying the match log."""
    from ..data import MatchLog
    from ..ledger import replay_ratings
    from ..results import Standings

    config = _config(args)
    log = MatchLog.load(args.data)
    names = {}
    for record in log:
        names.setdefault(record.player1_id, record.player1_name)
        names.setdefault(record.player2_id, record.player2_name)

    standings = Standings.from_ratings(replay_ratings(log, config), names, config)
    print(f"Top {args.n} players:\n")
    print(standings.top(args.n))
    return 0


def cmd_drift(args):
    """Compare stored ratings with ratings implied by the match log."""
    from ..data import MatchLog
    from ..ledger import detect_drift

    log = MatchLog.load(args.data)
    stored = pl.read_csv(args.ratings)
    missing = {"player_id", "rating"} - set(stored.columns)
    if missing:
        print(f"Ratings file is missing columns: {sorted(missing)}")
        return 1

    current = dict(zip(
        stored["player_id"].cast(pl.Utf8).to_list(),
        stored["rating"].to_list(),
    ))
    drifts = detect_drift(log, current, _config(args))

    if not drifts:
        print(f"No drift: {len(current)} ratings match the ledger")
        return 0

    print(f"{len(drifts)} players drifted from the ledger:\n")
    for d in drifts:
        print(f"  {d.player_id}: stored {d.stored_rating}, "
              f"ledger {d.derived_rating} ({d.difference:+d})")
    return 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="match-elo",
        description="Match Elo CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Common arguments
    def add_common_args(p):
        p.add_argument("--k-factor", "-k", type=float, default=32.0,
                       help="K-factor (default: 32)")
        p.add_argument("--initial-rating", type=int, default=1200,
                       help="Starting rating for new players (default: 1200)")

    rate_parser = subparsers.add_parser("rate", help="Rate a completed match")
    rate_parser.add_argument("winner_rating", type=int)
    rate_parser.add_argument("loser_rating", type=int)
    rate_parser.add_argument("--scores", type=int, nargs=2, metavar=("WINNER", "LOSER"),
                             help="Final score, used for the shutout bonus")
    add_common_args(rate_parser)

    predict_parser = subparsers.add_parser("predict", help="Win probability for a pairing")
    predict_parser.add_argument("rating_a", type=int)
    predict_parser.add_argument("rating_b", type=int)
    add_common_args(predict_parser)

    pairings_parser = subparsers.add_parser("pairings", help="Round-robin pairings")
    pairings_parser.add_argument("players", nargs="*", help="Player ids in order")

    history_parser = subparsers.add_parser("history", help="Player rating history")
    history_parser.add_argument("data", help="Path to match log (parquet or CSV)")
    history_parser.add_argument("player", help="Player id")
    history_parser.add_argument("--current", "-c", type=int, default=None,
                                help="Player's stored rating (default: initial rating)")
    history_parser.add_argument("--created-at", help="Player creation time (ISO 8601)")
    history_parser.add_argument("--output", "-o", help="Save points to CSV")
    add_common_args(history_parser)

    monthly_parser = subparsers.add_parser("monthly", help="Monthly ratings for all players")
    monthly_parser.add_argument("data", help="Path to match log (parquet or CSV)")
    monthly_parser.add_argument("--now", help="Reference time for the current month (ISO 8601)")
    monthly_parser.add_argument("--output", "-o", help="Save series to CSV")
    add_common_args(monthly_parser)

    standings_parser = subparsers.add_parser("standings", help="Leaderboard from the match log")
    standings_parser.add_argument("data", help="Path to match log (parquet or CSV)")
    standings_parser.add_argument("-n", type=int, default=10, help="Number of players")
    add_common_args(standings_parser)

    drift_parser = subparsers.add_parser("drift", help="Check stored ratings against the log")
    drift_parser.add_argument("data", help="Path to match log (parquet or CSV)")
    drift_parser.add_argument("ratings", help="CSV with player_id and rating columns")
    add_common_args(drift_parser)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    commands = {
        "rate": cmd_rate,
        "predict": cmd_predict,
        "pairings": cmd_pairings,
        "history": cmd_history,
        "monthly": cmd_monthly,
        "standings": cmd_standings,
        "drift": cmd_drift,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
