"""Tests for the MatchLog ledger view."""

from datetime import datetime

import pandas as pd
import polars as pl
import pytest

from match_elo import MatchLog, MatchRecord


def make_record(rid, p1, p2, d1, played_at, s1=5, s2=2):
    return MatchRecord(
        id=rid,
        session_date=played_at.date().isoformat(),
        player1_id=p1,
        player1_name=p1.title(),
        player1_score=s1,
        player1_delta=d1,
        player2_id=p2,
        player2_name=p2.title(),
        player2_score=s2,
        player2_delta=-d1,
        winner_id=p1 if s1 > s2 else p2,
        played_at=played_at,
    )


def sample_records():
    return [
        make_record("m2", "ben", "cat", 14, datetime(2025, 2, 1, 10)),
        make_record("m1", "ana", "ben", 16, datetime(2025, 1, 5, 10)),
        make_record("m3", "cat", "ana", -12, datetime(2025, 2, 3, 9), s1=1, s2=5),
    ]


def test_records_are_sorted_chronologically():
    log = MatchLog.from_records(sample_records())
    assert [r.id for r in log] == ["m1", "m2", "m3"]
    assert log.player_ids == ["ana", "ben", "cat"]
    assert log.first_played_at == datetime(2025, 1, 5, 10)
    assert len(log) == 3


def test_equal_timestamps_keep_insertion_order():
    when = datetime(2025, 1, 5, 10)
    log = MatchLog([
        make_record("b", "ana", "ben", 16, when),
        make_record("a", "ben", "ana", 15, when),
    ])
    assert [r.id for r in log] == ["b", "a"]


def test_append_returns_new_log():
    log = MatchLog(sample_records()[:1])
    longer = log.append(sample_records()[1])
    assert len(log) == 1
    assert len(longer) == 2
    assert longer.records[0].id == "m1"


def test_for_player():
    log = MatchLog(sample_records())
    assert [r.id for r in log.for_player("ana")] == ["m1", "m3"]
    assert len(log.for_player("ghost")) == 0


def test_record_helpers():
    record = make_record("m3", "cat", "ana", -12, datetime(2025, 2, 3, 9), s1=1, s2=5)
    assert record.delta_for("ana") == 12
    assert record.delta_for("cat") == -12
    assert record.score_for("ana") == 5
    assert record.opponent_of("ana") == "cat"
    assert record.won_by("ana")
    assert record.loser_id == "cat"
    assert record.winner_name == "Ana"
    with pytest.raises(KeyError):
        record.delta_for("ghost")


def test_player_frame_has_one_row_per_player_per_match():
    frame = MatchLog(sample_records()).player_frame()

    assert frame.height == 6
    ana = frame.filter(pl.col("player_id") == "ana")
    assert ana["delta"].to_list() == [16, 12]
    assert ana["won"].to_list() == [True, True]
    assert ana["opponent_id"].to_list() == ["ben", "cat"]


def test_empty_log_frames():
    log = MatchLog()
    assert not log
    assert log.to_dataframe().height == 0
    assert log.player_frame().height == 0
    assert "matches=0" in repr(log)
    with pytest.raises(ValueError):
        log.first_played_at


def test_from_polars_and_pandas_frames():
    wide = MatchLog(sample_records()).to_dataframe()

    from_polars = MatchLog.from_dataframe(wide)
    from_pandas = MatchLog.from_dataframe(wide.drop("created_at").to_pandas())

    assert from_polars.records == MatchLog(sample_records()).records
    assert [r.id for r in from_pandas] == ["m1", "m2", "m3"]
    assert from_pandas.records[0].player1_delta == 16


def test_missing_columns_rejected():
    df = pd.DataFrame({"id": ["m1"], "player1_id": ["ana"]})
    with pytest.raises(ValueError, match="Missing required columns"):
        MatchLog.from_dataframe(df)


def test_parquet_and_csv_files(tmp_path):
    log = MatchLog(sample_records())

    parquet_path = tmp_path / "matches.parquet"
    log.write_parquet(parquet_path)
    assert MatchLog.load(parquet_path).records == log.records

    csv_path = tmp_path / "matches.csv"
    log.to_dataframe().drop("created_at").write_csv(csv_path)
    from_csv = MatchLog.load(csv_path)
    assert [r.id for r in from_csv] == ["m1", "m2", "m3"]
    assert from_csv.records[2].played_at == datetime(2025, 2, 3, 9)
