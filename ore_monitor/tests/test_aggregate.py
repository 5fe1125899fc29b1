import json
import math

from solders.pubkey import Pubkey

from ore_monitor.chain.aggregate import summarize
from ore_monitor.chain.timing import compute_timing

SUMMARY_KEYS = [
    "round_id",
    "start_unit",
    "end_unit",
    "current_unit",
    "units_remaining",
    "seconds_remaining",
    "is_intermission",
    "squares",
    "total_deployed",
    "total_depositors",
    "total_vaulted",
    "top_depositor",
    "top_depositor_reward",
    "jackpot_pool",
]
SQUARE_KEYS = ["square_num", "deployed_amount", "depositor_count", "percentage_of_total", "is_winning"]


def test_full_summary_shape(make_round) -> None:
    r = make_round()
    timing = compute_timing(1000, 1150, 1100, 0.4)
    out = summarize(r, 6, timing).to_dict()

    assert list(out) == SUMMARY_KEYS
    assert len(out["squares"]) == 25
    assert list(out["squares"][0]) == SQUARE_KEYS
    assert [sq["square_num"] for sq in out["squares"]] == list(range(1, 26))
    assert out["round_id"] == 42
    assert out["seconds_remaining"] == 20
    assert out["top_depositor"] == str(r.top_depositor)
    assert out["top_depositor_reward"] == r.top_depositor_reward
    assert out["jackpot_pool"] == r.jackpot_pool
    json.dumps(out)


def test_percentages_and_winner(make_round) -> None:
    r = make_round()
    summary = summarize(r, 6, None)
    assert summary.winning_square == 6
    assert [sq.is_winning for sq in summary.squares].count(True) == 1
    assert summary.squares[5].is_winning
    sq = summary.squares[2]
    assert sq.deployed_amount == r.deployed[2]
    assert sq.depositor_count == r.count[2]
    assert math.isclose(sq.percentage_of_total, r.deployed[2] / r.total_deployed * 100)
    assert math.isclose(sum(s.percentage_of_total for s in summary.squares), 100.0)


def test_zero_total_guard(make_round) -> None:
    r = make_round(deployed=(0,) * 25, count=(0,) * 25)
    summary = summarize(r, None, None)
    assert all(sq.percentage_of_total == 0.0 for sq in summary.squares)
    assert summary.winning_square is None


def test_default_top_depositor_is_null(make_round) -> None:
    out = summarize(make_round(top_depositor=Pubkey.default()), None, None).to_dict()
    assert out["top_depositor"] is None
    assert out["top_depositor_reward"] is None


def test_missing_round_is_renderable() -> None:
    timing = compute_timing(1000, 1150, 1100, 0.4)
    out = summarize(None, None, timing, round_id=9).to_dict()
    assert out["round_id"] == 9
    assert out["units_remaining"] == 50
    assert out["total_deployed"] is None
    assert out["jackpot_pool"] is None
    assert len(out["squares"]) == 25
    assert all(sq["deployed_amount"] == 0 and not sq["is_winning"] for sq in out["squares"])


def test_missing_timing_gives_null_fields(make_round) -> None:
    out = summarize(make_round(), None, None).to_dict()
    for key in ("start_unit", "end_unit", "current_unit", "units_remaining", "seconds_remaining", "is_intermission"):
        assert out[key] is None
