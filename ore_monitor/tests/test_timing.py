import pytest

from ore_monitor.chain.timing import compute_timing
from ore_monitor.domain import InvalidSlotRange


def test_mid_round() -> None:
    t = compute_timing(1000, 1150, 1100, 0.4)
    assert t.units_remaining == 50
    assert t.seconds_remaining == 20
    assert t.is_intermission is False
    assert (t.start_unit, t.end_unit, t.current_unit) == (1000, 1150, 1100)


def test_intermission_clamps_to_zero() -> None:
    t = compute_timing(1000, 1150, 1200, 0.4)
    assert t.units_remaining == 0
    assert t.seconds_remaining == 0
    assert t.is_intermission is True


def test_exactly_at_end_is_intermission() -> None:
    t = compute_timing(1000, 1150, 1150, 0.4)
    assert t.units_remaining == 0
    assert t.is_intermission is True


def test_rounds_half_up() -> None:
    assert compute_timing(0, 10, 5, 0.5).seconds_remaining == 3
    assert compute_timing(0, 10, 7, 0.4).seconds_remaining == 1


def test_invalid_range() -> None:
    with pytest.raises(InvalidSlotRange):
        compute_timing(1150, 1000, 1100, 0.4)


def test_monotonic_non_increasing() -> None:
    prev = None
    for current in range(900, 1300):
        t = compute_timing(1000, 1150, current, 0.4)
        if prev is not None:
            assert t.units_remaining <= prev.units_remaining
            assert t.seconds_remaining <= prev.seconds_remaining
        if current >= 1150:
            assert t.units_remaining == 0
        prev = t
