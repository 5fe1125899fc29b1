from __future__ import annotations

from ore_monitor.domain import InvalidSlotRange, RoundTiming

# Solana targets 400ms slots.
DEFAULT_SLOT_DURATION_SEC = 0.4


def compute_timing(
    start_unit: int,
    end_unit: int,
    current_unit: int,
    unit_duration_seconds: float = DEFAULT_SLOT_DURATION_SEC,
) -> RoundTiming:
    if end_unit < start_unit:
        raise InvalidSlotRange(start_unit, end_unit)
    units_remaining = max(0, end_unit - current_unit)
    # half-up, not banker's rounding
    seconds_remaining = int(units_remaining * float(unit_duration_seconds) + 0.5)
    return RoundTiming(
        start_unit=start_unit,
        end_unit=end_unit,
        current_unit=current_unit,
        units_remaining=units_remaining,
        seconds_remaining=seconds_remaining,
        is_intermission=current_unit >= end_unit,
    )
