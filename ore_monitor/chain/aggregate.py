from __future__ import annotations

from solders.pubkey import Pubkey

from ore_monitor.domain import SQUARE_COUNT, Round, RoundSummary, RoundTiming, SquareSummary

_DEFAULT_KEY = Pubkey.default()


def _squares(round_: Round | None, winner: int | None) -> tuple[SquareSummary, ...]:
    total = round_.total_deployed if round_ is not None else 0
    out = []
    for i in range(SQUARE_COUNT):
        num = i + 1
        deployed = round_.deployed[i] if round_ is not None else 0
        count = round_.count[i] if round_ is not None else 0
        pct = (deployed / total) * 100.0 if total > 0 else 0.0
        out.append(
            SquareSummary(
                square_num=num,
                deployed_amount=deployed,
                depositor_count=count,
                percentage_of_total=pct,
                is_winning=winner is not None and winner == num,
            )
        )
    return tuple(out)


def summarize(
    round_: Round | None,
    winner: int | None,
    timing: RoundTiming | None,
    *,
    round_id: int | None = None,
) -> RoundSummary:
    """Build the dashboard-facing summary. Never raises.

    Missing inputs degrade to null fields (and an all-zero grid when the round
    itself is missing) so consumers can still render something.
    """
    if round_ is not None:
        round_id = round_.id
        has_top = round_.top_depositor != _DEFAULT_KEY
        top_depositor = str(round_.top_depositor) if has_top else None
        top_reward = round_.top_depositor_reward if has_top else None
    else:
        top_depositor = None
        top_reward = None

    return RoundSummary(
        round_id=round_id,
        start_unit=timing.start_unit if timing else None,
        end_unit=timing.end_unit if timing else None,
        current_unit=timing.current_unit if timing else None,
        units_remaining=timing.units_remaining if timing else None,
        seconds_remaining=timing.seconds_remaining if timing else None,
        is_intermission=timing.is_intermission if timing else None,
        squares=_squares(round_, winner),
        total_deployed=round_.total_deployed if round_ is not None else None,
        total_depositors=round_.total_depositors if round_ is not None else None,
        total_vaulted=round_.total_vaulted if round_ is not None else None,
        top_depositor=top_depositor,
        top_depositor_reward=top_reward,
        jackpot_pool=round_.jackpot_pool if round_ is not None else None,
    )
