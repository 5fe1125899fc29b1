from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from solders.pubkey import Pubkey

from ore_monitor.chain import board_address, decode_board, decode_round, resolve_winner, round_address
from ore_monitor.data import require_account
from ore_monitor.domain import LAMPORTS_PER_SOL, SQUARE_COUNT

EXPECTED_WIN_RATE = 1.0 / SQUARE_COUNT

_DEFAULT_KEY = Pubkey.default()


@dataclass(frozen=True)
class RoundRecord:
    round_id: int
    winning_square: int | None
    total_deployed: int
    total_vaulted: int
    total_depositors: int
    jackpot_pool: int
    top_depositor: str | None
    top_depositor_reward: int | None

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["total_deployed_sol"] = self.total_deployed / LAMPORTS_PER_SOL
        out["total_vaulted_sol"] = self.total_vaulted / LAMPORTS_PER_SOL
        return out


@dataclass(frozen=True)
class SquareFrequency:
    square_num: int
    times_won: int
    win_rate: float
    label: str


async def fetch_round_history(
    rpc,
    program_id: Pubkey,
    count: int,
    *,
    current_round_id: int | None = None,
    cache: dict[int, RoundRecord] | None = None,
) -> list[RoundRecord]:
    """Records for up to ``count`` rounds before the live one, newest first.

    Stops at the first round whose account is missing. Finalized records are
    immutable, so they are kept in ``cache`` and never fetched twice.
    """
    if current_round_id is None:
        board_addr = board_address(program_id)
        board = decode_board(require_account(await rpc.get_account_data(board_addr), board_addr))
        current_round_id = board.round_id

    history: list[RoundRecord] = []
    for offset in range(1, max(0, int(count)) + 1):
        if current_round_id < offset:
            break
        round_id = current_round_id - offset
        if cache is not None and round_id in cache:
            history.append(cache[round_id])
            continue

        data = await rpc.get_account_data(round_address(round_id, program_id))
        if data is None:
            break
        r = decode_round(data)
        has_top = r.top_depositor != _DEFAULT_KEY
        record = RoundRecord(
            round_id=round_id,
            winning_square=resolve_winner(r.randomness),
            total_deployed=r.total_deployed,
            total_vaulted=r.total_vaulted,
            total_depositors=r.total_depositors,
            jackpot_pool=r.jackpot_pool,
            top_depositor=str(r.top_depositor) if has_top else None,
            top_depositor_reward=r.top_depositor_reward if has_top else None,
        )
        if cache is not None and record.winning_square is not None:
            cache[round_id] = record
        history.append(record)
    return history


def square_win_frequency(history: list[RoundRecord]) -> tuple[SquareFrequency, ...]:
    """Per-square win counts over the resolved rounds in ``history``.

    Squares winning above 1.5x the uniform rate are labelled "hot", below
    0.5x "cold".
    """
    wins = [0] * SQUARE_COUNT
    resolved = 0
    for record in history:
        if record.winning_square is None:
            continue
        resolved += 1
        wins[record.winning_square - 1] += 1

    out = []
    for i, n in enumerate(wins):
        rate = n / resolved if resolved else 0.0
        if resolved and rate > EXPECTED_WIN_RATE * 1.5:
            label = "hot"
        elif resolved and rate < EXPECTED_WIN_RATE * 0.5:
            label = "cold"
        else:
            label = "neutral"
        out.append(SquareFrequency(square_num=i + 1, times_won=n, win_rate=rate, label=label))
    return tuple(out)


def history_payload(history: list[RoundRecord]) -> dict[str, Any]:
    return {
        "rounds": [r.to_dict() for r in history],
        "count": len(history),
        "squares": [asdict(sq) for sq in square_win_frequency(history)],
        "expected_win_rate": EXPECTED_WIN_RATE,
    }
