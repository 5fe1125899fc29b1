from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from solders.pubkey import Pubkey

SQUARE_COUNT = 25
LAMPORTS_PER_SOL = 1_000_000_000


@dataclass(frozen=True)
class Board:
    round_id: int
    start_unit: int
    end_unit: int
    epoch_id: int


@dataclass(frozen=True)
class Round:
    id: int
    deployed: tuple[int, ...]
    randomness: bytes
    count: tuple[int, ...]
    expires_at: int
    jackpot_pool: int
    rent_payer: Pubkey
    top_depositor: Pubkey
    top_depositor_reward: int
    total_deployed: int
    total_depositors: int
    total_vaulted: int
    total_winnings: int = 0

    @property
    def deployed_mismatch(self) -> int:
        """sum(deployed) - total_deployed; non-zero means the account disagrees with itself."""
        return sum(self.deployed) - self.total_deployed


@dataclass(frozen=True)
class SquareSummary:
    square_num: int
    deployed_amount: int
    depositor_count: int
    percentage_of_total: float
    is_winning: bool


@dataclass(frozen=True)
class RoundTiming:
    start_unit: int
    end_unit: int
    current_unit: int
    units_remaining: int
    seconds_remaining: int
    is_intermission: bool


@dataclass(frozen=True)
class RoundSummary:
    round_id: int | None
    start_unit: int | None
    end_unit: int | None
    current_unit: int | None
    units_remaining: int | None
    seconds_remaining: int | None
    is_intermission: bool | None
    squares: tuple[SquareSummary, ...]
    total_deployed: int | None
    total_depositors: int | None
    total_vaulted: int | None
    top_depositor: str | None
    top_depositor_reward: int | None
    jackpot_pool: int | None

    @property
    def winning_square(self) -> int | None:
        for sq in self.squares:
            if sq.is_winning:
                return sq.square_num
        return None

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["squares"] = [asdict(sq) for sq in self.squares]
        return out
