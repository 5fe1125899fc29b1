from .address import ORE_PROGRAM_ID, board_address, derive_address, round_address
from .aggregate import summarize
from .layout import BOARD_ACCOUNT_LEN, ROUND_ACCOUNT_LEN, decode_board, decode_round
from .rng import resolve_winner
from .timing import DEFAULT_SLOT_DURATION_SEC, compute_timing

__all__ = [
    "ORE_PROGRAM_ID",
    "board_address",
    "derive_address",
    "round_address",
    "summarize",
    "BOARD_ACCOUNT_LEN",
    "ROUND_ACCOUNT_LEN",
    "decode_board",
    "decode_round",
    "resolve_winner",
    "DEFAULT_SLOT_DURATION_SEC",
    "compute_timing",
]
