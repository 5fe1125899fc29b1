from .errors import (
    AccountUnavailable,
    DecodeError,
    InvalidSlotRange,
    Malformed,
    OreMonitorError,
    SeedDerivationError,
    TooShort,
)
from .models import LAMPORTS_PER_SOL, SQUARE_COUNT, Board, Round, RoundSummary, RoundTiming, SquareSummary

__all__ = [
    "AccountUnavailable",
    "DecodeError",
    "InvalidSlotRange",
    "Malformed",
    "OreMonitorError",
    "SeedDerivationError",
    "TooShort",
    "LAMPORTS_PER_SOL",
    "SQUARE_COUNT",
    "Board",
    "Round",
    "RoundSummary",
    "RoundTiming",
    "SquareSummary",
]
