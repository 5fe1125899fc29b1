from __future__ import annotations

import struct

from ore_monitor.domain import SQUARE_COUNT, Malformed

RANDOMNESS_LEN = 32

_UNSET = (bytes(RANDOMNESS_LEN), b"\xff" * RANDOMNESS_LEN)


def is_finalized(randomness: bytes) -> bool:
    return bytes(randomness) not in _UNSET


def resolve_winner(randomness: bytes) -> int | None:
    """Winning square (1..25) for a round's randomness field, or None if not finalized yet.

    The field is read as four little-endian u64 words which are XOR-folded;
    the winner is ``(rng % 25) + 1``.
    """
    if len(randomness) != RANDOMNESS_LEN:
        raise Malformed(f"randomness must be {RANDOMNESS_LEN} bytes, got {len(randomness)}")
    if not is_finalized(randomness):
        return None
    r0, r1, r2, r3 = struct.unpack("<4Q", bytes(randomness))
    rng = r0 ^ r1 ^ r2 ^ r3
    return (rng % SQUARE_COUNT) + 1
