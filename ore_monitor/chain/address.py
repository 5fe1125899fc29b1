from __future__ import annotations

from collections.abc import Sequence

from solders.pubkey import Pubkey

from ore_monitor.domain import SeedDerivationError

ORE_PROGRAM_ID = Pubkey.from_string("oreV3EG1i9BEgiAJ8b177Z2S2rMarzak4NMv1kULvWv")

BOARD_SEED = b"board"
ROUND_SEED = b"round"

# find_program_address appends a one-byte bump, so callers get one seed fewer.
MAX_SEEDS = 15
MAX_SEED_LEN = 32
U64_MAX = (1 << 64) - 1


def _check_seeds(seeds: Sequence[bytes]) -> list[bytes]:
    if len(seeds) > MAX_SEEDS:
        raise SeedDerivationError(f"too many seeds: {len(seeds)} > {MAX_SEEDS}")
    out = []
    for i, seed in enumerate(seeds):
        if not isinstance(seed, (bytes, bytearray, memoryview)):
            raise SeedDerivationError(f"seed {i} is {type(seed).__name__}, expected bytes")
        seed = bytes(seed)
        if len(seed) > MAX_SEED_LEN:
            raise SeedDerivationError(f"seed {i} is {len(seed)} bytes, max {MAX_SEED_LEN}")
        out.append(seed)
    return out


def derive_address(program_id: Pubkey, seeds: Sequence[bytes]) -> Pubkey:
    """Return the canonical program-derived address for ``seeds`` under ``program_id``.

    Pure and deterministic: the same program id and ordered seeds always map
    to the same off-curve address. Invalid seed lists raise
    ``SeedDerivationError`` instead of whatever the underlying library does.
    """
    checked = _check_seeds(seeds)
    try:
        address, _bump = Pubkey.find_program_address(checked, program_id)
    except (ValueError, OverflowError) as exc:
        raise SeedDerivationError(f"no valid bump for seeds: {exc}") from exc
    return address


def round_id_seed(round_id: int) -> bytes:
    if not 0 <= int(round_id) <= U64_MAX:
        raise SeedDerivationError(f"round id {round_id} does not fit in u64")
    return int(round_id).to_bytes(8, "little")


def board_address(program_id: Pubkey = ORE_PROGRAM_ID) -> Pubkey:
    return derive_address(program_id, [BOARD_SEED])


def round_address(round_id: int, program_id: Pubkey = ORE_PROGRAM_ID) -> Pubkey:
    return derive_address(program_id, [ROUND_SEED, round_id_seed(round_id)])
