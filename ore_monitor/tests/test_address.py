import pytest
from solders.pubkey import Pubkey

from ore_monitor.chain.address import ORE_PROGRAM_ID, board_address, derive_address, round_address, round_id_seed
from ore_monitor.domain import SeedDerivationError


def test_board_address_matches_library_pda() -> None:
    expected, _bump = Pubkey.find_program_address([b"board"], ORE_PROGRAM_ID)
    assert board_address() == expected
    assert not board_address().is_on_curve()


def test_round_address_uses_le_round_id() -> None:
    seed = (1234).to_bytes(8, "little")
    expected, _bump = Pubkey.find_program_address([b"round", seed], ORE_PROGRAM_ID)
    assert round_address(1234) == expected
    assert round_id_seed(1234) == bytes([0xD2, 0x04, 0, 0, 0, 0, 0, 0])


def test_derivation_is_deterministic_and_seed_sensitive() -> None:
    assert round_address(7) == round_address(7)
    assert round_address(7) != round_address(8)
    other = Pubkey.new_unique()
    assert round_address(7, other) != round_address(7)


def test_seed_too_long() -> None:
    with pytest.raises(SeedDerivationError):
        derive_address(ORE_PROGRAM_ID, [b"x" * 33])


def test_too_many_seeds() -> None:
    with pytest.raises(SeedDerivationError):
        derive_address(ORE_PROGRAM_ID, [b"a"] * 16)


def test_non_bytes_seed() -> None:
    with pytest.raises(SeedDerivationError):
        derive_address(ORE_PROGRAM_ID, ["round"])


def test_round_id_out_of_range() -> None:
    with pytest.raises(SeedDerivationError):
        round_address(-1)
    with pytest.raises(SeedDerivationError):
        round_address(1 << 64)
