import struct

import pytest
from solders.pubkey import Pubkey

from ore_monitor.chain import board_address, round_address
from ore_monitor.domain import Board, Round

DISC = b"\x00" * 8


def encode_board(board: Board, discriminator: bytes = DISC) -> bytes:
    return discriminator + struct.pack("<4Q", board.round_id, board.start_unit, board.end_unit, board.epoch_id)


def encode_round(r: Round, discriminator: bytes = DISC) -> bytes:
    return b"".join(
        [
            discriminator,
            struct.pack("<Q", r.id),
            struct.pack("<25Q", *r.deployed),
            r.randomness,
            struct.pack("<25Q", *r.count),
            struct.pack("<2Q", r.expires_at, r.jackpot_pool),
            bytes(r.rent_payer),
            bytes(r.top_depositor),
            struct.pack(
                "<5Q",
                r.top_depositor_reward,
                r.total_deployed,
                r.total_depositors,
                r.total_vaulted,
                r.total_winnings,
            ),
        ]
    )


def randomness_words(r0: int, r1: int = 0, r2: int = 0, r3: int = 0) -> bytes:
    return struct.pack("<4Q", r0, r1, r2, r3)


@pytest.fixture
def make_round():
    def _make(**overrides) -> Round:
        deployed = overrides.pop("deployed", tuple((i + 1) * 1_000_000 for i in range(25)))
        count = overrides.pop("count", tuple(i % 4 for i in range(25)))
        fields = dict(
            id=42,
            deployed=tuple(deployed),
            randomness=randomness_words(5),
            count=tuple(count),
            expires_at=9_999,
            jackpot_pool=77_000_000,
            rent_payer=Pubkey.new_unique(),
            top_depositor=Pubkey.new_unique(),
            top_depositor_reward=100_000_000_000,
            total_deployed=sum(deployed),
            total_depositors=sum(count),
            total_vaulted=12_345,
            total_winnings=6_789,
        )
        fields.update(overrides)
        return Round(**fields)

    return _make


class FakeRpc:
    """In-memory stand-in for SolanaRpc keyed by account address."""

    def __init__(self, program_id: Pubkey, slot: int = 0):
        self.program_id = program_id
        self.slot = slot
        self.accounts: dict[str, bytes] = {}
        self.calls: list[str] = []

    def set_board(self, board: Board) -> None:
        self.accounts[str(board_address(self.program_id))] = encode_board(board)

    def set_round(self, r: Round) -> None:
        self.accounts[str(round_address(r.id, self.program_id))] = encode_round(r)

    def set_raw(self, address: Pubkey, data: bytes) -> None:
        self.accounts[str(address)] = data

    async def get_slot(self) -> int:
        self.calls.append("getSlot")
        return self.slot

    async def get_account_data(self, address) -> bytes | None:
        self.calls.append(f"getAccountInfo:{address}")
        return self.accounts.get(str(address))


@pytest.fixture
def program_id() -> Pubkey:
    return Pubkey.from_string("oreV3EG1i9BEgiAJ8b177Z2S2rMarzak4NMv1kULvWv")


@pytest.fixture
def fake_rpc(program_id):
    return FakeRpc(program_id)
