from __future__ import annotations

import struct
from dataclasses import dataclass

from solders.pubkey import Pubkey

from ore_monitor.domain import SQUARE_COUNT, Board, Malformed, Round, TooShort

DISCRIMINATOR_LEN = 8

U64 = "u64"
BYTES = "bytes"
PUBKEY = "pubkey"

_WIDTH = {U64: 8, BYTES: 1, PUBKEY: 32}


@dataclass(frozen=True)
class Field:
    name: str
    kind: str
    count: int = 1

    @property
    def width(self) -> int:
        return _WIDTH[self.kind] * self.count


class Layout:
    """Packed little-endian account layout with offsets computed from the field list.

    Offsets are relative to the start of the account data, i.e. they already
    include the discriminator.
    """

    def __init__(self, name: str, fields: list[Field], discriminator_len: int = DISCRIMINATOR_LEN):
        self.name = name
        self.fields = tuple(fields)
        self.discriminator_len = discriminator_len
        self.offsets: dict[str, int] = {}
        pos = discriminator_len
        for f in self.fields:
            if f.name in self.offsets:
                raise ValueError(f"duplicate field {f.name} in {name} layout")
            self.offsets[f.name] = pos
            pos += f.width
        self.size = pos

    def field(self, name: str) -> Field:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    def check(self, data: bytes, expected_discriminator: bytes | None = None) -> memoryview:
        buf = memoryview(data)
        if len(buf) < self.size:
            raise TooShort(self.name, self.size, len(buf))
        if len(buf) > self.size:
            raise Malformed(
                f"{self.name} buffer has {len(buf) - self.size} trailing bytes "
                f"(expected exactly {self.size})"
            )
        if expected_discriminator is not None:
            if len(expected_discriminator) != self.discriminator_len:
                raise ValueError(
                    f"discriminator must be {self.discriminator_len} bytes, got {len(expected_discriminator)}"
                )
            if bytes(buf[: self.discriminator_len]) != bytes(expected_discriminator):
                raise Malformed(
                    f"{self.name} discriminator mismatch: {bytes(buf[: self.discriminator_len]).hex()}"
                )
        return buf

    def read(self, buf: memoryview, name: str):
        f = self.field(name)
        off = self.offsets[name]
        if f.kind == U64:
            values = struct.unpack_from(f"<{f.count}Q", buf, off)
            return values[0] if f.count == 1 else values
        if f.kind == PUBKEY:
            return Pubkey.from_bytes(bytes(buf[off : off + f.width]))
        return bytes(buf[off : off + f.width])

    def read_all(self, buf: memoryview) -> dict:
        return {f.name: self.read(buf, f.name) for f in self.fields}


BOARD_LAYOUT = Layout(
    "board",
    [
        Field("round_id", U64),
        Field("start_unit", U64),
        Field("end_unit", U64),
        Field("epoch_id", U64),
    ],
)

ROUND_LAYOUT = Layout(
    "round",
    [
        Field("id", U64),
        Field("deployed", U64, SQUARE_COUNT),
        Field("randomness", BYTES, 32),
        Field("count", U64, SQUARE_COUNT),
        Field("expires_at", U64),
        Field("jackpot_pool", U64),
        Field("rent_payer", PUBKEY),
        Field("top_depositor", PUBKEY),
        Field("top_depositor_reward", U64),
        Field("total_deployed", U64),
        Field("total_depositors", U64),
        Field("total_vaulted", U64),
        Field("total_winnings", U64),
    ],
)

BOARD_ACCOUNT_LEN = BOARD_LAYOUT.size
ROUND_ACCOUNT_LEN = ROUND_LAYOUT.size


def decode_board(data: bytes, *, expected_discriminator: bytes | None = None) -> Board:
    buf = BOARD_LAYOUT.check(data, expected_discriminator)
    return Board(**BOARD_LAYOUT.read_all(buf))


def decode_round(data: bytes, *, expected_discriminator: bytes | None = None) -> Round:
    buf = ROUND_LAYOUT.check(data, expected_discriminator)
    return Round(**ROUND_LAYOUT.read_all(buf))
