from __future__ import annotations


class OreMonitorError(Exception):
    """Base class for typed failures raised by the round decoder core."""


class SeedDerivationError(OreMonitorError):
    """Seed combination is invalid for program-derived addressing."""


class AccountUnavailable(OreMonitorError):
    """Account does not exist on chain yet (e.g. a future round)."""

    def __init__(self, address: str):
        super().__init__(f"account {address} not found")
        self.address = address


class DecodeError(OreMonitorError):
    pass


class TooShort(DecodeError):
    def __init__(self, kind: str, expected: int, actual: int):
        super().__init__(f"{kind} buffer too short: need {expected} bytes, got {actual}")
        self.kind = kind
        self.expected = expected
        self.actual = actual


class Malformed(DecodeError):
    pass


class InvalidSlotRange(OreMonitorError):
    def __init__(self, start_unit: int, end_unit: int):
        super().__init__(f"end_unit {end_unit} precedes start_unit {start_unit}")
        self.start_unit = start_unit
        self.end_unit = end_unit
