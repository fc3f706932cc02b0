"""
Value types shared by the deployer, the host and the address oracle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from eth_utils import is_bytes, to_canonical_address

ADDRESS_SIZE = 20
ZERO_ADDRESS = b"\x00" * ADDRESS_SIZE

AddressLike = Union[bytes, bytearray, str]


def normalize_address(value: AddressLike) -> bytes:
    """Return the canonical 20-byte form of an address.

    Accepts raw bytes or a 0x-prefixed hex string (checksummed or not).
    """
    if is_bytes(value):
        if len(value) != ADDRESS_SIZE:
            raise ValueError(f"Address must be {ADDRESS_SIZE} bytes, got {len(value)}")
        return bytes(value)
    return to_canonical_address(value)


def left_pad32(data: bytes) -> bytes:
    """Right-align data in a 32-byte word (topic encoding of an address)."""
    if len(data) > 32:
        raise ValueError(f"Cannot pad {len(data)} bytes into a 32-byte word")
    return data.rjust(32, b"\x00")


@dataclass
class Log:
    address: bytes = field(default_factory=lambda: ZERO_ADDRESS)
    topics: list[bytes] = field(default_factory=list)
    data: bytes = b""


@dataclass(frozen=True)
class CallContext:
    """Explicit call context: who is calling and how much value is attached."""

    caller: bytes = ZERO_ADDRESS
    value: int = 0

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"Call value must be non-negative, got {self.value}")
        object.__setattr__(self, "caller", normalize_address(self.caller))
