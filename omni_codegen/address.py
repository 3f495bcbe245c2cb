"""
omni_codegen.address
====================

Literal contract addresses found in generation input.

Format
------
A '0x' prefix followed by exactly 40 hex digits (20 bytes). Upper and
lower case hex digits are both accepted; the prefix itself must be the
lowercase '0x'.

    parse_address("0x000102030405060708090a0b0c0d0e0f10111213")
    -> Address(raw=b"\\x00\\x01...\\x13")

Failures are reported as `MissingPrefixError` or `InvalidEncodingError`,
both subclasses of `AddressError`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from .errors import AddressError, InvalidEncodingError, MissingPrefixError

ADDRESS_LENGTH = 20

__all__ = [
    "ADDRESS_LENGTH",
    "Address",
    "parse_address",
    "AddressError",
    "MissingPrefixError",
    "InvalidEncodingError",
]

_HEX40_RE = re.compile(r"[0-9a-fA-F]{40}")


@dataclass(frozen=True, slots=True)
class Address:
    """A fixed 20-byte contract address."""

    raw: bytes

    LENGTH: ClassVar[int] = ADDRESS_LENGTH

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray)) or len(self.raw) != ADDRESS_LENGTH:
            raise InvalidEncodingError(f"address must be exactly {ADDRESS_LENGTH} bytes")
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def from_hex(cls, s: str) -> "Address":
        return parse_address(s)

    def hex(self) -> str:
        return "0x" + self.raw.hex()

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.hex()


def parse_address(s: str) -> Address:
    """Parse a '0x'-prefixed, 40-hex-digit string into an Address."""
    if not isinstance(s, str) or not s.startswith("0x"):
        raise MissingPrefixError("address must start with '0x'", value=str(s))
    digits = s[2:]
    if not _HEX40_RE.fullmatch(digits):
        raise InvalidEncodingError(
            f"address must have exactly {ADDRESS_LENGTH * 2} hex digits after '0x'",
            value=s,
        )
    return Address(bytes.fromhex(digits))
