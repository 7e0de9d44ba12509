from __future__ import annotations

from dataclasses import dataclass

from .project_constants import ADDRESS_LENGTH


@dataclass(frozen=True)
class Address:
    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, bytes) or len(self.raw) != ADDRESS_LENGTH:
            raise ValueError(
                f"Address must be exactly {ADDRESS_LENGTH} bytes, got {self.raw!r}"
            )

    @staticmethod
    def from_bytes(raw: bytes) -> "Address":
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise ValueError(f"Address needs raw bytes, got {type(raw).__name__}")
        return Address(bytes(raw))

    @staticmethod
    def from_hex(text: str) -> "Address":
        """
        Parses "0x" followed by 40 hex digits (any case).
        """
        s = text.strip()
        if not s.lower().startswith("0x") or len(s) != 2 + 2 * ADDRESS_LENGTH:
            raise ValueError(f"Not a 0x-prefixed {ADDRESS_LENGTH}-byte address: {text!r}")
        try:
            return Address(bytes.fromhex(s[2:]))
        except ValueError as e:
            raise ValueError(f"Invalid hex in address {text!r}: {e}") from e

    @property
    def is_zero(self) -> bool:
        return not any(self.raw)

    def __str__(self) -> str:
        return "0x" + self.raw.hex()


ZERO_ADDRESS = Address(bytes(ADDRESS_LENGTH))
