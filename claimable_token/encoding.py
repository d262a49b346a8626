"""Normalisation helpers for addresses, uint256 amounts and 32-byte hashes."""
from __future__ import annotations

from typing import Any

from web3 import Web3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_HASH = b"\x00" * 32
UINT256_MAX = 2**256 - 1


def normalise_address(value: Any) -> str:
    """Return ``value`` as a checksummed EVM address.

    Accepts ``0x``-prefixed or bare hex strings in any case as well as raw
    20-byte values.

    Raises:
        ValueError: If ``value`` is not a 20-byte address.
    """

    if isinstance(value, (bytes, bytearray)):
        value = "0x" + bytes(value).hex()
    if not isinstance(value, str):
        raise ValueError(f"Expected address-like value, received {value!r}")
    text = value.strip().lower()
    if not text.startswith("0x"):
        text = f"0x{text}"
    if not Web3.is_address(text):
        raise ValueError(f"Invalid EVM address: {value!r}")
    return Web3.to_checksum_address(text)


def as_amount(value: Any, *, name: str = "amount") -> int:
    """Validate that ``value`` is an integer inside the uint256 range."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, received {value!r}")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"{name} is outside the uint256 range: {value}")
    return value


def parse_amount(text: str, *, name: str = "amount") -> int:
    """Parse a decimal or ``0x`` hex string into a uint256 amount."""

    cleaned = text.strip().replace("_", "")
    try:
        value = int(cleaned, 16) if cleaned.lower().startswith("0x") else int(cleaned)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer string, received {text!r}") from exc
    return as_amount(value, name=name)


def as_bytes32(value: Any) -> bytes:
    """Coerce ``value`` into a 32-byte hash.

    Hex strings may carry a ``0x`` prefix. ``HexBytes`` values returned by
    web3 are accepted as plain bytes.
    """

    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    elif isinstance(value, str):
        text = value.strip()
        if text.startswith(("0x", "0X")):
            text = text[2:]
        try:
            raw = bytes.fromhex(text)
        except ValueError as exc:
            raise ValueError(f"Invalid hex hash: {value!r}") from exc
    else:
        raise ValueError(f"Expected a 32-byte hash, received {value!r}")
    if len(raw) != 32:
        raise ValueError(f"Expected a 32-byte hash, received {len(raw)} bytes")
    return raw


def to_hex(value: bytes) -> str:
    return "0x" + bytes(value).hex()
