"""
Scalar encodings used on the wire: hex addresses and base64 blobs.
"""
import base64
import binascii
import re
from typing import Union

ADDRESS_LENGTH = 20

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def normalize_address(addr: str) -> str:
    """
    Parse a hex address and return its canonical 0x-prefixed form.

    Args:
        addr: Hex string with or without a 0x prefix, e.g. '0x1aa' or '1aa'.
            Short values are left padded with zeros to 20 bytes.

    Returns:
        Lowercase 0x-prefixed 40 character hex string

    Raises:
        ValueError: If the value is not hex or longer than 20 bytes
    """
    if not isinstance(addr, str):
        raise ValueError(f"Address must be a string, got {type(addr).__name__}")
    value = addr[2:] if addr[:2] in ("0x", "0X") else addr
    if not _HEX_RE.fullmatch(value):
        raise ValueError(f"Invalid hex address {addr!r}: non-hex character")
    if len(value) % 2:
        value = "0" + value
    try:
        raw = bytes.fromhex(value)
    except ValueError as e:
        raise ValueError(f"Invalid hex address {addr!r}: {e}")
    if len(raw) > ADDRESS_LENGTH:
        raise ValueError(
            f"Hex string is too long. Address's length is {ADDRESS_LENGTH} bytes."
        )
    return "0x" + raw.rjust(ADDRESS_LENGTH, b"\x00").hex()


def short_address(addr: str) -> str:
    """Return the address with leading zeros trimmed, e.g. 0x2."""
    trimmed = normalize_address(addr)[2:].lstrip("0")
    return "0x" + (trimmed or "0")


def b64encode(data: Union[bytes, bytearray]) -> str:
    """Encode bytes as standard padded base64 text."""
    return base64.b64encode(bytes(data)).decode("ascii")


def b64decode(data: str) -> bytes:
    """
    Decode standard base64 text, rejecting anything outside the alphabet.

    Raises:
        ValueError: If the input is not valid base64
    """
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, TypeError) as e:
        raise ValueError(f"Invalid base64 data: {e}")
