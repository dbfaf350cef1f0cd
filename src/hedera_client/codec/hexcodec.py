"""
Hex codec for the textual transport form.

``bytes.fromhex`` tolerates whitespace, so it is not an exact inverse of
``bytes.hex``; these helpers are strict and raise ``EncodingError`` on any
input that ``to_hex`` could not have produced (case aside).
"""

import re
from typing import Union

from ..runtime.errors import EncodingError, ErrorCode

_HEX_RE = re.compile(r"\A(?:[0-9a-fA-F]{2})*\Z")


def to_hex(data: Union[bytes, bytearray, memoryview]) -> str:
    """Encode bytes as a lowercase hex string."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"bytes expected, got {type(data).__name__}")
    return bytes(data).hex()


def from_hex(text: str) -> bytes:
    """
    Decode a hex string.

    Args:
        text: Even-length string of hex digits, no prefix or separators

    Returns:
        Decoded bytes

    Raises:
        EncodingError: If the string is not strict hex
    """
    if not isinstance(text, str):
        raise EncodingError(f"Hex string expected, got {type(text).__name__}", ErrorCode.INVALID_HEX)
    if not _HEX_RE.match(text):
        reason = "odd length" if len(text) % 2 else "non-hex characters"
        raise EncodingError(f"Invalid hex string ({reason})", ErrorCode.INVALID_HEX,
                            details={"length": len(text)})
    return bytes.fromhex(text)


__all__ = ["to_hex", "from_hex"]
