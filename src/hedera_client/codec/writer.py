"""
Binary Writer - protobuf wire primitives

Implements the low-level byte encoding used by the canonical transaction
codec: base-128 varints, field tags, zigzag integers and length-delimited
payloads, all in the protobuf (proto3) wire format.
"""

from typing import List

WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LEN = 2
WIRE_FIXED32 = 5

_U64_MASK = 0xFFFFFFFFFFFFFFFF


class BinaryWriter:
    """
    Append-only binary writer.

    Each method appends to an internal buffer; ``to_bytes`` returns an
    immutable snapshot. Writers are cheap and are created per message.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)
        """
        self._bb.append(v & 0xFF)

    def bytes(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)

    def uvarint(self, v: int) -> None:
        """
        Write unsigned varint in ULEB128 format.

        Negative values are written as their 64-bit two's complement, which
        is how protobuf encodes negative int64/int32 fields (ten bytes).

        Args:
            v: Integer value to encode as varint
        """
        x = v & _U64_MASK
        while x >= 0x80:
            self.u8((x & 0x7F) | 0x80)
            x >>= 7
        self.u8(x)

    def svarint(self, v: int) -> None:
        """
        Write signed varint with zigzag encoding (protobuf sint64).

        Args:
            v: Signed value to encode
        """
        self.uvarint(((v << 1) ^ (v >> 63)) & _U64_MASK)

    def tag(self, field: int, wire_type: int) -> None:
        """
        Write a field key.

        Args:
            field: Field number (>= 1)
            wire_type: One of the WIRE_* constants
        """
        if field < 1:
            raise ValueError(f"Field number is out of range: {field}")
        self.uvarint((field << 3) | wire_type)

    def len_prefixed_bytes(self, v: bytes) -> None:
        """
        Write bytes with length prefix using uvarint.

        Args:
            v: Bytes to write with length prefix
        """
        self.uvarint(len(v))
        self.bytes(v)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)
