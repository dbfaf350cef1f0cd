"""
Binary Reader - protobuf wire primitives

Counterpart of ``BinaryWriter``. Every read is bounds-checked and raises
``EncodingError`` on truncated or overlong input instead of returning a
partial value.
"""

import builtins

from ..runtime.errors import EncodingError

_MAX_VARINT_BYTES = 10


class BinaryReader:
    """
    Binary reader over an immutable byte buffer.

    Tracks a read offset; callers check ``eof`` to know when a message ends.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = buf
        self._off = 0

    @property
    def eof(self) -> bool:
        """True if at end of buffer."""
        return self._off >= len(self._buf)

    @property
    def offset(self) -> int:
        return self._off

    def u8(self) -> int:
        """
        Read unsigned 8-bit integer.

        Returns:
            Unsigned 8-bit integer value
        """
        if self._off >= len(self._buf):
            raise EncodingError("Unexpected end of buffer", details={"offset": self._off})
        val = self._buf[self._off]
        self._off += 1
        return val

    def uvarint(self) -> int:
        """
        Read unsigned varint in ULEB128 format.

        Returns:
            Decoded unsigned integer value (at most 64 bits)
        """
        x = 0
        s = 0
        for _ in range(_MAX_VARINT_BYTES):
            b = self.u8()
            x |= (b & 0x7F) << s
            if b < 0x80:
                if x > 0xFFFFFFFFFFFFFFFF:
                    raise EncodingError("Varint overflows 64 bits", details={"offset": self._off})
                return x
            s += 7
        raise EncodingError("Varint is longer than 10 bytes", details={"offset": self._off})

    def svarint(self) -> int:
        """
        Read zigzag-encoded signed varint (protobuf sint64).

        Returns:
            Signed integer value
        """
        ux = self.uvarint()
        return (ux >> 1) ^ -(ux & 1)

    def tag(self) -> tuple:
        """
        Read a field key.

        Returns:
            Tuple of (field_number, wire_type)
        """
        key = self.uvarint()
        field, wire_type = key >> 3, key & 0x07
        if field < 1:
            raise EncodingError(f"Invalid field number {field}", details={"offset": self._off})
        return field, wire_type

    def bytes(self, n: int) -> builtins.bytes:
        """
        Read n bytes from buffer.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes of specified length
        """
        if n < 0 or self._off + n > len(self._buf):
            raise EncodingError(
                f"Attempting to read {n} bytes beyond end of buffer",
                details={"offset": self._off, "length": len(self._buf)},
            )
        out = builtins.bytes(self._buf[self._off : self._off + n])
        self._off += n
        return out

    def len_prefixed_bytes(self) -> builtins.bytes:
        """
        Read bytes with length prefix using uvarint.

        Returns:
            Bytes with length read from uvarint prefix
        """
        n = self.uvarint()
        return self.bytes(n)
