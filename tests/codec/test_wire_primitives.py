"""
Tests for the protobuf wire primitives (BinaryWriter / BinaryReader).
"""

import pytest

from hedera_client.codec.reader import BinaryReader
from hedera_client.codec.writer import WIRE_LEN, WIRE_VARINT, BinaryWriter
from hedera_client.runtime.errors import EncodingError


class TestVarints:
    """Unsigned and zigzag varints."""

    @pytest.mark.parametrize("value,encoded", [
        (0, "00"),
        (1, "01"),
        (127, "7f"),
        (128, "8001"),
        (300, "ac02"),
        (100_000_000, "80c2d72f"),
        ((1 << 64) - 1, "ffffffffffffffffff01"),
    ])
    def test_uvarint_known_encodings(self, value, encoded):
        w = BinaryWriter()
        w.uvarint(value)
        assert w.to_bytes().hex() == encoded
        assert BinaryReader(bytes.fromhex(encoded)).uvarint() == value

    def test_negative_uvarint_is_ten_bytes(self):
        """Negative int64 values use 64-bit two's complement."""
        w = BinaryWriter()
        w.uvarint(-1)
        assert w.to_bytes().hex() == "ffffffffffffffffff01"

    @pytest.mark.parametrize("value,encoded", [
        (0, "00"),
        (-1, "01"),
        (1, "02"),
        (-2, "03"),
        (2, "04"),
        (-100_000_000, "ff83af5f"),
    ])
    def test_svarint_zigzag(self, value, encoded):
        w = BinaryWriter()
        w.svarint(value)
        assert w.to_bytes().hex() == encoded
        assert BinaryReader(bytes.fromhex(encoded)).svarint() == value

    def test_truncated_varint(self):
        with pytest.raises(EncodingError):
            BinaryReader(b"\x80\x80").uvarint()

    def test_overlong_varint(self):
        with pytest.raises(EncodingError):
            BinaryReader(b"\xff" * 11).uvarint()

    def test_varint_overflowing_64_bits(self):
        with pytest.raises(EncodingError, match="64 bits"):
            BinaryReader(b"\xff" * 9 + b"\x7f").uvarint()


class TestTagsAndLengths:
    """Field keys and length-delimited payloads."""

    def test_tag_encoding(self):
        w = BinaryWriter()
        w.tag(1, WIRE_LEN)
        w.tag(3, WIRE_VARINT)
        assert w.to_bytes() == b"\x0a\x18"

    def test_tag_roundtrip(self):
        w = BinaryWriter()
        w.tag(14, WIRE_LEN)
        assert BinaryReader(w.to_bytes()).tag() == (14, WIRE_LEN)

    def test_field_zero_rejected(self):
        with pytest.raises(ValueError):
            BinaryWriter().tag(0, WIRE_VARINT)
        with pytest.raises(EncodingError):
            BinaryReader(b"\x00").tag()

    def test_len_prefixed_bytes(self):
        w = BinaryWriter()
        w.len_prefixed_bytes(b"test")
        data = w.to_bytes()
        assert data == b"\x04test"
        r = BinaryReader(data)
        assert r.len_prefixed_bytes() == b"test"
        assert r.eof

    def test_length_past_end(self):
        with pytest.raises(EncodingError):
            BinaryReader(b"\x05ab").len_prefixed_bytes()
