"""
Hedera Binary Codec Module

Canonical protobuf-wire encoding and decoding of transaction messages.

Key components:
- writer.py / reader.py: varint, tag and length-delimited primitives
- schema.py: process-wide read-only schema registry
- transaction_codec.py: schema-validated message encode/decode
- hexcodec.py: strict hex transport form
"""

from .hexcodec import from_hex, to_hex
from .reader import BinaryReader
from .schema import SCHEMA, FieldSpec, MessageSpec
from .transaction_codec import decode_message, encode_message, verify_message
from .writer import BinaryWriter

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "SCHEMA",
    "FieldSpec",
    "MessageSpec",
    "encode_message",
    "decode_message",
    "verify_message",
    "to_hex",
    "from_hex",
]
