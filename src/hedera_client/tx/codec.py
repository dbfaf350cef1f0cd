"""
Canonical transaction encoding.

``encode_*`` raise ``SchemaViolation`` for values that do not fit the
schema; ``decode_*`` raise ``EncodingError`` for malformed bytes. The
transport-facing ``serialize``/``deserialize`` pair works on hex strings,
and ``deserialize`` returns None instead of raising.
"""

from __future__ import annotations
import logging
from typing import Any, Mapping, Optional, Union

from ..codec.hexcodec import from_hex, to_hex
from ..codec.transaction_codec import encode_message
from ..runtime.errors import EncodingError, SchemaViolation
from .body import TransactionBody
from .envelope import TransactionEnvelope

logger = logging.getLogger(__name__)


def encode_body(body: Union[TransactionBody, Mapping[str, Any]]) -> bytes:
    """
    Canonically encode a transaction body.

    Args:
        body: A TransactionBody, or its wire dict form

    Returns:
        Canonical body bytes

    Raises:
        SchemaViolation: If the body does not match the schema
    """
    if isinstance(body, TransactionBody):
        return body.to_bytes()
    if isinstance(body, Mapping):
        return encode_message("TransactionBody", body)
    raise SchemaViolation(f"TransactionBody expected, got {type(body).__name__}")


def decode_body(data: bytes) -> TransactionBody:
    """
    Decode canonical body bytes.

    Raises:
        EncodingError: If the bytes are malformed or violate the schema
    """
    return TransactionBody.from_bytes(data)


def encode_envelope(envelope: TransactionEnvelope) -> bytes:
    """
    Encode an envelope for transport.

    Raises:
        SchemaViolation: If the envelope has no body
    """
    if not isinstance(envelope, TransactionEnvelope):
        raise SchemaViolation(f"TransactionEnvelope expected, got {type(envelope).__name__}")
    return envelope.to_bytes()


def decode_envelope(data: bytes) -> TransactionEnvelope:
    """
    Decode an envelope.

    Raises:
        EncodingError: If the bytes are malformed or violate the schema
    """
    return TransactionEnvelope.from_bytes(data)


def serialize(envelope: TransactionEnvelope) -> str:
    """Encode an envelope as a hex string."""
    data = encode_envelope(envelope)
    logger.debug("Serialized transaction %s (%d bytes, %d signatures)",
                 envelope.transaction_id, len(data), len(envelope.sig_map))
    return to_hex(data)


def deserialize(hex_string: str) -> Optional[TransactionEnvelope]:
    """
    Decode a hex envelope.

    Returns:
        The envelope, or None if the input is not a valid envelope
    """
    try:
        return decode_envelope(from_hex(hex_string))
    except EncodingError as e:
        logger.debug("Discarding undecodable transaction: %s", e)
        return None


__all__ = [
    "encode_body",
    "decode_body",
    "encode_envelope",
    "decode_envelope",
    "serialize",
    "deserialize",
]
