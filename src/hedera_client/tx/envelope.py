"""
Transaction envelope and signature map assembly.

Envelopes are immutable: ``attach_signature`` and ``sign_and_attach`` return
a new envelope and leave the input untouched, so a failed attach can never
leave a half-signed value behind. The body is encoded exactly once, when the
envelope is created; those bytes are what signers sign and what the wire
form embeds.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, model_validator

from ..codec.transaction_codec import decode_message, encode_message
from ..codec.writer import WIRE_LEN, BinaryWriter
from ..crypto.ed25519 import SIGNATURE_LENGTH, Ed25519PublicKey, KeyInput, decode_public_key
from ..runtime.errors import DuplicateSignature, EncodingError, MissingBody, SchemaViolation
from ..signers.ed25519 import Ed25519Signer
from .body import TransactionBody

logger = logging.getLogger(__name__)


class SignaturePair(BaseModel):
    """One entry of the signature map."""

    pub_key_prefix: bytes = b""
    signature: bytes = Field(min_length=SIGNATURE_LENGTH, max_length=SIGNATURE_LENGTH)

    model_config = {"frozen": True, "extra": "forbid"}

    def to_proto(self) -> Dict[str, bytes]:
        return {"pubKeyPrefix": self.pub_key_prefix, "ed25519": self.signature}

    @classmethod
    def from_proto(cls, data: Dict[str, Any]) -> SignaturePair:
        return cls(pub_key_prefix=data.get("pubKeyPrefix", b""), signature=data["ed25519"])


class TransactionEnvelope(BaseModel):
    """
    Body plus ordered signature map.

    ``body_bytes`` is filled in from ``body`` at construction when not given.
    When given (decode path) it must decode to ``body``.
    """

    body: Optional[TransactionBody] = None
    body_bytes: bytes = b""
    sig_map: Tuple[SignaturePair, ...] = ()

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="before")
    @classmethod
    def _encode_body(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("body") is not None and not data.get("body_bytes"):
            body = data["body"]
            if isinstance(body, TransactionBody):
                data = {**data, "body_bytes": body.to_bytes()}
        return data

    @model_validator(mode="after")
    def _consistent(self) -> TransactionEnvelope:
        if self.body is None:
            if self.body_bytes or self.sig_map:
                raise ValueError("envelope without a body cannot carry body bytes or signatures")
        else:
            try:
                decoded = TransactionBody.from_bytes(self.body_bytes)
            except EncodingError as e:
                raise ValueError(f"body_bytes are not a valid body: {e.message}") from e
            if decoded != self.body:
                raise ValueError("body_bytes do not encode body")
        return self

    @classmethod
    def for_body(cls, body: TransactionBody) -> TransactionEnvelope:
        """Wrap a finalized body in an unsigned envelope."""
        return cls(body=body)

    @property
    def is_signed(self) -> bool:
        return len(self.sig_map) > 0

    @property
    def transaction_id(self):
        if self.body is None:
            raise MissingBody()
        return self.body.transaction_id

    def verify_signatures(self) -> bool:
        """
        Check every signature against the body bytes.

        Only pairs whose prefix is a full 32-byte key can be checked; any
        other pair makes this return False. An unsigned envelope is not
        considered verified.
        """
        if self.body is None or not self.sig_map:
            return False
        for pair in self.sig_map:
            if len(pair.pub_key_prefix) != 32:
                return False
            if not Ed25519PublicKey(pair.pub_key_prefix).verify(pair.signature, self.body_bytes):
                return False
        return True

    def to_proto(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.body is not None:
            out["body"] = self.body.to_proto()
        if self.sig_map:
            out["sigMap"] = {"sigPair": [p.to_proto() for p in self.sig_map]}
        return out

    def to_bytes(self) -> bytes:
        """
        Wire encoding of the envelope.

        The body is embedded from ``body_bytes`` verbatim rather than
        re-encoded.

        Raises:
            SchemaViolation: If the envelope has no body
        """
        if self.body is None:
            raise SchemaViolation("Transaction failed schema validation",
                                  ["Transaction.body: required field is missing"])
        writer = BinaryWriter()
        writer.tag(1, WIRE_LEN)
        writer.len_prefixed_bytes(self.body_bytes)
        if self.sig_map:
            sig_map = encode_message("SignatureMap", {"sigPair": [p.to_proto() for p in self.sig_map]})
            writer.tag(3, WIRE_LEN)
            writer.len_prefixed_bytes(sig_map)
        return writer.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> TransactionEnvelope:
        """
        Decode and validate an envelope.

        Raises:
            EncodingError: If the bytes are malformed or violate the schema
        """
        fields = decode_message("Transaction", data, raw_fields=("body",))
        body_bytes = fields["body"]
        body = TransactionBody.from_bytes(body_bytes)
        pairs = fields.get("sigMap", {}).get("sigPair", [])
        try:
            return cls(
                body=body,
                body_bytes=body_bytes,
                sig_map=tuple(SignaturePair.from_proto(p) for p in pairs),
            )
        except ValidationError as e:
            raise EncodingError("Decoded Transaction is invalid", cause=e) from e


def _prefix(public_key: KeyInput, prefix_length: Optional[int]) -> bytes:
    raw = decode_public_key(public_key)
    if prefix_length is None:
        return raw
    if not 0 < prefix_length <= len(raw):
        raise SchemaViolation(f"Prefix length must be between 1 and {len(raw)}, got {prefix_length}")
    return raw[:prefix_length]


def attach_signature(envelope: Optional[TransactionEnvelope], signature: bytes,
                     public_key: KeyInput, prefix_length: Optional[int] = None) -> TransactionEnvelope:
    """
    Return a copy of ``envelope`` with one more signature pair.

    Args:
        envelope: Envelope holding a finalized body
        signature: 64-byte signature over ``envelope.body_bytes``
        public_key: Signer's public key (hex or raw bytes, same form the
            signer used)
        prefix_length: Leading key bytes to store as prefix; full key if None

    Returns:
        New envelope with the pair appended after any existing pairs

    Raises:
        MissingBody: If there is no envelope or it has no body
        InvalidKeyMaterial: If the public key cannot be decoded
        SchemaViolation: If the signature has the wrong length
        DuplicateSignature: If this key already signed the envelope
    """
    if envelope is None or envelope.body is None:
        raise MissingBody()
    if not isinstance(signature, (bytes, bytearray)) or len(signature) != SIGNATURE_LENGTH:
        raise SchemaViolation(
            "SignaturePair failed schema validation",
            [f"SignaturePair.ed25519: expected {SIGNATURE_LENGTH} bytes"],
        )
    prefix = _prefix(public_key, prefix_length)
    for existing in envelope.sig_map:
        if existing.pub_key_prefix == prefix:
            raise DuplicateSignature(details={"pubKeyPrefix": prefix.hex()})

    pair = SignaturePair(pub_key_prefix=prefix, signature=bytes(signature))
    logger.debug("Attached signature %d to %s", len(envelope.sig_map) + 1, envelope.body.transaction_id)
    return envelope.model_copy(update={"sig_map": envelope.sig_map + (pair,)})


def sign_and_attach(envelope: Optional[TransactionEnvelope], private_key: KeyInput,
                    public_key: Optional[KeyInput] = None,
                    prefix_length: Optional[int] = None) -> TransactionEnvelope:
    """
    Sign the envelope's body bytes and attach the result.

    Either a new signed envelope is returned or an exception propagates; the
    input envelope is never modified.

    Args:
        envelope: Envelope holding a finalized body
        private_key: Signing key (hex or raw bytes)
        public_key: Matching public key; derived from ``private_key`` if None
        prefix_length: Leading key bytes to store as prefix; full key if None
    """
    if envelope is None or envelope.body is None:
        raise MissingBody()
    signer = Ed25519Signer(private_key)
    if public_key is None:
        public_key = signer.get_public_key()
    else:
        public_key = signer.check_public_key(public_key)
    signature = signer.sign(envelope.body_bytes)
    return attach_signature(envelope, signature, public_key, prefix_length)


__all__ = ["SignaturePair", "TransactionEnvelope", "attach_signature", "sign_and_attach"]
