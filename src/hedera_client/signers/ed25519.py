"""
ED25519 signer implementation.

Provides the ``sign``/``verify`` operations over canonical body bytes and the
``Ed25519Signer`` wrapper used by the envelope assembler.
"""

import logging
from typing import Union

from ..crypto.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
    KeyInput,
    decode_private_key,
    decode_public_key,
)
from ..runtime.errors import InvalidKeyMaterial
from .signer import Signer

logger = logging.getLogger(__name__)


def _require_bytes(body_bytes) -> bytes:
    if not isinstance(body_bytes, (bytes, bytearray, memoryview)):
        raise TypeError(
            f"sign() takes the canonical body encoding as bytes, got {type(body_bytes).__name__}"
        )
    return bytes(body_bytes)


def sign(body_bytes: bytes, private_key: KeyInput) -> bytes:
    """
    Sign canonical body bytes with an Ed25519 private key.

    Args:
        body_bytes: Exact canonical encoding of the transaction body
        private_key: Private key as hex or raw bytes

    Returns:
        64-byte signature

    Raises:
        InvalidKeyMaterial: If the key cannot be decoded
        TypeError: If ``body_bytes`` is not bytes
    """
    message = _require_bytes(body_bytes)
    key = Ed25519PrivateKey(decode_private_key(private_key))
    signature = key.sign(message)
    logger.debug("Signed %d body bytes for key %s", len(message), key.public_key().to_hex()[:8])
    return signature


def verify(body_bytes: bytes, signature: bytes, public_key: KeyInput) -> bool:
    """
    Verify an Ed25519 signature over canonical body bytes.

    Returns:
        True if the signature is valid for ``public_key``
    """
    key = Ed25519PublicKey(decode_public_key(public_key))
    return key.verify(signature, _require_bytes(body_bytes))


class Ed25519Signer(Signer):
    """ED25519 signer implementation."""

    def __init__(self, private_key: Union[Ed25519PrivateKey, KeyInput]):
        """
        Initialize ED25519 signer.

        Args:
            private_key: Private key object, hex string or raw bytes
        """
        if isinstance(private_key, Ed25519PrivateKey):
            self.private_key = private_key
        else:
            self.private_key = Ed25519PrivateKey(decode_private_key(private_key))
        self.public_key = self.private_key.public_key()

    def get_public_key(self) -> bytes:
        return self.public_key.to_bytes()

    def sign(self, body_bytes: bytes) -> bytes:
        """
        Sign data with the private key.

        Args:
            body_bytes: Canonical body bytes

        Returns:
            Raw signature bytes
        """
        return self.private_key.sign(_require_bytes(body_bytes))

    def verify(self, signature: bytes, body_bytes: bytes) -> bool:
        return self.public_key.verify(signature, _require_bytes(body_bytes))

    def check_public_key(self, public_key: KeyInput) -> bytes:
        """
        Confirm that a caller-supplied public key belongs to this signer.

        Returns:
            The decoded 32-byte public key

        Raises:
            InvalidKeyMaterial: If the key does not match the private key
        """
        raw = decode_public_key(public_key)
        if raw != self.get_public_key():
            raise InvalidKeyMaterial("Public key does not match the signing private key")
        return raw

    def __repr__(self) -> str:
        return f"Ed25519Signer(public={self.public_key.to_hex()})"
