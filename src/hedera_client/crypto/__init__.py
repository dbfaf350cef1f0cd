"""
Cryptographic primitives for Hedera transactions.

Provides Ed25519 key decoding, signing and verification.
"""

from .ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
    decode_private_key,
    decode_public_key,
    SIGNATURE_LENGTH,
)

__all__ = [
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "decode_private_key",
    "decode_public_key",
    "SIGNATURE_LENGTH",
]
