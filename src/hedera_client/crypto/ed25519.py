"""
Ed25519 cryptographic operations.

Key decoding, signing and verification on top of ``cryptography``. Keys are
consumed as raw bytes after decoding from hex; the following external forms
are accepted:

- private: 32-byte seed, 64-byte ``seed || public`` and the 48-byte PKCS#8
  DER form Hedera tools print (``302e0201...0420`` + seed)
- public: 32 raw bytes and the 44-byte SubjectPublicKeyInfo DER form

Key bytes never appear in ``repr`` or log output.
"""

from __future__ import annotations
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

from ..codec.hexcodec import from_hex
from ..runtime.errors import EncodingError, InvalidKeyMaterial

SEED_LENGTH = 32
PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64

PRIVATE_DER_PREFIX = bytes.fromhex("302e020100300506032b657004220420")
PUBLIC_DER_PREFIX = bytes.fromhex("302a300506032b6570032100")

KeyInput = Union[str, bytes, bytearray]


def _as_bytes(key: KeyInput, kind: str) -> bytes:
    if isinstance(key, str):
        try:
            return from_hex(key)
        except EncodingError as e:
            raise InvalidKeyMaterial(f"Ed25519 {kind} key is not valid hex", cause=e) from e
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise InvalidKeyMaterial(f"Ed25519 {kind} key must be hex or bytes, got {type(key).__name__}")


def decode_public_key(key: KeyInput) -> bytes:
    """
    Decode an external public key representation to 32 raw bytes.

    Raises:
        InvalidKeyMaterial: If the key has an unsupported length or prefix
    """
    raw = _as_bytes(key, "public")
    if len(raw) == PUBLIC_KEY_LENGTH:
        return raw
    if len(raw) == len(PUBLIC_DER_PREFIX) + PUBLIC_KEY_LENGTH and raw.startswith(PUBLIC_DER_PREFIX):
        return raw[len(PUBLIC_DER_PREFIX):]
    raise InvalidKeyMaterial(
        f"Ed25519 public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(raw)}",
        details={"length": len(raw)},
    )


def decode_private_key(key: KeyInput) -> bytes:
    """
    Decode an external private key representation to its 32-byte seed.

    Raises:
        InvalidKeyMaterial: If the key has an unsupported length or prefix, or
            a 64-byte key whose public half does not match its seed
    """
    raw = _as_bytes(key, "private")
    if len(raw) == SEED_LENGTH:
        return raw
    if len(raw) == len(PRIVATE_DER_PREFIX) + SEED_LENGTH and raw.startswith(PRIVATE_DER_PREFIX):
        return raw[len(PRIVATE_DER_PREFIX):]
    if len(raw) == SEED_LENGTH + PUBLIC_KEY_LENGTH:
        seed, public = raw[:SEED_LENGTH], raw[SEED_LENGTH:]
        if Ed25519PrivateKey(seed).public_key().to_bytes() != public:
            raise InvalidKeyMaterial("Ed25519 expanded key: public half does not match seed")
        return seed
    raise InvalidKeyMaterial(
        f"Ed25519 private key must be {SEED_LENGTH} bytes, got {len(raw)}",
        details={"length": len(raw)},
    )


class Ed25519PublicKey:
    """
    Ed25519 public key.

    Provides verification operations and serialization.
    """

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize from 32-byte public key.

        Args:
            public_key_bytes: 32-byte Ed25519 public key

        Raises:
            InvalidKeyMaterial: If key is invalid
        """
        if len(public_key_bytes) != PUBLIC_KEY_LENGTH:
            raise InvalidKeyMaterial(
                f"Ed25519 public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(public_key_bytes)}"
            )
        self._key_bytes = bytes(public_key_bytes)
        try:
            self._crypto_key = CryptoEd25519PublicKey.from_public_bytes(self._key_bytes)
        except ValueError as e:
            raise InvalidKeyMaterial(f"Invalid Ed25519 public key: {e}", cause=e) from e

    @classmethod
    def from_hex(cls, hex_string: str) -> Ed25519PublicKey:
        """Create public key from hex string (raw or DER)."""
        return cls(decode_public_key(hex_string))

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> Ed25519PublicKey:
        """Create public key from bytes (raw or DER)."""
        return cls(decode_public_key(key_bytes))

    def to_bytes(self) -> bytes:
        """Get the 32-byte public key."""
        return self._key_bytes

    def to_hex(self) -> str:
        """Get the public key as hex string."""
        return self._key_bytes.hex()

    def to_der(self) -> bytes:
        return PUBLIC_DER_PREFIX + self._key_bytes

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify a signature against a message.

        Args:
            signature: 64-byte Ed25519 signature
            message: Message that was signed

        Returns:
            True if signature is valid
        """
        if len(signature) != SIGNATURE_LENGTH:
            return False
        try:
            self._crypto_key.verify(bytes(signature), bytes(message))
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other) -> bool:
        """Check equality with another public key."""
        if not isinstance(other, Ed25519PublicKey):
            return False
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __str__(self) -> str:
        return f"Ed25519PublicKey({self.to_hex()})"

    def __repr__(self) -> str:
        return f"Ed25519PublicKey.from_hex('{self.to_hex()}')"


class Ed25519PrivateKey:
    """
    Ed25519 private key.

    Signing is deterministic (RFC 8032): the same key and message always
    produce the same 64-byte signature.
    """

    def __init__(self, private_key_bytes: bytes):
        """
        Initialize from 32-byte private key seed.

        Args:
            private_key_bytes: 32-byte Ed25519 private key seed

        Raises:
            InvalidKeyMaterial: If key is invalid
        """
        if len(private_key_bytes) != SEED_LENGTH:
            raise InvalidKeyMaterial(
                f"Ed25519 private key must be {SEED_LENGTH} bytes, got {len(private_key_bytes)}"
            )
        try:
            self._crypto_key = CryptoEd25519PrivateKey.from_private_bytes(bytes(private_key_bytes))
        except ValueError as e:
            raise InvalidKeyMaterial(f"Invalid Ed25519 private key: {e}", cause=e) from e
        self._public_key = Ed25519PublicKey(
            self._crypto_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        )

    @classmethod
    def from_hex(cls, hex_string: str) -> Ed25519PrivateKey:
        """Create private key from hex string (seed, expanded or DER)."""
        return cls(decode_private_key(hex_string))

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> Ed25519PrivateKey:
        """Create private key from bytes (seed, expanded or DER)."""
        return cls(decode_private_key(key_bytes))

    def public_key(self) -> Ed25519PublicKey:
        """Get the corresponding public key."""
        return self._public_key

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Message to sign

        Returns:
            64-byte Ed25519 signature
        """
        return self._crypto_key.sign(bytes(message))

    def __str__(self) -> str:
        return f"Ed25519PrivateKey(public={self._public_key.to_hex()})"

    __repr__ = __str__


# RFC 8032 section 7.1 test vectors
TEST_VECTORS = [
    {
        "name": "RFC 8032 Test Vector 1",
        "private_key": "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60",
        "public_key": "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a",
        "message": "",
        "signature": "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b",
    },
    {
        "name": "RFC 8032 Test Vector 2",
        "private_key": "4ccd089b28ff96da9db6c346ec114e0f5b8a319f35aba624da8cf6ed4fb8a6fb",
        "public_key": "3d4017c3e843895a92b70aa74d1b7ebc9c982ccf2ec4968cc0cd55f12af4660c",
        "message": "72",
        "signature": "92a009a9f0d4cab8720e820b5f642540a2b27b5416503f8fb3762223ebdb69da085ac1e43e15996e458f3613d0f11d8c387b2eaeb4302aeeb00d291612bb0c00",
    },
]


__all__ = [
    "Ed25519PublicKey",
    "Ed25519PrivateKey",
    "decode_public_key",
    "decode_private_key",
    "SEED_LENGTH",
    "PUBLIC_KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "TEST_VECTORS",
]
