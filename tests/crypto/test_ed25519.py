"""
Ed25519 key decoding, signing and verification.

Uses the RFC 8032 vectors so signatures can be checked byte for byte.
"""

import pytest

from hedera_client.crypto.ed25519 import (
    PRIVATE_DER_PREFIX,
    PUBLIC_DER_PREFIX,
    TEST_VECTORS,
    Ed25519PrivateKey,
    Ed25519PublicKey,
    decode_private_key,
    decode_public_key,
)
from hedera_client.runtime.errors import InvalidKeyMaterial


class TestRFC8032Vectors:

    @pytest.mark.parametrize("vector", TEST_VECTORS, ids=lambda v: v["name"])
    def test_public_key_derivation(self, vector):
        key = Ed25519PrivateKey.from_hex(vector["private_key"])
        assert key.public_key().to_hex() == vector["public_key"]

    @pytest.mark.parametrize("vector", TEST_VECTORS, ids=lambda v: v["name"])
    def test_signature_matches(self, vector):
        key = Ed25519PrivateKey.from_hex(vector["private_key"])
        message = bytes.fromhex(vector["message"])
        assert key.sign(message).hex() == vector["signature"]

    @pytest.mark.parametrize("vector", TEST_VECTORS, ids=lambda v: v["name"])
    def test_signature_verifies(self, vector):
        public = Ed25519PublicKey.from_hex(vector["public_key"])
        assert public.verify(bytes.fromhex(vector["signature"]), bytes.fromhex(vector["message"]))


class TestKeyForms:
    """Accepted external key representations."""

    def test_seed(self, keypair):
        private_hex, _ = keypair
        assert decode_private_key(private_hex) == bytes.fromhex(private_hex)

    def test_expanded_seed_and_public(self, keypair):
        private_hex, public_hex = keypair
        assert decode_private_key(private_hex + public_hex) == bytes.fromhex(private_hex)

    def test_expanded_with_wrong_public_half(self, keypair, other_keypair):
        private_hex, _ = keypair
        _, other_public = other_keypair
        with pytest.raises(InvalidKeyMaterial, match="does not match"):
            decode_private_key(private_hex + other_public)

    def test_private_der(self, keypair):
        private_hex, _ = keypair
        der = PRIVATE_DER_PREFIX.hex() + private_hex
        assert decode_private_key(der) == bytes.fromhex(private_hex)

    def test_public_der(self, keypair):
        _, public_hex = keypair
        der = PUBLIC_DER_PREFIX + bytes.fromhex(public_hex)
        assert decode_public_key(der) == bytes.fromhex(public_hex)
        assert Ed25519PublicKey.from_bytes(der).to_der() == der

    def test_raw_bytes(self, keypair):
        private_hex, public_hex = keypair
        key = Ed25519PrivateKey.from_bytes(bytes.fromhex(private_hex))
        assert key.public_key() == Ed25519PublicKey.from_hex(public_hex)


class TestInvalidKeyMaterial:

    @pytest.mark.parametrize("length", [0, 16, 31, 33, 63, 65])
    def test_wrong_private_length(self, length):
        with pytest.raises(InvalidKeyMaterial):
            decode_private_key(b"\x01" * length)

    @pytest.mark.parametrize("length", [0, 31, 33, 64])
    def test_wrong_public_length(self, length):
        with pytest.raises(InvalidKeyMaterial):
            decode_public_key(b"\x01" * length)

    def test_bad_hex(self):
        with pytest.raises(InvalidKeyMaterial, match="hex"):
            decode_private_key("not hex at all")

    def test_unsupported_type(self):
        with pytest.raises(InvalidKeyMaterial):
            decode_public_key(12345)

    def test_direct_constructor_checks_length(self):
        with pytest.raises(InvalidKeyMaterial):
            Ed25519PrivateKey(b"\x00" * 31)
        with pytest.raises(InvalidKeyMaterial):
            Ed25519PublicKey(b"\x00" * 33)


class TestVerification:

    def test_tampered_message(self, keypair):
        key = Ed25519PrivateKey.from_hex(keypair[0])
        signature = key.sign(b"body")
        assert key.public_key().verify(signature, b"body")
        assert not key.public_key().verify(signature, b"bodY")

    def test_wrong_signature_length(self, keypair):
        public = Ed25519PublicKey.from_hex(keypair[1])
        assert not public.verify(b"\x00" * 63, b"body")

    def test_deterministic(self, keypair):
        key = Ed25519PrivateKey.from_hex(keypair[0])
        assert key.sign(b"same bytes") == key.sign(b"same bytes")

    def test_repr_does_not_leak_private_key(self, keypair):
        private_hex, public_hex = keypair
        key = Ed25519PrivateKey.from_hex(private_hex)
        assert private_hex not in repr(key)
        assert private_hex not in str(key)
        assert public_hex in repr(key)
