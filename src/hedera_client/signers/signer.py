"""
Base signer interface.

Signers sign the canonical body bytes of a transaction. They never see the
structured body: callers encode first and hand the exact bytes over, so the
signed bytes and the bytes embedded in the envelope cannot drift apart.
"""

from __future__ import annotations
from abc import ABC, abstractmethod


class Signer(ABC):
    """
    Base signer interface.

    All signature schemes implement this interface.
    """

    @abstractmethod
    def sign(self, body_bytes: bytes) -> bytes:
        """
        Sign canonical body bytes.

        Args:
            body_bytes: Canonical encoding of a TransactionBody

        Returns:
            Signature bytes
        """

    @abstractmethod
    def verify(self, signature: bytes, body_bytes: bytes) -> bool:
        """
        Verify a signature against canonical body bytes.

        Returns:
            True if signature is valid
        """

    @abstractmethod
    def get_public_key(self) -> bytes:
        """
        Get the raw public key bytes.

        Returns:
            Public key in the form used for signature map prefixes
        """
