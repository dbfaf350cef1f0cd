"""
Signers for Hedera transactions.
"""

from .signer import Signer
from .ed25519 import Ed25519Signer, sign, verify

__all__ = [
    "Signer",
    "Ed25519Signer",
    "sign",
    "verify",
]
