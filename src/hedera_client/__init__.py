"""
Hedera Python Client - transaction core

Builds canonical transaction bodies, signs them with Ed25519, assembles
signed envelopes for transport and interprets node precheck codes.
"""

import logging

from .config import TransactionConfig, DEFAULT_TX_FEE
from .runtime.errors import *
from .codec import to_hex, from_hex
from .crypto import Ed25519PrivateKey, Ed25519PublicKey
from .signers import Ed25519Signer
from .tx import *

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "TransactionConfig",
    "DEFAULT_TX_FEE",
    "to_hex",
    "from_hex",
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "Ed25519Signer",

    # Errors
    "ErrorCode",
    "HederaError",
    "SchemaViolation",
    "EncodingError",
    "InvalidKeyMaterial",
    "MissingBody",
    "DuplicateSignature",
    "TransactionRejected",

    # Transactions
    "AccountId",
    "Duration",
    "Timestamp",
    "TransactionId",
    "AccountAmount",
    "CryptoCreateAccount",
    "CryptoDelete",
    "CryptoTransfer",
    "TransactionBody",
    "SignaturePair",
    "TransactionEnvelope",
    "attach_signature",
    "sign_and_attach",
    "encode_body",
    "decode_body",
    "encode_envelope",
    "decode_envelope",
    "serialize",
    "deserialize",
    "Ok",
    "PrecheckOutcome",
    "Rejected",
    "ResponseCode",
    "interpret",
    "interpret_response",
    "Transaction",
    "build_body",
    "sign",
]
