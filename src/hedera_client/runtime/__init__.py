"""Runtime helpers for the Hedera transaction client"""

from .errors import (
    ErrorCode,
    HederaError,
    SchemaViolation,
    EncodingError,
    InvalidKeyMaterial,
    MissingBody,
    DuplicateSignature,
    TransactionRejected,
)

__all__ = [
    "ErrorCode",
    "HederaError",
    "SchemaViolation",
    "EncodingError",
    "InvalidKeyMaterial",
    "MissingBody",
    "DuplicateSignature",
    "TransactionRejected",
]
