"""
Hedera Client Error Model

Error taxonomy for the transaction envelope core: schema and encoding
failures, key material problems, envelope assembly misuse and precheck
rejections surfaced on request.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, List
from enum import IntEnum


class ErrorCode(IntEnum):
    """Local error codes for client-side failures."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    SCHEMA_VIOLATION = 101
    INVALID_HEX = 102

    # Key errors (200-299)
    INVALID_KEY_MATERIAL = 200

    # Envelope errors (300-399)
    MISSING_BODY = 300
    DUPLICATE_SIGNATURE = 301

    # Network outcomes (400-499)
    PRECHECK_REJECTED = 400


class HederaError(Exception):
    """
    Base class for all client errors.

    Carries a stable error code plus optional structured details so callers
    can log or serialize failures without parsing messages.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a client error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class SchemaViolation(HederaError):
    """A value failed schema validation before encoding."""

    def __init__(self, message: str, issues: Optional[List[str]] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.SCHEMA_VIOLATION, details, cause)
        self.issues = list(issues or [])

    def __str__(self) -> str:
        base = super().__str__()
        if self.issues:
            return f"{base}: {'; '.join(self.issues)}"
        return base


class EncodingError(HederaError):
    """Malformed or schema-violating bytes on decode."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class InvalidKeyMaterial(HederaError):
    """Key bytes of the wrong length or shape for Ed25519."""

    def __init__(self, message: str = "Invalid key material",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY_MATERIAL, details, cause)


class MissingBody(HederaError):
    """Signature attach attempted before a transaction body exists."""

    def __init__(self, message: str = "Missing transaction body. Must create transaction before adding signature",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MISSING_BODY, details, cause)


class DuplicateSignature(HederaError):
    """The same public key already signed this envelope."""

    def __init__(self, message: str = "Envelope already carries a signature for this key",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DUPLICATE_SIGNATURE, details, cause)


class TransactionRejected(HederaError):
    """
    Raised from a rejected precheck outcome when the caller asks for it.

    Rejections are normally inspected as values; this exception only exists
    for callers that prefer to fail fast.
    """

    def __init__(self, outcome: Any):
        super().__init__(
            f"{outcome.name}: {outcome.reason}",
            ErrorCode.PRECHECK_REJECTED,
            {"precheckCode": outcome.code},
        )
        self.outcome = outcome


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
