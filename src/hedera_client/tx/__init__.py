"""
Transaction building, envelopes and precheck interpretation.
"""

from .ids import AccountId, Duration, Timestamp, TransactionId
from .payloads import AccountAmount, CryptoCreateAccount, CryptoDelete, CryptoTransfer, Payload
from .body import TransactionBody
from .envelope import SignaturePair, TransactionEnvelope, attach_signature, sign_and_attach
from .codec import decode_body, decode_envelope, encode_body, encode_envelope, serialize, deserialize
from .response import (
    Ok,
    PrecheckOutcome,
    Rejected,
    ResponseCode,
    interpret,
    interpret_response,
)
from .transaction import Transaction, build_body, sign

__all__ = [
    "AccountId",
    "Duration",
    "Timestamp",
    "TransactionId",
    "AccountAmount",
    "CryptoCreateAccount",
    "CryptoDelete",
    "CryptoTransfer",
    "Payload",
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
