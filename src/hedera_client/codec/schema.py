"""
Transaction schema registry.

Describes the subset of the Hedera protobuf schema this client speaks:
field numbers, scalar kinds, nesting, repetition and oneof groups. The
registry is built once at import time and exposed read-only through
``SCHEMA``; codecs look messages up by name and never reload it.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .writer import WIRE_LEN, WIRE_VARINT

SCALAR_KINDS = ("int32", "int64", "uint64", "sint64", "bool", "string", "bytes")

INT_RANGES = {
    "int32": (-(1 << 31), (1 << 31) - 1),
    "int64": (-(1 << 63), (1 << 63) - 1),
    "sint64": (-(1 << 63), (1 << 63) - 1),
    "uint64": (0, (1 << 64) - 1),
}


@dataclass(frozen=True)
class FieldSpec:
    """One field of a message."""

    number: int
    name: str
    kind: str
    message: Optional[str] = None
    repeated: bool = False
    required: bool = False
    oneof: Optional[str] = None

    @property
    def wire_type(self) -> int:
        if self.kind in ("message", "string", "bytes"):
            return WIRE_LEN
        return WIRE_VARINT


@dataclass(frozen=True)
class MessageSpec:
    """A message type: its fields ordered by field number."""

    name: str
    fields: Tuple[FieldSpec, ...]

    def __post_init__(self):
        numbers = [f.number for f in self.fields]
        if numbers != sorted(set(numbers)):
            raise ValueError(f"{self.name}: field numbers must be unique and ascending")

    def by_name(self, name: str) -> Optional[FieldSpec]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def by_number(self, number: int) -> Optional[FieldSpec]:
        for f in self.fields:
            if f.number == number:
                return f
        return None


def _msg(name: str, *fields: FieldSpec) -> MessageSpec:
    return MessageSpec(name, tuple(fields))


_MESSAGES = (
    _msg(
        "AccountID",
        FieldSpec(1, "shardNum", "int64"),
        FieldSpec(2, "realmNum", "int64"),
        FieldSpec(3, "accountNum", "int64"),
    ),
    _msg(
        "Timestamp",
        FieldSpec(1, "seconds", "int64"),
        FieldSpec(2, "nanos", "int32"),
    ),
    _msg(
        "Duration",
        FieldSpec(1, "seconds", "int64"),
    ),
    _msg(
        "TransactionID",
        FieldSpec(1, "transactionValidStart", "message", "Timestamp", required=True),
        FieldSpec(2, "accountID", "message", "AccountID", required=True),
    ),
    _msg(
        "Key",
        FieldSpec(2, "ed25519", "bytes", required=True),
    ),
    _msg(
        "AccountAmount",
        FieldSpec(1, "accountID", "message", "AccountID", required=True),
        FieldSpec(2, "amount", "sint64"),
    ),
    _msg(
        "TransferList",
        FieldSpec(1, "accountAmounts", "message", "AccountAmount", repeated=True),
    ),
    _msg(
        "CryptoTransferTransactionBody",
        FieldSpec(1, "transfers", "message", "TransferList", required=True),
    ),
    _msg(
        "CryptoCreateTransactionBody",
        FieldSpec(1, "key", "message", "Key", required=True),
        FieldSpec(2, "initialBalance", "uint64"),
        FieldSpec(8, "autoRenewPeriod", "message", "Duration"),
    ),
    _msg(
        "CryptoDeleteTransactionBody",
        FieldSpec(1, "transferAccountID", "message", "AccountID", required=True),
        FieldSpec(2, "deleteAccountID", "message", "AccountID", required=True),
    ),
    _msg(
        "TransactionBody",
        FieldSpec(1, "transactionID", "message", "TransactionID", required=True),
        FieldSpec(2, "nodeAccountID", "message", "AccountID", required=True),
        FieldSpec(3, "transactionFee", "uint64"),
        FieldSpec(4, "transactionValidDuration", "message", "Duration", required=True),
        FieldSpec(5, "generateRecord", "bool"),
        FieldSpec(6, "memo", "string"),
        FieldSpec(11, "cryptoCreateAccount", "message", "CryptoCreateTransactionBody", oneof="data"),
        FieldSpec(12, "cryptoDelete", "message", "CryptoDeleteTransactionBody", oneof="data"),
        FieldSpec(14, "cryptoTransfer", "message", "CryptoTransferTransactionBody", oneof="data"),
    ),
    _msg(
        "SignaturePair",
        FieldSpec(1, "pubKeyPrefix", "bytes"),
        FieldSpec(3, "ed25519", "bytes", required=True, oneof="signature"),
    ),
    _msg(
        "SignatureMap",
        FieldSpec(1, "sigPair", "message", "SignaturePair", repeated=True),
    ),
    _msg(
        "Transaction",
        FieldSpec(1, "body", "message", "TransactionBody", required=True),
        FieldSpec(3, "sigMap", "message", "SignatureMap"),
    ),
)


def _build_registry() -> Mapping[str, MessageSpec]:
    registry: Dict[str, MessageSpec] = {m.name: m for m in _MESSAGES}
    for message in _MESSAGES:
        for f in message.fields:
            if f.kind == "message":
                if f.message not in registry:
                    raise ValueError(f"{message.name}.{f.name} references unknown type {f.message}")
            elif f.kind not in SCALAR_KINDS:
                raise ValueError(f"{message.name}.{f.name} has unknown kind {f.kind}")
    return MappingProxyType(registry)


SCHEMA: Mapping[str, MessageSpec] = _build_registry()

# Payload field name on TransactionBody for each operation
BODY_DATA_FIELDS = tuple(f.name for f in SCHEMA["TransactionBody"].fields if f.oneof == "data")


def lookup(name: str) -> MessageSpec:
    """Return the message spec registered under ``name``."""
    try:
        return SCHEMA[name]
    except KeyError:
        raise KeyError(f"No message type {name!r} in schema registry") from None


__all__ = ["FieldSpec", "MessageSpec", "SCHEMA", "BODY_DATA_FIELDS", "INT_RANGES", "lookup"]
