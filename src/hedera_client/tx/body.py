"""
Transaction body model.

``TransactionBody`` is a frozen pydantic model: once constructed none of its
fields can be reassigned, so the bytes a signer sees are fixed for the
lifetime of the value.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..codec.schema import BODY_DATA_FIELDS
from ..codec.transaction_codec import decode_message, encode_message
from ..config import MAX_MEMO_BYTES
from ..runtime.errors import EncodingError
from .ids import AccountId, Duration, TransactionId
from .payloads import PAYLOAD_TYPES, CryptoCreateAccount, CryptoDelete, CryptoTransfer

logger = logging.getLogger(__name__)

AnyPayload = Union[CryptoTransfer, CryptoCreateAccount, CryptoDelete]


class TransactionBody(BaseModel):
    """
    The signed part of a transaction.

    Reference: Hedera TransactionBody.proto
        message TransactionBody {
            TransactionID transactionID = 1;
            AccountID nodeAccountID = 2;
            uint64 transactionFee = 3;
            Duration transactionValidDuration = 4;
            bool generateRecord = 5;
            string memo = 6;
            oneof data { ... }
        }
    """

    transaction_id: TransactionId
    node_account_id: AccountId
    fee: int = Field(ge=0, lt=1 << 64, strict=True, description="Maximum fee in tinybars")
    valid_duration: Duration
    memo: Optional[str] = Field(default=None, strict=True)
    generate_record: bool = Field(default=False, strict=True)
    payload: Optional[AnyPayload] = None

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("valid_duration", mode="before")
    @classmethod
    def _coerce_duration(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return Duration.from_seconds(v)
        return v

    @field_validator("valid_duration")
    @classmethod
    def _positive_duration(cls, v: Duration) -> Duration:
        if v.seconds <= 0:
            raise ValueError("valid duration must be positive")
        return v

    @field_validator("memo")
    @classmethod
    def _normalize_memo(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        if len(v.encode("utf-8")) > MAX_MEMO_BYTES:
            raise ValueError(f"memo exceeds {MAX_MEMO_BYTES} bytes")
        return v

    @property
    def operation(self) -> Optional[str]:
        """Wire name of the payload field, e.g. ``cryptoTransfer``."""
        return self.payload.BODY_FIELD if self.payload is not None else None

    def to_proto(self) -> Dict[str, Any]:
        """Wire dict form, keyed by schema field names."""
        out: Dict[str, Any] = {
            "transactionID": self.transaction_id.to_proto(),
            "nodeAccountID": self.node_account_id.to_proto(),
            "transactionFee": self.fee,
            "transactionValidDuration": self.valid_duration.to_proto(),
            "generateRecord": self.generate_record,
        }
        if self.memo is not None:
            out["memo"] = self.memo
        if self.payload is not None:
            out[self.payload.BODY_FIELD] = self.payload.to_proto()
        return out

    @classmethod
    def from_proto(cls, data: Mapping[str, Any]) -> TransactionBody:
        payload = None
        for name in BODY_DATA_FIELDS:
            if name in data:
                payload = PAYLOAD_TYPES[name].from_proto(data[name])
                break
        return cls(
            transaction_id=TransactionId.from_proto(data["transactionID"]),
            node_account_id=AccountId.from_proto(data["nodeAccountID"]),
            fee=data.get("transactionFee", 0),
            valid_duration=Duration.from_proto(data["transactionValidDuration"]),
            memo=data.get("memo"),
            generate_record=data.get("generateRecord", False),
            payload=payload,
        )

    def to_bytes(self) -> bytes:
        """Canonical encoding of this body."""
        return encode_message("TransactionBody", self.to_proto())

    @classmethod
    def from_bytes(cls, data: bytes) -> TransactionBody:
        """
        Decode and validate a body.

        Raises:
            EncodingError: If the bytes are malformed or describe an invalid body
        """
        fields = decode_message("TransactionBody", data)
        try:
            return cls.from_proto(fields)
        except (ValidationError, KeyError) as e:
            raise EncodingError("Decoded TransactionBody is invalid", cause=e) from e


__all__ = ["TransactionBody", "AnyPayload"]
