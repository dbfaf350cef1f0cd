"""
Operation-specific transaction payloads.

Each payload knows the TransactionBody oneof field it occupies
(``BODY_FIELD``) and converts to and from its wire dict.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, Field, field_validator, model_validator

from ..crypto.ed25519 import decode_public_key
from ..runtime.errors import InvalidKeyMaterial
from .ids import AccountId, Duration

_FROZEN = {"frozen": True, "extra": "forbid"}


class Payload(BaseModel, ABC):
    """
    Abstract base for transaction payloads.

    Subclasses set ``BODY_FIELD`` and implement the wire dict conversions.
    """

    BODY_FIELD: ClassVar[str] = ""

    model_config = _FROZEN

    @abstractmethod
    def to_proto(self) -> Dict[str, Any]:
        """Wire dict for the ``BODY_FIELD`` message."""

    @classmethod
    @abstractmethod
    def from_proto(cls, data: Mapping[str, Any]) -> Payload:
        """Build the payload from its wire dict."""


class AccountAmount(BaseModel):
    """A signed tinybar amount credited to (positive) or debited from an account."""

    account_id: AccountId
    amount: int = Field(ge=-(1 << 63), lt=1 << 63, strict=True)

    model_config = _FROZEN


class CryptoTransfer(Payload):
    """
    Transfer hbars between accounts.

    Amounts must net to zero across the list.
    """

    BODY_FIELD: ClassVar[str] = "cryptoTransfer"

    transfers: Tuple[AccountAmount, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _balanced(self) -> CryptoTransfer:
        total = sum(t.amount for t in self.transfers)
        if total != 0:
            raise ValueError(f"transfer amounts must sum to zero, got {total}")
        return self

    @classmethod
    def between(cls, sender: Any, recipient: Any, amount: int) -> CryptoTransfer:
        """Two-party transfer of ``amount`` tinybars from ``sender`` to ``recipient``."""
        return cls(transfers=(
            AccountAmount(account_id=AccountId.parse(sender), amount=-amount),
            AccountAmount(account_id=AccountId.parse(recipient), amount=amount),
        ))

    def to_proto(self) -> Dict[str, Any]:
        return {
            "transfers": {
                "accountAmounts": [
                    {"accountID": t.account_id.to_proto(), "amount": t.amount}
                    for t in self.transfers
                ]
            }
        }

    @classmethod
    def from_proto(cls, data: Mapping[str, Any]) -> CryptoTransfer:
        amounts = data["transfers"].get("accountAmounts", [])
        return cls(transfers=tuple(
            AccountAmount(account_id=AccountId.from_proto(a["accountID"]), amount=a.get("amount", 0))
            for a in amounts
        ))


class CryptoCreateAccount(Payload):
    """Create an account controlled by a single Ed25519 key."""

    BODY_FIELD: ClassVar[str] = "cryptoCreateAccount"

    key: bytes
    initial_balance: int = Field(default=0, ge=0, lt=1 << 64, strict=True)
    auto_renew_period: Optional[Duration] = None

    @field_validator("key", mode="before")
    @classmethod
    def _decode_key(cls, v: Any) -> bytes:
        try:
            return decode_public_key(v)
        except InvalidKeyMaterial as e:
            raise ValueError(e.message) from e

    def to_proto(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"key": {"ed25519": self.key}, "initialBalance": self.initial_balance}
        if self.auto_renew_period is not None:
            out["autoRenewPeriod"] = self.auto_renew_period.to_proto()
        return out

    @classmethod
    def from_proto(cls, data: Mapping[str, Any]) -> CryptoCreateAccount:
        period = data.get("autoRenewPeriod")
        return cls(
            key=data["key"]["ed25519"],
            initial_balance=data.get("initialBalance", 0),
            auto_renew_period=Duration.from_proto(period) if period is not None else None,
        )


class CryptoDelete(Payload):
    """Delete an account, sweeping its balance to ``transfer_account_id``."""

    BODY_FIELD: ClassVar[str] = "cryptoDelete"

    delete_account_id: AccountId
    transfer_account_id: AccountId

    def to_proto(self) -> Dict[str, Any]:
        return {
            "transferAccountID": self.transfer_account_id.to_proto(),
            "deleteAccountID": self.delete_account_id.to_proto(),
        }

    @classmethod
    def from_proto(cls, data: Mapping[str, Any]) -> CryptoDelete:
        return cls(
            delete_account_id=AccountId.from_proto(data["deleteAccountID"]),
            transfer_account_id=AccountId.from_proto(data["transferAccountID"]),
        )


PAYLOAD_TYPES: Dict[str, Type[Payload]] = {
    cls.BODY_FIELD: cls for cls in (CryptoTransfer, CryptoCreateAccount, CryptoDelete)
}


__all__ = [
    "Payload",
    "AccountAmount",
    "CryptoTransfer",
    "CryptoCreateAccount",
    "CryptoDelete",
    "PAYLOAD_TYPES",
]
