"""
Identifier and time value objects.

AccountId, Timestamp, Duration and TransactionId as frozen pydantic models,
each convertible to and from its wire dict form.
"""

from __future__ import annotations
import time
from typing import Any, Dict, Mapping

from pydantic import BaseModel, Field, model_validator

_FROZEN = {"frozen": True, "extra": "forbid"}


class AccountId(BaseModel):
    """
    Account identifier ``shard.realm.num``.

    Accepts ``"0.0.3"``, a bare account number, a mapping with either
    ``shard/realm/num`` or the wire ``shardNum/realmNum/accountNum`` keys, or
    another AccountId.
    """

    shard: int = Field(default=0, ge=0, lt=1 << 63, strict=True)
    realm: int = Field(default=0, ge=0, lt=1 << 63, strict=True)
    num: int = Field(ge=0, lt=1 << 63, strict=True)

    model_config = _FROZEN

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, v: Any) -> Any:
        if isinstance(v, AccountId):
            return v.model_dump()
        if isinstance(v, bool):
            raise ValueError("AccountId cannot be a boolean")
        if isinstance(v, int):
            return {"num": v}
        if isinstance(v, str):
            parts = v.strip().split(".")
            if len(parts) != 3 or not all(p.isdigit() for p in parts):
                raise ValueError(f"AccountId must look like 'shard.realm.num', got {v!r}")
            shard, realm, num = (int(p) for p in parts)
            return {"shard": shard, "realm": realm, "num": num}
        if isinstance(v, Mapping) and "accountNum" in v:
            return {
                "shard": v.get("shardNum", 0),
                "realm": v.get("realmNum", 0),
                "num": v["accountNum"],
            }
        return v

    @classmethod
    def parse(cls, value: Any) -> AccountId:
        return cls.model_validate(value)

    def to_canonical_form(self) -> str:
        return f"{self.shard}.{self.realm}.{self.num}"

    def to_proto(self) -> Dict[str, int]:
        return {"shardNum": self.shard, "realmNum": self.realm, "accountNum": self.num}

    @classmethod
    def from_proto(cls, data: Mapping[str, Any]) -> AccountId:
        return cls(
            shard=data.get("shardNum", 0),
            realm=data.get("realmNum", 0),
            num=data.get("accountNum", 0),
        )

    def __str__(self) -> str:
        return self.to_canonical_form()


class Timestamp(BaseModel):
    """Seconds and nanoseconds since the Unix epoch."""

    seconds: int = Field(default=0, ge=-(1 << 63), lt=1 << 63, strict=True)
    nanos: int = Field(default=0, ge=0, lt=1_000_000_000, strict=True)

    model_config = _FROZEN

    @classmethod
    def now(cls) -> Timestamp:
        return cls.from_nanos(time.time_ns())

    @classmethod
    def from_nanos(cls, total_nanos: int) -> Timestamp:
        seconds, nanos = divmod(total_nanos, 1_000_000_000)
        return cls(seconds=seconds, nanos=nanos)

    def to_nanos(self) -> int:
        return self.seconds * 1_000_000_000 + self.nanos

    def to_proto(self) -> Dict[str, int]:
        return {"seconds": self.seconds, "nanos": self.nanos}

    @classmethod
    def from_proto(cls, data: Mapping[str, Any]) -> Timestamp:
        return cls(seconds=data.get("seconds", 0), nanos=data.get("nanos", 0))

    def __str__(self) -> str:
        return f"{self.seconds}.{self.nanos:09d}"


class Duration(BaseModel):
    """A span of whole seconds."""

    seconds: int = Field(ge=-(1 << 63), lt=1 << 63, strict=True)

    model_config = _FROZEN

    @classmethod
    def from_seconds(cls, n: int) -> Duration:
        return cls(seconds=n)

    def to_proto(self) -> Dict[str, int]:
        return {"seconds": self.seconds}

    @classmethod
    def from_proto(cls, data: Mapping[str, Any]) -> Duration:
        return cls(seconds=data.get("seconds", 0))


class TransactionId(BaseModel):
    """Payer account plus the start of the validity window."""

    account_id: AccountId
    valid_start: Timestamp

    model_config = _FROZEN

    @classmethod
    def generate(cls, account_id: Any, valid_start: Timestamp = None) -> TransactionId:
        """Create an id for ``account_id`` starting now unless ``valid_start`` is given."""
        return cls(account_id=AccountId.parse(account_id), valid_start=valid_start or Timestamp.now())

    def to_canonical_form(self) -> str:
        return f"{self.account_id.to_canonical_form()}@{self.valid_start}"

    def to_proto(self) -> Dict[str, Any]:
        return {
            "transactionValidStart": self.valid_start.to_proto(),
            "accountID": self.account_id.to_proto(),
        }

    @classmethod
    def from_proto(cls, data: Mapping[str, Any]) -> TransactionId:
        return cls(
            account_id=AccountId.from_proto(data["accountID"]),
            valid_start=Timestamp.from_proto(data["transactionValidStart"]),
        )

    def __str__(self) -> str:
        return self.to_canonical_form()


__all__ = ["AccountId", "Timestamp", "Duration", "TransactionId"]
