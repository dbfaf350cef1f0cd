"""
Client-side transaction defaults.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

# One hbar, in tinybars
DEFAULT_TX_FEE = 100_000_000
DEFAULT_VALID_DURATION = 120
MAX_MEMO_BYTES = 100

ENV_PREFIX = "HEDERA_"


@dataclass(frozen=True)
class TransactionConfig:
    """Defaults applied when building transaction bodies."""

    default_fee: int = DEFAULT_TX_FEE
    default_valid_duration: int = DEFAULT_VALID_DURATION
    max_memo_bytes: int = MAX_MEMO_BYTES
    prefix_length: Optional[int] = None
    debug: bool = False

    def __post_init__(self):
        if self.default_fee < 0:
            raise ValueError("default_fee must be non-negative")
        if self.default_valid_duration <= 0:
            raise ValueError("default_valid_duration must be positive")
        if not 0 <= self.max_memo_bytes <= MAX_MEMO_BYTES:
            raise ValueError(f"max_memo_bytes must be between 0 and {MAX_MEMO_BYTES}")
        if self.prefix_length is not None and not 0 < self.prefix_length <= 32:
            raise ValueError("prefix_length must be between 1 and 32")
        if self.debug:
            logging.getLogger("hedera_client").setLevel(logging.DEBUG)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> TransactionConfig:
        """
        Build a config from ``HEDERA_*`` environment variables.

        ``HEDERA_DEFAULT_FEE``, ``HEDERA_DEFAULT_VALID_DURATION``,
        ``HEDERA_MAX_MEMO_BYTES``, ``HEDERA_PREFIX_LENGTH`` and ``HEDERA_DEBUG``
        override the matching fields; unset variables keep the defaults.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            if f.name == "debug":
                values[f.name] = raw.strip().lower() in ("1", "true", "yes", "on")
            else:
                values[f.name] = int(raw)
        return cls(**values)


__all__ = ["TransactionConfig", "DEFAULT_TX_FEE", "DEFAULT_VALID_DURATION", "MAX_MEMO_BYTES"]
