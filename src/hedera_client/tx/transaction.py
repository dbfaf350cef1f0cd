"""
Transaction facade.

``Transaction`` ties the pieces together for a single payer/node pair:
build a body with defaults from ``TransactionConfig``, sign it, serialize
it for transport and interpret the node's precheck answer. The module-level
functions are the seams other components call through.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from ..config import TransactionConfig
from ..crypto.ed25519 import KeyInput
from ..runtime.errors import MissingBody, SchemaViolation
from ..signers import ed25519 as ed25519_signer
from .body import TransactionBody
from .codec import deserialize as _deserialize
from .codec import encode_body, serialize as _serialize
from .envelope import TransactionEnvelope, attach_signature, sign_and_attach
from .ids import AccountId, Duration, Timestamp, TransactionId
from .payloads import Payload
from .response import PrecheckOutcome, interpret_response

logger = logging.getLogger(__name__)

# Option names accepted by build_body, including the camelCase spellings
# used by the wire schema
_OPTION_ALIASES = {
    "operatorId": "operator_id",
    "nodeAccountId": "node_account_id",
    "transactionValidStart": "transaction_valid_start",
    "transactionFee": "transaction_fee",
    "transactionValidDuration": "transaction_valid_duration",
    "generateRecord": "generate_record",
}

_BODY_OPTIONS = frozenset({
    "transaction_valid_start",
    "transaction_fee",
    "transaction_valid_duration",
    "memo",
    "generate_record",
    "payload",
})


def _schema_violation(e: ValidationError) -> SchemaViolation:
    issues = [
        f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
        for err in e.errors()
    ]
    return SchemaViolation("TransactionBody failed schema validation", issues, cause=e)


def _parse_fee(value: Any) -> int:
    if isinstance(value, str):
        # isdigit() alone also accepts digits such as "²" that int() refuses
        if not (value.isascii() and value.isdigit()):
            raise SchemaViolation("TransactionBody failed schema validation",
                                  [f"transaction_fee: not an unsigned integer: {value!r}"])
        return int(value)
    return value


def _normalize_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    normalized = {}
    for key, value in options.items():
        normalized[_OPTION_ALIASES.get(key, key)] = value
    return normalized


class Transaction:
    """
    One transaction request from ``operator_id`` submitted via ``node_account_id``.

    The current envelope is replaced, never mutated: ``build_body`` installs a
    fresh unsigned envelope and each signature produces a new envelope.
    A given instance is meant for a single thread.
    """

    def __init__(self, operator_id: Any, node_account_id: Any, config: Optional[TransactionConfig] = None):
        """
        Args:
            operator_id: Paying account (``"0.0.2"``, number or AccountId)
            node_account_id: Node the transaction will be submitted to
            config: Defaults for fee, duration and memo limits
        """
        self.operator_id = AccountId.parse(operator_id)
        self.node_account_id = AccountId.parse(node_account_id)
        self.config = config or TransactionConfig()
        self._envelope: Optional[TransactionEnvelope] = None

    def build_body(self, **options: Any) -> TransactionBody:
        """
        Create the transaction body and an unsigned envelope around it.

        Keyword Args:
            transaction_valid_start: Timestamp; defaults to now
            transaction_fee: Max fee in tinybars (int or decimal string)
            transaction_valid_duration: Seconds or Duration
            memo: Optional memo, at most ``config.max_memo_bytes`` bytes
            generate_record: Ask the network to generate a record
            payload: Operation payload (CryptoTransfer, ...)

        Raises:
            SchemaViolation: If any option is invalid
        """
        options = _normalize_options(options)
        unknown = sorted(set(options) - _BODY_OPTIONS)
        if unknown:
            raise SchemaViolation("TransactionBody failed schema validation",
                                  [f"{name}: unknown option" for name in unknown])

        memo = options.get("memo")
        if isinstance(memo, str) and len(memo.encode("utf-8")) > self.config.max_memo_bytes:
            raise SchemaViolation("TransactionBody failed schema validation",
                                  [f"memo: exceeds {self.config.max_memo_bytes} bytes"])

        payload = options.get("payload")
        if payload is not None and not isinstance(payload, Payload):
            raise SchemaViolation("TransactionBody failed schema validation",
                                  [f"payload: Payload expected, got {type(payload).__name__}"])

        fee = options.get("transaction_fee")
        duration = options.get("transaction_valid_duration")
        try:
            body = TransactionBody(
                transaction_id=TransactionId(
                    account_id=self.operator_id,
                    valid_start=options.get("transaction_valid_start") or Timestamp.now(),
                ),
                node_account_id=self.node_account_id,
                fee=self.config.default_fee if fee is None else _parse_fee(fee),
                valid_duration=(
                    Duration.from_seconds(self.config.default_valid_duration)
                    if duration is None else duration
                ),
                memo=memo,
                generate_record=options.get("generate_record", False),
                payload=payload,
            )
        except ValidationError as e:
            raise _schema_violation(e) from e

        if self._envelope is not None and self._envelope.is_signed:
            logger.warning("Rebuilding %s discards %d signature(s)",
                           self._envelope.transaction_id, len(self._envelope.sig_map))
        self._envelope = TransactionEnvelope.for_body(body)
        logger.debug("Built body for %s (%d bytes)", body.transaction_id, len(self._envelope.body_bytes))
        return body

    @property
    def envelope(self) -> Optional[TransactionEnvelope]:
        return self._envelope

    @property
    def body(self) -> Optional[TransactionBody]:
        return self._envelope.body if self._envelope is not None else None

    @property
    def transaction_id(self) -> TransactionId:
        if self._envelope is None:
            raise MissingBody()
        return self._envelope.transaction_id

    def add_signature(self, signature: bytes, public_key: KeyInput) -> Transaction:
        """Attach an externally computed signature."""
        self._envelope = attach_signature(
            self._envelope, signature, public_key, self.config.prefix_length
        )
        return self

    def sign_transaction(self, private_key: KeyInput, public_key: Optional[KeyInput] = None) -> Transaction:
        """Sign the body with ``private_key`` and attach the signature."""
        self._envelope = sign_and_attach(
            self._envelope, private_key, public_key, self.config.prefix_length
        )
        return self

    def serialize(self) -> str:
        """Hex wire form of the current envelope."""
        if self._envelope is None:
            raise MissingBody()
        return _serialize(self._envelope)

    @staticmethod
    def deserialize(hex_string: str) -> Optional[TransactionEnvelope]:
        return _deserialize(hex_string)

    @staticmethod
    def handle_response(response: Any) -> PrecheckOutcome:
        return interpret_response(response)

    def to_dict(self) -> Dict[str, Any]:
        """Wire dict form of the current envelope."""
        if self._envelope is None:
            raise MissingBody()
        return self._envelope.to_proto()

    def __repr__(self) -> str:
        signatures = len(self._envelope.sig_map) if self._envelope is not None else 0
        return (f"Transaction(operator={self.operator_id}, node={self.node_account_id}, "
                f"signatures={signatures})")


def build_body(options: Mapping[str, Any], config: Optional[TransactionConfig] = None) -> TransactionBody:
    """
    Build a body from an options mapping.

    ``options`` must include ``operator_id`` and ``node_account_id``
    (or ``operatorId``/``nodeAccountId``); the rest are as for
    ``Transaction.build_body``.
    """
    options = _normalize_options(options)
    missing = [k for k in ("operator_id", "node_account_id") if options.get(k) is None]
    if missing:
        raise SchemaViolation("TransactionBody failed schema validation",
                              [f"{name}: required option is missing" for name in missing])
    operator_id = options.pop("operator_id")
    node_account_id = options.pop("node_account_id")
    try:
        tx = Transaction(operator_id, node_account_id, config)
    except ValidationError as e:
        raise _schema_violation(e) from e
    return tx.build_body(**options)


def sign(body: TransactionBody, private_key_hex: KeyInput) -> bytes:
    """Encode ``body`` canonically and sign the resulting bytes."""
    return ed25519_signer.sign(encode_body(body), private_key_hex)


serialize = _serialize
deserialize = _deserialize


__all__ = [
    "Transaction",
    "build_body",
    "sign",
    "serialize",
    "deserialize",
    "interpret_response",
]
