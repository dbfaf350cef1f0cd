"""
Precheck response interpretation.

Maps the ``nodeTransactionPrecheckCode`` a node returns on submission to an
``Ok`` or ``Rejected`` value. Rejections are values, not exceptions: whether
to retry, re-sign or give up is the caller's decision.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Union

from ..runtime.errors import TransactionRejected


class ResponseCode(IntEnum):
    """Hedera ResponseCodeEnum values that can come back from precheck."""

    OK = 0
    INVALID_TRANSACTION = 1
    PAYER_ACCOUNT_NOT_FOUND = 2
    INVALID_NODE_ACCOUNT = 3
    TRANSACTION_EXPIRED = 4
    INVALID_TRANSACTION_START = 5
    INVALID_TRANSACTION_DURATION = 6
    INVALID_SIGNATURE = 7
    MEMO_TOO_LONG = 8
    INSUFFICIENT_TX_FEE = 9
    INSUFFICIENT_PAYER_BALANCE = 10
    DUPLICATE_TRANSACTION = 11
    BUSY = 12
    NOT_SUPPORTED = 13
    INVALID_FILE_ID = 14
    INVALID_ACCOUNT_ID = 15
    INVALID_CONTRACT_ID = 16
    INVALID_TRANSACTION_ID = 17
    RECEIPT_NOT_FOUND = 18
    RECORD_NOT_FOUND = 19
    INVALID_SOLIDITY_ID = 20
    UNKNOWN = 21
    SUCCESS = 22
    FAIL_INVALID = 23
    FAIL_FEE = 24
    FAIL_BALANCE = 25
    KEY_REQUIRED = 26
    BAD_ENCODING = 27
    INSUFFICIENT_ACCOUNT_BALANCE = 28
    INVALID_SOLIDITY_ADDRESS = 29
    INSUFFICIENT_GAS = 30
    CONTRACT_SIZE_LIMIT_EXCEEDED = 31
    LOCAL_CALL_MODIFICATION_EXCEPTION = 32
    CONTRACT_REVERT_EXECUTED = 33
    CONTRACT_EXECUTION_EXCEPTION = 34
    INVALID_RECEIVING_NODE_ACCOUNT = 35
    MISSING_QUERY_HEADER = 36
    ACCOUNT_UPDATE_FAILED = 37
    INVALID_KEY_ENCODING = 38
    NULL_SOLIDITY_ADDRESS = 39
    CONTRACT_UPDATE_FAILED = 40
    INVALID_QUERY_HEADER = 41
    INVALID_FEE_SUBMITTED = 42
    INVALID_PAYER_SIGNATURE = 43
    KEY_NOT_PROVIDED = 44
    INVALID_EXPIRATION_TIME = 45
    NO_WACL_KEY = 46
    FILE_CONTENT_EMPTY = 47
    INVALID_ACCOUNT_AMOUNTS = 48
    EMPTY_TRANSACTION_BODY = 49
    INVALID_TRANSACTION_BODY = 50


REASONS: Dict[ResponseCode, str] = {
    ResponseCode.OK: "The transaction passed the precheck validations",
    ResponseCode.INVALID_TRANSACTION: "For any error not handled by specific error codes",
    ResponseCode.PAYER_ACCOUNT_NOT_FOUND: "Payer account does not exist",
    ResponseCode.INVALID_NODE_ACCOUNT: "Node account provided does not match the node account of the node the transaction was submitted to",
    ResponseCode.TRANSACTION_EXPIRED: "Pre-check error when the transaction valid start plus valid duration is less than the current consensus time",
    ResponseCode.INVALID_TRANSACTION_START: "Transaction start time is greater than the current consensus time",
    ResponseCode.INVALID_TRANSACTION_DURATION: "Valid transaction duration is out of the allowed range",
    ResponseCode.INVALID_SIGNATURE: "The transaction signature is not valid",
    ResponseCode.MEMO_TOO_LONG: "Transaction memo size exceeded 100 bytes",
    ResponseCode.INSUFFICIENT_TX_FEE: "The fee provided in the transaction is insufficient for this type of transaction",
    ResponseCode.INSUFFICIENT_PAYER_BALANCE: "The payer account has insufficient cryptocurrency to pay the transaction fee",
    ResponseCode.DUPLICATE_TRANSACTION: "This transaction ID is a duplicate of one that was submitted to this node or reached consensus in the last 180 seconds",
    ResponseCode.BUSY: "The node is busy and cannot accept the transaction right now",
    ResponseCode.NOT_SUPPORTED: "The transaction or query is not supported",
    ResponseCode.INVALID_FILE_ID: "The file id is invalid or does not exist",
    ResponseCode.INVALID_ACCOUNT_ID: "The account id is invalid or does not exist",
    ResponseCode.INVALID_CONTRACT_ID: "The contract id is invalid or does not exist",
    ResponseCode.INVALID_TRANSACTION_ID: "Transaction id is not valid",
    ResponseCode.RECEIPT_NOT_FOUND: "Receipt for the given transaction id does not exist",
    ResponseCode.RECORD_NOT_FOUND: "Record for the given transaction id does not exist",
    ResponseCode.INVALID_SOLIDITY_ID: "The solidity id is invalid or its entity does not exist",
    ResponseCode.UNKNOWN: "The transaction was submitted but its fate is not yet known",
    ResponseCode.SUCCESS: "The transaction succeeded",
    ResponseCode.FAIL_INVALID: "There was a system error and the transaction failed because of invalid request parameters",
    ResponseCode.FAIL_FEE: "There was a system error while performing fee calculation",
    ResponseCode.FAIL_BALANCE: "There was a system error while performing balance checks",
    ResponseCode.KEY_REQUIRED: "Key not provided in the transaction body",
    ResponseCode.BAD_ENCODING: "Unsupported algorithm or public key encoding",
    ResponseCode.INSUFFICIENT_ACCOUNT_BALANCE: "When the account balance is not sufficient for the transfer",
    ResponseCode.INVALID_SOLIDITY_ADDRESS: "The solidity address is invalid",
    ResponseCode.INSUFFICIENT_GAS: "Not enough gas was supplied to execute the transaction",
    ResponseCode.CONTRACT_SIZE_LIMIT_EXCEEDED: "Contract byte code size is over the limit",
    ResponseCode.LOCAL_CALL_MODIFICATION_EXCEPTION: "A local call attempted to modify state",
    ResponseCode.CONTRACT_REVERT_EXECUTED: "Contract REVERT opcode executed",
    ResponseCode.CONTRACT_EXECUTION_EXCEPTION: "Contract execution failed",
    ResponseCode.INVALID_RECEIVING_NODE_ACCOUNT: "The receiving node account in the payment transaction does not match the node the query was sent to",
    ResponseCode.MISSING_QUERY_HEADER: "The query header is missing",
    ResponseCode.ACCOUNT_UPDATE_FAILED: "The account update failed",
    ResponseCode.INVALID_KEY_ENCODING: "The key encoding is invalid",
    ResponseCode.NULL_SOLIDITY_ADDRESS: "A null solidity address was provided",
    ResponseCode.CONTRACT_UPDATE_FAILED: "The contract update failed",
    ResponseCode.INVALID_QUERY_HEADER: "The query header is invalid",
    ResponseCode.INVALID_FEE_SUBMITTED: "The fee submitted is invalid",
    ResponseCode.INVALID_PAYER_SIGNATURE: "The payer signature is invalid",
    ResponseCode.KEY_NOT_PROVIDED: "The key was not provided",
    ResponseCode.INVALID_EXPIRATION_TIME: "The expiration time is invalid",
    ResponseCode.NO_WACL_KEY: "No WACL key was provided",
    ResponseCode.FILE_CONTENT_EMPTY: "The file content is empty",
    ResponseCode.INVALID_ACCOUNT_AMOUNTS: "The crypto transfer credit and debit do not sum to zero",
    ResponseCode.EMPTY_TRANSACTION_BODY: "The transaction body is empty",
    ResponseCode.INVALID_TRANSACTION_BODY: "The transaction body is invalid",
}

UNRECOGNIZED = "UNRECOGNIZED"

PRECHECK_FIELD = "nodeTransactionPrecheckCode"


@dataclass(frozen=True)
class Ok:
    """Precheck passed."""

    code: int = 0
    name: str = field(default=ResponseCode.OK.name, compare=False)
    reason: str = field(default=REASONS[ResponseCode.OK], compare=False)

    @property
    def is_ok(self) -> bool:
        return True

    def raise_for_status(self) -> None:
        """No-op; mirrors ``Rejected.raise_for_status``."""


@dataclass(frozen=True)
class Rejected:
    """Precheck failed with ``code``. Equality looks at the code only."""

    code: int
    name: str = field(default=UNRECOGNIZED, compare=False)
    reason: str = field(default="", compare=False)

    @property
    def is_ok(self) -> bool:
        return False

    def raise_for_status(self) -> None:
        raise TransactionRejected(self)


PrecheckOutcome = Union[Ok, Rejected]

OK = Ok()


def interpret(code: Optional[int]) -> PrecheckOutcome:
    """
    Map a precheck code to an outcome.

    ``0`` and ``None`` are ``Ok``. Codes outside the table still produce a
    ``Rejected`` with a generic reason.

    Raises:
        TypeError: If ``code`` is neither None nor an int
    """
    if code is None:
        return OK
    if isinstance(code, bool) or not isinstance(code, int):
        raise TypeError(f"Precheck code must be an int, got {type(code).__name__}")
    if code == ResponseCode.OK:
        return OK
    try:
        known = ResponseCode(code)
    except ValueError:
        return Rejected(code=int(code), name=UNRECOGNIZED, reason=f"unrecognized precheck code {code}")
    return Rejected(code=int(code), name=known.name, reason=REASONS[known])


def interpret_response(response: Any) -> PrecheckOutcome:
    """
    Interpret a transport response object.

    Reads ``nodeTransactionPrecheckCode`` from a mapping, or the
    ``node_transaction_precheck_code`` / ``nodeTransactionPrecheckCode``
    attribute of any other object. A response without a code is ``Ok``.
    """
    if response is None:
        return OK
    if isinstance(response, Mapping):
        code = response.get(PRECHECK_FIELD)
    else:
        code = getattr(response, "node_transaction_precheck_code", None)
        if code is None:
            code = getattr(response, PRECHECK_FIELD, None)
    return interpret(code)


__all__ = [
    "ResponseCode",
    "REASONS",
    "Ok",
    "Rejected",
    "PrecheckOutcome",
    "interpret",
    "interpret_response",
]
