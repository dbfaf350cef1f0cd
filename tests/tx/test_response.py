"""Precheck code interpretation."""

from types import SimpleNamespace

import pytest

from hedera_client.runtime.errors import ErrorCode, TransactionRejected
from hedera_client.tx.response import OK, REASONS, Ok, Rejected, ResponseCode, interpret, interpret_response


class TestInterpret:

    @pytest.mark.parametrize("code", [0, None])
    def test_ok(self, code):
        outcome = interpret(code)
        assert outcome == Ok()
        assert outcome.is_ok

    def test_invalid_signature(self):
        outcome = interpret(7)
        assert outcome == Rejected(7)
        assert outcome.name == "INVALID_SIGNATURE"
        assert outcome.reason == "The transaction signature is not valid"
        assert not outcome.is_ok

    def test_every_known_code_has_a_reason(self):
        for code in ResponseCode:
            assert REASONS[code]
            if code != ResponseCode.OK:
                assert interpret(int(code)).reason == REASONS[code]

    def test_unknown_code(self):
        outcome = interpret(99999)
        assert outcome == Rejected(99999)
        assert outcome.name == "UNRECOGNIZED"
        assert "99999" in outcome.reason

    def test_enum_member(self):
        assert interpret(ResponseCode.BUSY) == Rejected(12)

    @pytest.mark.parametrize("bad", ["7", 7.0, True, [7]])
    def test_non_integer(self, bad):
        with pytest.raises(TypeError):
            interpret(bad)

    def test_equality_ignores_reason(self):
        assert Rejected(7, reason="a") == Rejected(7, reason="b")
        assert Rejected(7) != Rejected(8)
        assert Rejected(7) != OK


class TestInterpretResponse:

    def test_mapping(self):
        assert interpret_response({"nodeTransactionPrecheckCode": 7}) == Rejected(7)
        assert interpret_response({"nodeTransactionPrecheckCode": 0}) == OK

    def test_mapping_without_code(self):
        assert interpret_response({}) == OK

    def test_none(self):
        assert interpret_response(None) == OK

    def test_snake_case_attribute(self):
        assert interpret_response(SimpleNamespace(node_transaction_precheck_code=10)) == Rejected(10)

    def test_camel_case_attribute(self):
        assert interpret_response(SimpleNamespace(nodeTransactionPrecheckCode=9)) == Rejected(9)


class TestRaiseForStatus:

    def test_ok_is_noop(self):
        OK.raise_for_status()

    def test_rejected_raises(self):
        with pytest.raises(TransactionRejected) as exc_info:
            interpret(7).raise_for_status()
        error = exc_info.value
        assert error.code == ErrorCode.PRECHECK_REJECTED
        assert error.outcome == Rejected(7)
        assert "INVALID_SIGNATURE" in error.message
        assert error.details["precheckCode"] == 7
