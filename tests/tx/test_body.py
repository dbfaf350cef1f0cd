"""
TransactionBody invariants, immutability and canonical bytes.
"""

import pytest
from pydantic import ValidationError

from hedera_client.runtime.errors import EncodingError
from hedera_client.tx import (
    AccountId,
    CryptoCreateAccount,
    CryptoDelete,
    CryptoTransfer,
    Duration,
    Payload,
    Timestamp,
    TransactionBody,
    TransactionId,
)


def _body(**overrides):
    fields = dict(
        transaction_id=TransactionId(account_id=AccountId(num=2), valid_start=Timestamp(seconds=1)),
        node_account_id=AccountId(num=3),
        fee=100,
        valid_duration=120,
    )
    fields.update(overrides)
    return TransactionBody(**fields)


class TestInvariants:

    def test_int_duration_is_coerced(self, reference_body):
        assert _body().valid_duration == Duration(seconds=120)
        assert _body() == reference_body

    @pytest.mark.parametrize("seconds", [0, -1])
    def test_duration_must_be_positive(self, seconds):
        with pytest.raises(ValidationError, match="positive"):
            _body(valid_duration=seconds)

    @pytest.mark.parametrize("fee", [-1, 1 << 64])
    def test_fee_range(self, fee):
        with pytest.raises(ValidationError):
            _body(fee=fee)

    def test_fee_upper_bound_accepted(self):
        assert _body(fee=(1 << 64) - 1).fee == (1 << 64) - 1

    def test_empty_memo_becomes_none(self):
        assert _body(memo="").memo is None

    def test_memo_byte_limit(self):
        assert _body(memo="a" * 100).memo == "a" * 100
        with pytest.raises(ValidationError, match="memo exceeds"):
            _body(memo="a" * 101)

    def test_memo_limit_counts_utf8_bytes(self):
        # 34 three-byte characters = 102 bytes
        with pytest.raises(ValidationError):
            _body(memo="€" * 34)

    @pytest.mark.parametrize("overrides", [
        {"fee": "100"},
        {"fee": 100.0},
        {"fee": True},
        {"generate_record": "yes"},
        {"generate_record": 1},
        {"memo": b"test"},
    ])
    def test_scalars_are_not_coerced(self, overrides):
        with pytest.raises(ValidationError):
            _body(**overrides)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            _body(gas=5)

    def test_frozen(self, reference_body):
        with pytest.raises(ValidationError):
            reference_body.fee = 1
        with pytest.raises(ValidationError):
            reference_body.memo = "changed"

    def test_operation(self, reference_body):
        assert reference_body.operation is None
        transfer = CryptoTransfer.between("0.0.2", "0.0.5", 10)
        assert _body(payload=transfer).operation == "cryptoTransfer"


class TestEncoding:

    def test_known_bytes(self, reference_body, reference_body_bytes):
        assert reference_body.to_bytes() == reference_body_bytes

    def test_deterministic(self, reference_body):
        assert reference_body.to_bytes() == _body().to_bytes()

    def test_memo_changes_bytes(self, reference_body):
        assert _body(memo="x").to_bytes() != reference_body.to_bytes()

    def test_decode_known_bytes(self, reference_body, reference_body_bytes):
        assert TransactionBody.from_bytes(reference_body_bytes) == reference_body

    def test_roundtrip_all_header_fields(self):
        body = _body(memo="test", generate_record=True, fee=100_000_000,
                     transaction_id=TransactionId(account_id="1.2.3",
                                                  valid_start=Timestamp(seconds=1_700_000_000, nanos=42)))
        assert TransactionBody.from_bytes(body.to_bytes()) == body

    def test_decode_rejects_zero_duration(self):
        # transactionValidDuration present but empty decodes to 0 seconds
        data = bytes.fromhex("0a080a020801120218021202180318642200")
        with pytest.raises(EncodingError, match="invalid"):
            TransactionBody.from_bytes(data)


class TestPayloads:

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            Payload()

        class Incomplete(Payload):
            def to_proto(self):
                return {}

        with pytest.raises(TypeError):
            Incomplete()

    def test_transfer_roundtrip(self):
        body = _body(payload=CryptoTransfer.between("0.0.2", "0.0.1001", 25))
        decoded = TransactionBody.from_bytes(body.to_bytes())
        assert decoded == body
        assert [t.amount for t in decoded.payload.transfers] == [-25, 25]

    def test_transfer_must_balance(self):
        with pytest.raises(ValidationError, match="sum to zero"):
            CryptoTransfer(transfers=[
                {"account_id": "0.0.2", "amount": -10},
                {"account_id": "0.0.3", "amount": 9},
            ])

    def test_transfer_needs_entries(self):
        with pytest.raises(ValidationError):
            CryptoTransfer(transfers=())

    def test_create_account_roundtrip(self, keypair):
        payload = CryptoCreateAccount(key=keypair[1], initial_balance=500,
                                      auto_renew_period=Duration.from_seconds(7_776_000))
        assert payload.key == bytes.fromhex(keypair[1])
        body = _body(payload=payload)
        assert TransactionBody.from_bytes(body.to_bytes()) == body

    def test_create_account_rejects_bad_key(self):
        with pytest.raises(ValidationError):
            CryptoCreateAccount(key="00" * 31)

    def test_delete_roundtrip(self):
        body = _body(payload=CryptoDelete(delete_account_id="0.0.9", transfer_account_id="0.0.2"))
        assert TransactionBody.from_bytes(body.to_bytes()) == body
