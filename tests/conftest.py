"""
Shared fixtures: RFC 8032 Ed25519 key vectors and a reference transaction
body whose canonical encoding is known byte for byte.
"""

import pytest

from hedera_client.tx import AccountId, Duration, Timestamp, TransactionBody, TransactionId

# RFC 8032 section 7.1, test 1
PRIVATE_KEY_HEX = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
PUBLIC_KEY_HEX = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"

# RFC 8032 section 7.1, test 2
OTHER_PRIVATE_KEY_HEX = "4ccd089b28ff96da9db6c346ec114e0f5b8a319f35aba624da8cf6ed4fb8a6fb"
OTHER_PUBLIC_KEY_HEX = "3d4017c3e843895a92b70aa74d1b7ebc9c982ccf2ec4968cc0cd55f12af4660c"

# TransactionBody{
#   transactionID{transactionValidStart{seconds=1}, accountID{accountNum=2}},
#   nodeAccountID{accountNum=3}, transactionFee=100,
#   transactionValidDuration{seconds=120}}
REFERENCE_BODY_HEX = "0a080a0208011202180212021803186422020878"


@pytest.fixture
def keypair():
    """Deterministic (private_hex, public_hex) pair."""
    return PRIVATE_KEY_HEX, PUBLIC_KEY_HEX


@pytest.fixture
def other_keypair():
    return OTHER_PRIVATE_KEY_HEX, OTHER_PUBLIC_KEY_HEX


@pytest.fixture
def reference_body():
    """Body matching REFERENCE_BODY_HEX."""
    return TransactionBody(
        transaction_id=TransactionId(
            account_id=AccountId(num=2),
            valid_start=Timestamp(seconds=1),
        ),
        node_account_id=AccountId(num=3),
        fee=100,
        valid_duration=Duration.from_seconds(120),
    )


@pytest.fixture
def reference_body_bytes():
    return bytes.fromhex(REFERENCE_BODY_HEX)
