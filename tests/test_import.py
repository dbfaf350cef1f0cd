"""Test basic imports from the package."""


def test_main_import():
    """Test that the main package imports successfully."""
    import hedera_client
    assert hedera_client.__version__ == "0.1.0"
    assert hasattr(hedera_client, 'Transaction')
    assert hasattr(hedera_client, 'TransactionEnvelope')


def test_crypto_import():
    import hedera_client.crypto as crypto
    assert hasattr(crypto, 'Ed25519PrivateKey')
    assert hasattr(crypto, 'Ed25519PublicKey')


def test_signers_import():
    import hedera_client.signers as signers
    assert hasattr(signers, 'Signer')
    assert hasattr(signers, 'Ed25519Signer')


def test_codec_import():
    import hedera_client.codec as codec
    assert hasattr(codec, 'BinaryWriter')
    assert hasattr(codec, 'BinaryReader')
    assert hasattr(codec, 'SCHEMA')


def test_tx_import():
    import hedera_client.tx as tx
    assert hasattr(tx, 'build_body')
    assert hasattr(tx, 'attach_signature')
    assert hasattr(tx, 'interpret_response')


def test_runtime_import():
    import hedera_client.runtime as runtime
    assert hasattr(runtime, 'HederaError')
    assert hasattr(runtime, 'ErrorCode')


def test_exported_names_exist():
    import hedera_client
    for name in hedera_client.__all__:
        assert hasattr(hedera_client, name), name
