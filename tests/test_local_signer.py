import asyncio
import json

import pytest
from eth_account import Account
from eth_utils import keccak, to_checksum_address

from errors import SigningError
from execution.dispatcher import TransactionDispatcher
from execution.intents import Overrides, TransactionIntent
from signing.encrypted_keystore import EncryptedKeystoreSigner
from signing.env_private_key import EnvPrivateKeySigner
from signing.local_account import LocalAccountSigner
from signing.modes import LocallySigned

PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
RECIPIENT = to_checksum_address("0x" + "11" * 20)


def test_local_signer_hash_matches_raw():
    s = LocalAccountSigner(PRIVATE_KEY)
    tx = {"to": RECIPIENT, "value": 1, "gas": 21_000, "gasPrice": 1_000_000_000, "nonce": 0, "from": s.get_address()}

    signed = s.sign_transaction(tx, chain_id=1)

    assert signed.hash == keccak(signed.raw_transaction)
    assert Account.recover_transaction(signed.raw_transaction) == s.get_address()


def test_env_private_key_signer(monkeypatch):
    monkeypatch.delenv("PRIVATE_KEY", raising=False)
    with pytest.raises(ValueError):
        EnvPrivateKeySigner()

    monkeypatch.setenv("PRIVATE_KEY", PRIVATE_KEY)
    assert EnvPrivateKeySigner().get_address() == Account.from_key(PRIVATE_KEY).address


def test_dispatch_with_real_signer(provider):
    signer = LocalAccountSigner(PRIVATE_KEY)
    d = TransactionDispatcher(provider, LocallySigned(signer, chain_id=1))

    out = asyncio.run(d.send_transaction(TransactionIntent(to=RECIPIENT, value=10)))

    raw = provider.send_raw_transaction.await_args.args[0]
    assert out == "0x" + keccak(raw).hex()
    assert Account.recover_transaction(raw) == signer.get_address()


def test_foreign_sender_fails_signing(provider):
    signer = LocalAccountSigner(PRIVATE_KEY)
    d = TransactionDispatcher(provider, LocallySigned(signer, chain_id=1))
    overrides = Overrides(from_address="0x" + "22" * 20, gas=60_000)

    with pytest.raises(SigningError):
        asyncio.run(d.call_contract(RECIPIENT, "transfer(address,uint256)", [RECIPIENT, 1], overrides))

    provider.send_raw_transaction.assert_not_awaited()


def test_keystore_signer(monkeypatch, tmp_path):
    keystore = Account.encrypt(PRIVATE_KEY, "hunter2", kdf="pbkdf2", iterations=2)
    path = tmp_path / "key.json"
    path.write_text(json.dumps(keystore))
    monkeypatch.setenv("KEYSTORE_PATH", str(path))
    monkeypatch.setenv("KEYSTORE_PASSWORD", "hunter2")

    assert EncryptedKeystoreSigner().get_address() == Account.from_key(PRIVATE_KEY).address

    monkeypatch.setenv("KEYSTORE_PATH", str(tmp_path / "missing.json"))
    with pytest.raises(ValueError):
        EncryptedKeystoreSigner()
