import pytest
from eth_account import Account

from config import Settings
from signing.factory import signing_mode_from_env
from signing.modes import LocallySigned, NodeSigned
from signing.policy import PolicyEnforcedSigner

PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for k in ("SIGNER_TYPE", "EVM_CHAIN", "EVM_CHAIN_ID", "PRIVATE_KEY", "SIGNER_POLICY_ENABLED", "SIGNER_MAX_GAS"):
        monkeypatch.delenv(k, raising=False)


def test_default_is_node_signed():
    assert isinstance(signing_mode_from_env(), NodeSigned)


def test_env_private_key_mode(monkeypatch):
    monkeypatch.setenv("SIGNER_TYPE", "env_private_key")
    monkeypatch.setenv("PRIVATE_KEY", PRIVATE_KEY)
    monkeypatch.setenv("EVM_CHAIN", "base")

    mode = signing_mode_from_env()

    assert isinstance(mode, LocallySigned)
    assert mode.chain_id == 8453
    assert mode.signer.get_address() == Account.from_key(PRIVATE_KEY).address


def test_chain_id_override_and_policy(monkeypatch):
    monkeypatch.setenv("SIGNER_TYPE", "env_private_key")
    monkeypatch.setenv("PRIVATE_KEY", PRIVATE_KEY)
    monkeypatch.setenv("EVM_CHAIN_ID", "0x539")
    monkeypatch.setenv("SIGNER_MAX_GAS", "500000")

    mode = signing_mode_from_env(Settings())

    assert mode.chain_id == 1337
    assert isinstance(mode.signer, PolicyEnforcedSigner)


def test_unknown_signer_type(monkeypatch):
    monkeypatch.setenv("SIGNER_TYPE", "hsm")
    with pytest.raises(ValueError):
        signing_mode_from_env()
