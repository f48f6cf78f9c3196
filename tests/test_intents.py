import pytest

from execution.intents import Overrides, TransactionIntent, intent_from_tx, intent_with_overrides


def test_tx_params_skip_unset_fields():
    intent = TransactionIntent(to="0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48", data=b"\x01\x02", gas=0)

    assert intent.to_tx_params() == {
        "to": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        "data": "0x0102",
        "gas": 0,
    }


def test_tx_params_reject_bad_address():
    with pytest.raises(ValueError):
        TransactionIntent(to="0x1234").to_tx_params()


def test_overrides_leave_unset_fields_open():
    intent = intent_with_overrides("0x" + "11" * 20, b"\xaa", Overrides(nonce=4))

    assert intent.nonce == 4
    assert intent.from_address is None
    assert intent.gas is None and intent.gas_price is None and intent.value is None
    assert intent.data == b"\xaa"


def test_intent_from_web3_style_dict():
    intent = intent_from_tx(
        {"to": "0x" + "11" * 20, "from": "0x" + "22" * 20, "gasPrice": "0x3b9aca00", "gas": "21000", "data": "0xdead"}
    )

    assert intent.gas_price == 1_000_000_000
    assert intent.gas == 21_000
    assert intent.nonce is None
    assert intent.data == b"\xde\xad"
    assert intent.from_address == "0x" + "22" * 20


def test_intent_from_tx_rejects_bool():
    with pytest.raises(ValueError):
        intent_from_tx({"nonce": True})
