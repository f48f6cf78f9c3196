import pytest

from execution.abi import argument_types, encode_arguments, encode_call, selector


def test_selector_of_transfer():
    assert selector("transfer(address,uint256)") == bytes.fromhex("a9059cbb")


@pytest.mark.parametrize(
    "signature, expected",
    [
        ("totalSupply()", []),
        ("transfer(address,uint256)", ["address", "uint256"]),
        ("f((address,uint256)[],bytes)", ["(address,uint256)[]", "bytes"]),
        ("g(uint8, (bool,(bytes32,string)), address[2])", ["uint8", "(bool,(bytes32,string))", "address[2]"]),
    ],
)
def test_argument_types(signature, expected):
    assert argument_types(signature) == expected


@pytest.mark.parametrize("signature", ["transfer", "(address)", "f(address", "f(address))", "f(address,,uint256)", "f(address,)"])
def test_malformed_signature_rejected(signature):
    with pytest.raises(ValueError):
        argument_types(signature)


def test_argument_count_must_match():
    with pytest.raises(ValueError):
        encode_arguments(["address", "uint256"], ["0x" + "11" * 20])


def test_encode_call_without_arguments_is_selector_only():
    assert encode_call("totalSupply()", []) == bytes.fromhex("18160ddd")
