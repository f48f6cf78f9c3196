from __future__ import annotations

from typing import Any, List, Sequence

from eth_abi import encode as abi_encode
from eth_utils import function_signature_to_4byte_selector


def selector(signature: str) -> bytes:
    """First 4 bytes of keccak256 over the canonical signature, e.g. `transfer(address,uint256)`."""
    return function_signature_to_4byte_selector(signature)


def argument_types(signature: str) -> List[str]:
    """
    Split the parameter list of a function signature into ABI type strings.

    Tuple parameters are kept whole: `f((address,uint256)[],bytes)` gives
    `["(address,uint256)[]", "bytes"]`.
    """
    sig = (signature or "").replace(" ", "")
    start = sig.find("(")
    if start <= 0 or not sig.endswith(")"):
        raise ValueError(f"Malformed function signature: {signature!r}")

    params = sig[start + 1 : -1]
    types: List[str] = []
    depth = 0
    current = ""
    for ch in params:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Unbalanced parentheses in signature: {signature!r}")
        if ch == "," and depth == 0:
            if not current:
                raise ValueError(f"Empty parameter type in signature: {signature!r}")
            types.append(current)
            current = ""
            continue
        current += ch

    if depth != 0:
        raise ValueError(f"Unbalanced parentheses in signature: {signature!r}")
    if current:
        types.append(current)
    elif types:
        raise ValueError(f"Empty parameter type in signature: {signature!r}")
    return types


def encode_arguments(types: Sequence[str], args: Sequence[Any]) -> bytes:
    if len(types) != len(args):
        raise ValueError(f"Expected {len(types)} arguments, got {len(args)}")
    if not types:
        return b""
    return abi_encode(list(types), list(args))


def encode_call(signature: str, args: Sequence[Any]) -> bytes:
    return selector(signature) + encode_arguments(argument_types(signature), args)
