from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from eth_utils import to_hex

from .evm import checksum


@dataclass
class TransactionIntent:
    """
    A transaction as the caller describes it, before signing.

    Any field may be left as None; filling completes `gas_price`, `gas`, `nonce`
    (and `from_address` when gas must be estimated). The intent is handed to the
    signer as a rendered dict, so it is never mutated past the fill step.
    """

    to: Optional[str] = None
    data: Optional[bytes] = None
    from_address: Optional[str] = None
    value: Optional[int] = None
    gas_price: Optional[int] = None
    gas: Optional[int] = None
    nonce: Optional[int] = None

    def to_tx_params(self) -> Dict[str, Any]:
        """Render as a web3 `TxParams` dict, leaving out unset fields."""
        params: Dict[str, Any] = {}
        if self.to is not None:
            params["to"] = checksum(self.to)
        if self.from_address is not None:
            params["from"] = checksum(self.from_address)
        if self.data is not None:
            params["data"] = to_hex(self.data)
        if self.value is not None:
            params["value"] = int(self.value)
        if self.gas_price is not None:
            params["gasPrice"] = int(self.gas_price)
        if self.gas is not None:
            params["gas"] = int(self.gas)
        if self.nonce is not None:
            params["nonce"] = int(self.nonce)
        return params


@dataclass(frozen=True)
class Overrides:
    from_address: Optional[str] = None
    gas: Optional[int] = None
    gas_price: Optional[int] = None
    nonce: Optional[int] = None
    value: Optional[int] = None


def intent_with_overrides(to: str, data: bytes, overrides: Overrides | None = None) -> TransactionIntent:
    # from is left to the overrides; filling resolves it from the signer when needed
    o = overrides or Overrides()
    return TransactionIntent(
        to=to,
        data=data,
        from_address=o.from_address,
        value=o.value,
        gas_price=o.gas_price,
        gas=o.gas,
        nonce=o.nonce,
    )


def _to_int(x: Any, *, name: str) -> Optional[int]:
    if x is None:
        return None
    if isinstance(x, bool):
        raise ValueError(f"Invalid int field {name}: {x}")
    if isinstance(x, int):
        return x
    if isinstance(x, str):
        s = x.strip().lower()
        if s.startswith("0x"):
            return int(s, 16)
        return int(s, 10)
    raise ValueError(f"Invalid int field {name}: {type(x).__name__}")


def _to_bytes(x: Any) -> Optional[bytes]:
    if x is None:
        return None
    if isinstance(x, (bytes, bytearray)):
        return bytes(x)
    s = str(x).strip()
    if s.startswith("0x"):
        s = s[2:]
    return bytes.fromhex(s)


def intent_from_tx(tx: Dict[str, Any]) -> TransactionIntent:
    """
    Build an intent from a web3-style tx dict (`gasPrice`, hex or decimal ints).
    """
    return TransactionIntent(
        to=tx.get("to"),
        data=_to_bytes(tx.get("data")),
        from_address=tx.get("from"),
        value=_to_int(tx.get("value"), name="value"),
        gas_price=_to_int(tx.get("gasPrice"), name="gasPrice"),
        gas=_to_int(tx.get("gas"), name="gas"),
        nonce=_to_int(tx.get("nonce"), name="nonce"),
    )
