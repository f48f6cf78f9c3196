from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from eth_utils import keccak

from .base import SignedTx, Signer


@dataclass(frozen=True)
class _RemoteSignedTx:
    """
    SignedTx built from a remote signing response. The hash is derived locally
    from the raw bytes, the signer's own view of the hash is not trusted.
    """

    raw_transaction: bytes
    hash: bytes


class RemoteSigner(Signer):
    """
    Remote signer (sidecar, internal signing service, KMS/HSM-backed proxy).

    Protocol (HTTP JSON):
    GET  {SIGNER_REMOTE_URL}/address
    response: {"address": "0x..."}

    POST {SIGNER_REMOTE_URL}/sign_transaction
    body: {"tx": {...}, "chain_id": 1}
    response: {"rawTransactionHex": "0x..."}
    """

    def __init__(self, url_env: str = "SIGNER_REMOTE_URL", *, timeout_sec: float = 10.0) -> None:
        url = (os.getenv(url_env) or "").strip()
        if not url:
            raise ValueError(f"{url_env} environment variable not set")
        self._base_url = url.rstrip("/")
        self._timeout = float(timeout_sec)
        self._cached_address: Optional[str] = None

    def get_address(self) -> str:
        if self._cached_address:
            return self._cached_address
        r = requests.get(f"{self._base_url}/address", timeout=self._timeout)
        r.raise_for_status()
        data = r.json()
        addr = str(data.get("address") or "").strip()
        if not addr:
            raise ValueError("Remote signer returned empty address")
        self._cached_address = addr
        return addr

    def sign_transaction(self, tx: Dict[str, Any], *, chain_id: int | None = None) -> SignedTx:
        payload = {"tx": tx, "chain_id": chain_id}
        r = requests.post(f"{self._base_url}/sign_transaction", json=payload, timeout=self._timeout)
        r.raise_for_status()
        data = r.json()
        raw_hex: Optional[str] = data.get("rawTransactionHex") or data.get("raw_transaction_hex")
        if not raw_hex:
            raise ValueError("Remote signer did not return rawTransactionHex")
        raw_hex = str(raw_hex).strip()
        if raw_hex.startswith("0x"):
            raw_hex = raw_hex[2:]
        raw = bytes.fromhex(raw_hex)
        if not raw:
            raise ValueError("Remote signer returned an empty transaction")
        return _RemoteSignedTx(raw_transaction=raw, hash=keccak(raw))
