from __future__ import annotations

from typing import Any, Dict

from eth_account import Account

from .base import SignedTx, Signer


class LocalAccountSigner(Signer):
    """
    Signs with a private key held in memory by `eth_account`.
    """

    def __init__(self, private_key: str | bytes) -> None:
        self._account = Account.from_key(private_key)

    def get_address(self) -> str:
        return self._account.address

    def sign_transaction(self, tx: Dict[str, Any], *, chain_id: int | None = None) -> SignedTx:
        if chain_id is not None:
            tx = dict(tx)
            tx["chainId"] = chain_id
        return Account.sign_transaction(tx, self._account.key)
