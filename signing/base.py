from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Protocol


class SignedTx(Protocol):
    raw_transaction: bytes
    hash: bytes


class Signer(ABC):
    """
    A minimal signing interface for EVM transactions.

    `sign_transaction` receives a fully populated web3-style tx dict and must
    return the raw encoded transaction together with its hash. Implementations
    raise instead of returning a partial or empty signature.
    """

    @abstractmethod
    def get_address(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def sign_transaction(self, tx: Dict[str, Any], *, chain_id: int | None = None) -> SignedTx:
        raise NotImplementedError
