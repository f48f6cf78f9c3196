from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, TypeVar

from eth_utils import to_hex
from web3 import AsyncWeb3
from web3.types import BlockIdentifier

from errors import ProviderError, classify_exception

from .evm import checksum, get_async_web3

T = TypeVar("T")


class Provider(ABC):
    """
    The read/broadcast surface of a JSON-RPC node that the pipeline relies on.

    Every method may raise `ProviderError`.
    """

    @abstractmethod
    async def get_gas_price(self) -> int:
        raise NotImplementedError

    @abstractmethod
    async def estimate_gas(self, tx: Dict[str, Any], block: BlockIdentifier | None = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def get_transaction_count(self, address: str, block: BlockIdentifier | None = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def send_transaction(self, tx: Dict[str, Any]) -> str:
        """eth_sendTransaction: the node fills and signs with its own unlocked account."""
        raise NotImplementedError

    @abstractmethod
    async def send_raw_transaction(self, raw_tx: bytes) -> str:
        raise NotImplementedError


class Web3Provider(Provider):
    """
    `Provider` over an `AsyncWeb3` instance.

    web3 and transport exceptions are translated to `ProviderError`. Anything the
    pipeline does not wrap is reachable through `.web3`.
    """

    def __init__(self, w3: AsyncWeb3) -> None:
        self._w3 = w3

    @classmethod
    def for_chain(cls, chain: str, timeout_sec: float = 10.0) -> "Web3Provider":
        return cls(get_async_web3(chain, timeout_sec))

    @property
    def web3(self) -> AsyncWeb3:
        return self._w3

    async def _guard(self, call: Callable[[], Awaitable[T]]) -> T:
        try:
            return await call()
        except ProviderError:
            raise
        except Exception as e:
            raise classify_exception(e) from e

    async def get_gas_price(self) -> int:
        return int(await self._guard(lambda: self._w3.eth.gas_price))

    async def estimate_gas(self, tx: Dict[str, Any], block: BlockIdentifier | None = None) -> int:
        return int(await self._guard(lambda: self._w3.eth.estimate_gas(tx, block)))

    async def get_transaction_count(self, address: str, block: BlockIdentifier | None = None) -> int:
        account = checksum(address)
        return int(await self._guard(lambda: self._w3.eth.get_transaction_count(account, block)))

    async def send_transaction(self, tx: Dict[str, Any]) -> str:
        return to_hex(await self._guard(lambda: self._w3.eth.send_transaction(tx)))

    async def send_raw_transaction(self, raw_tx: bytes) -> str:
        return to_hex(await self._guard(lambda: self._w3.eth.send_raw_transaction(raw_tx)))
