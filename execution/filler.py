from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Dict, List

from web3.types import BlockIdentifier

from .intents import TransactionIntent
from .provider import Provider


class TransactionFiller:
    """
    Completes the fields a caller left unset on a `TransactionIntent`.

    - gas_price: current network gas price
    - gas: node estimate, computed with `from` set to `address`
    - nonce: tx count of `address` at `block`

    Caller-set fields are never overwritten and trigger no query. The needed
    queries run concurrently; `from` is fixed before any of them starts. On the
    first failure the remaining queries are cancelled and the provider error is
    re-raised as is. Fields filled before the failure stay filled, so an intent
    that failed to fill must not be broadcast.
    """

    def __init__(self, provider: Provider, address: str) -> None:
        self._provider = provider
        self._address = address

    async def complete(self, intent: TransactionIntent, block: BlockIdentifier | None = None) -> None:
        estimate_params: Dict[str, Any] | None = None
        if intent.gas is None:
            intent.from_address = self._address
            estimate_params = intent.to_tx_params()

        pending: List[Awaitable[None]] = []
        if intent.gas_price is None:
            pending.append(self._fill_gas_price(intent))
        if estimate_params is not None:
            pending.append(self._fill_gas(intent, estimate_params, block))
        if intent.nonce is None:
            pending.append(self._fill_nonce(intent, block))

        if not pending:
            return

        tasks = [asyncio.ensure_future(p) for p in pending]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for t in tasks:
                t.cancel()
            raise

    async def _fill_gas_price(self, intent: TransactionIntent) -> None:
        intent.gas_price = await self._provider.get_gas_price()

    async def _fill_gas(self, intent: TransactionIntent, params: Dict[str, Any], block: BlockIdentifier | None) -> None:
        intent.gas = await self._provider.estimate_gas(params, block)

    async def _fill_nonce(self, intent: TransactionIntent, block: BlockIdentifier | None) -> None:
        intent.nonce = await self._provider.get_transaction_count(self._address, block)
