from __future__ import annotations

import logging
import sqlite3
from typing import Any, Optional, Sequence

from eth_utils import to_hex
from web3.types import BlockIdentifier

from errors import SigningError
from observability import AuditLog, build_log_context, log_event, now_ms
from signing.base import SignedTx
from signing.modes import LocallySigned, NodeSigned, SigningMode

from .abi import encode_call
from .evm import ZERO_ADDRESS, checksum
from .filler import TransactionFiller
from .intents import Overrides, TransactionIntent, intent_with_overrides
from .provider import Provider


class TransactionDispatcher:
    """
    Fills, signs and broadcasts transactions against a node.

    With `NodeSigned` the intent goes to `eth_sendTransaction` untouched and the
    node does everything. With `LocallySigned` missing fields are filled from the
    node, the tx is signed here and sent with `eth_sendRawTransaction`; the
    returned hash is the one computed at signing time.

    Nothing is retried. Provider and signing errors reach the caller unchanged,
    and a tx is only broadcast once it has been fully filled and signed.
    """

    def __init__(
        self,
        provider: Provider,
        mode: SigningMode | None = None,
        *,
        audit_log: AuditLog | None = None,
    ) -> None:
        self._provider = provider
        self._mode: SigningMode = mode if mode is not None else NodeSigned()
        self._audit_log = audit_log
        chain_id = self._mode.chain_id if isinstance(self._mode, LocallySigned) else None
        self._log_ctx = build_log_context(mode=self._mode.name, chain_id=chain_id)

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def mode(self) -> SigningMode:
        return self._mode

    @property
    def has_signer(self) -> bool:
        return isinstance(self._mode, LocallySigned)

    def address(self) -> str:
        """Signer address, or the zero address in node-signed mode. Use `has_signer` to tell the modes apart."""
        if isinstance(self._mode, LocallySigned):
            return self._signer_address(self._mode)
        return ZERO_ADDRESS

    async def send_transaction(self, intent: TransactionIntent, block: BlockIdentifier | None = None) -> str:
        mode = self._mode
        if isinstance(mode, NodeSigned):
            tx_hash = await self._provider.send_transaction(intent.to_tx_params())
            log_event("tx_delegated", ctx=self._log_ctx, data={"tx_hash": tx_hash, "to": intent.to})
            self._audit(tx_hash, intent, chain_id=None)
            return tx_hash

        sender = self._signer_address(mode)
        await TransactionFiller(self._provider, sender).complete(intent, block)

        signed = self._sign(mode, intent)
        await self._provider.send_raw_transaction(signed.raw_transaction)

        tx_hash = to_hex(signed.hash)
        log_event(
            "tx_broadcast",
            ctx=self._log_ctx,
            data={"tx_hash": tx_hash, "to": intent.to, "nonce": intent.nonce},
        )
        self._audit(tx_hash, intent, chain_id=mode.chain_id, sender=sender)
        return tx_hash

    async def call_contract(
        self,
        to: str,
        signature: str,
        args: Sequence[Any],
        overrides: Optional[Overrides] = None,
        block: BlockIdentifier | None = None,
    ) -> str:
        """
        Call a contract function by signature, e.g.

            await dispatcher.call_contract(token, "transfer(address,uint256)", [recipient, 100])

        A malformed signature or arguments that do not fit it raise `ValueError`
        (or the `eth_abi` encoding error) here, before any node query. Only
        pipeline failures surface as `ProviderError` / `SigningError`.
        """
        data = encode_call(signature, args)
        intent = intent_with_overrides(checksum(to), data, overrides)
        return await self.send_transaction(intent, block)

    def _signer_address(self, mode: LocallySigned) -> str:
        try:
            return mode.signer.get_address()
        except SigningError:
            raise
        except Exception as e:
            raise SigningError("signer_unavailable", str(e), {"error_type": type(e).__name__}) from e

    def _sign(self, mode: LocallySigned, intent: TransactionIntent) -> SignedTx:
        try:
            return mode.signer.sign_transaction(intent.to_tx_params(), chain_id=mode.chain_id)
        except SigningError:
            raise
        except Exception as e:
            raise SigningError("signing_failed", str(e), {"error_type": type(e).__name__}) from e

    def _audit(self, tx_hash: str, intent: TransactionIntent, *, chain_id: int | None, sender: str | None = None) -> None:
        if self._audit_log is None:
            return
        try:
            self._audit_log.append(
                ts_ms=now_ms(),
                tx_hash=tx_hash,
                mode=self._mode.name,
                chain_id=chain_id,
                sender=sender or intent.from_address,
                to=intent.to,
                nonce=intent.nonce,
            )
        except sqlite3.Error as e:
            log_event(
                "audit_write_failed",
                ctx=self._log_ctx,
                data={"tx_hash": tx_hash, "error": str(e)},
                level=logging.WARNING,
            )
