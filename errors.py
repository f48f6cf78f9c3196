from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict

import aiohttp
import requests
from web3.exceptions import (
    ContractLogicError,
    ProviderConnectionError,
    TimeExhausted,
    Web3Exception,
    Web3RPCError,
)


@dataclass(eq=False)
class AppError(Exception):
    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ProviderError(AppError):
    """Remote query or broadcast failure (network, node rejection, bad response)."""


class SigningError(AppError):
    """Local signing failure (key state, tx malformed for the signing scheme)."""


def classify_exception(e: Exception) -> ProviderError:
    """
    Map common web3 / transport issues into stable provider error codes.
    """
    if isinstance(e, ProviderError):
        return e
    if isinstance(e, ContractLogicError):
        return ProviderError("execution_reverted", str(e), {"revert_data": getattr(e, "data", None)})
    if isinstance(e, Web3RPCError):
        return ProviderError("rpc_error", str(e), {"rpc_response": getattr(e, "rpc_response", None)})
    if isinstance(e, (TimeExhausted, asyncio.TimeoutError)):
        return ProviderError("timeout", str(e), {})
    if isinstance(e, (ProviderConnectionError, aiohttp.ClientError, requests.ConnectionError)):
        return ProviderError("network_error", str(e), {})
    if isinstance(e, Web3Exception):
        return ProviderError("provider_error", str(e), {})

    return ProviderError("unknown_error", str(e), {})
