from __future__ import annotations

import os
from functools import lru_cache
from typing import Dict, Optional

import aiohttp
from eth_utils import is_address, to_checksum_address
from web3 import AsyncHTTPProvider, AsyncWeb3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

CHAIN_ID_BY_NAME: Dict[str, int] = {
    "ethereum": 1,
    "sepolia": 11155111,
    "base": 8453,
    "arbitrum": 42161,
    "optimism": 10,
}


def chain_id_for(chain: str) -> int:
    c = (chain or "").strip().lower()
    if c in CHAIN_ID_BY_NAME:
        return CHAIN_ID_BY_NAME[c]
    raise ValueError(f"Unsupported chain: {chain}")


def _env(name: str) -> Optional[str]:
    v = os.getenv(name)
    if v is None:
        return None
    v = v.strip()
    return v or None


def rpc_url_for(chain: str) -> str:
    """
    Resolve RPC URL for a chain.

    Env precedence (chain=ethereum -> ETHEREUM):
    - EVM_RPC_URL_<CHAIN>
    - RPC_URL_<CHAIN>
    """
    key = (chain or "").strip().upper()
    url = _env(f"EVM_RPC_URL_{key}") or _env(f"RPC_URL_{key}")
    if not url:
        raise ValueError(
            f"Missing RPC URL for chain '{chain}'. Set EVM_RPC_URL_{key} (or RPC_URL_{key})."
        )
    return url


@lru_cache(maxsize=16)
def get_async_web3(chain: str, timeout_sec: float = 10.0) -> AsyncWeb3:
    url = rpc_url_for(chain)
    timeout = aiohttp.ClientTimeout(total=float(timeout_sec))
    return AsyncWeb3(AsyncHTTPProvider(url, request_kwargs={"timeout": timeout}))


def is_hex_address(s: str) -> bool:
    v = (s or "").strip()
    return v.startswith("0x") and len(v) == 42 and is_address(v.lower())


def checksum(address: str) -> str:
    if not is_hex_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return to_checksum_address(address)
