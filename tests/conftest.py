import os
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest
from eth_utils import to_checksum_address

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from execution.provider import Provider
from signing.base import Signer

SIGNER_ADDRESS = to_checksum_address("0x2c7536e3605d9c16a7a3d7b1898e529396a65c23")
TOKEN_ADDRESS = to_checksum_address("0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48")
SIGNED_HASH = bytes.fromhex("ee" * 32)
NODE_HASH = "0x" + "ab" * 32
RAW_RESPONSE_HASH = "0x" + "cd" * 32


@pytest.fixture
def provider():
    p = AsyncMock(spec=Provider)
    p.get_gas_price.return_value = 20_000_000_000
    p.estimate_gas.return_value = 21_000
    p.get_transaction_count.return_value = 7
    p.send_transaction.return_value = NODE_HASH
    p.send_raw_transaction.return_value = RAW_RESPONSE_HASH
    return p


@pytest.fixture
def signer():
    s = MagicMock(spec=Signer)
    s.get_address.return_value = SIGNER_ADDRESS
    s.sign_transaction.return_value = MagicMock(raw_transaction=b"\xf8\x6b\x01", hash=SIGNED_HASH)
    return s
