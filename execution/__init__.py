from .abi import encode_arguments, encode_call, selector
from .dispatcher import TransactionDispatcher
from .evm import ZERO_ADDRESS
from .filler import TransactionFiller
from .intents import Overrides, TransactionIntent, intent_from_tx
from .provider import Provider, Web3Provider

__all__ = [
    "Overrides",
    "Provider",
    "TransactionDispatcher",
    "TransactionFiller",
    "TransactionIntent",
    "Web3Provider",
    "ZERO_ADDRESS",
    "encode_arguments",
    "encode_call",
    "intent_from_tx",
    "selector",
]
