from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from .base import Signer


@dataclass(frozen=True)
class NodeSigned:
    """The node fills and signs with its own unlocked account."""

    name: ClassVar[str] = "node"


@dataclass(frozen=True)
class LocallySigned:
    """Fill via the node, sign here, broadcast the raw tx."""

    signer: Signer
    chain_id: int | None = None

    name: ClassVar[str] = "local"


SigningMode = Union[NodeSigned, LocallySigned]
