from __future__ import annotations

from config import Settings
from execution.evm import chain_id_for

from .base import Signer
from .encrypted_keystore import EncryptedKeystoreSigner
from .env_private_key import EnvPrivateKeySigner
from .modes import LocallySigned, NodeSigned, SigningMode
from .policy import maybe_wrap_signer
from .remote_signer import RemoteSigner


def get_signer(signer_type: str, *, timeout_sec: float = 10.0) -> Signer:
    """
    Build a local signer backend.

    Supported:
    - env_private_key: uses PRIVATE_KEY env var
    - keystore: uses KEYSTORE_PATH + KEYSTORE_PASSWORD
    - remote: uses SIGNER_REMOTE_URL
    """
    if signer_type == "env_private_key":
        return EnvPrivateKeySigner()
    if signer_type == "keystore":
        return EncryptedKeystoreSigner()
    if signer_type == "remote":
        return RemoteSigner(timeout_sec=timeout_sec)
    raise ValueError(f"Unsupported SIGNER_TYPE: {signer_type}")


def signing_mode_from_env(cfg: Settings | None = None) -> SigningMode:
    """
    Select the signing mode based on SIGNER_TYPE.

    `node` (default) defers all signing to the RPC node. Any other value builds a
    local signer, wrapped with the signer policy when one is configured, and binds
    it to the configured chain id.
    """
    cfg = cfg or Settings()
    if cfg.SIGNER_TYPE in {"node", "none", ""}:
        return NodeSigned()
    signer = maybe_wrap_signer(get_signer(cfg.SIGNER_TYPE, timeout_sec=cfg.HTTP_TIMEOUT_SEC))
    chain_id = cfg.EVM_CHAIN_ID
    if chain_id is None:
        chain_id = chain_id_for(cfg.EVM_CHAIN)
    return LocallySigned(signer=signer, chain_id=chain_id)
