from .base import SignedTx, Signer
from .encrypted_keystore import EncryptedKeystoreSigner
from .env_private_key import EnvPrivateKeySigner
from .factory import get_signer, signing_mode_from_env
from .local_account import LocalAccountSigner
from .modes import LocallySigned, NodeSigned, SigningMode
from .policy import PolicyEnforcedSigner, SignerPolicyViolation, maybe_wrap_signer
from .remote_signer import RemoteSigner

__all__ = [
    "SignedTx",
    "Signer",
    "LocalAccountSigner",
    "EnvPrivateKeySigner",
    "EncryptedKeystoreSigner",
    "RemoteSigner",
    "get_signer",
    "signing_mode_from_env",
    "NodeSigned",
    "LocallySigned",
    "SigningMode",
    "PolicyEnforcedSigner",
    "SignerPolicyViolation",
    "maybe_wrap_signer",
]
