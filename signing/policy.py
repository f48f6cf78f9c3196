from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from errors import SigningError

from .base import SignedTx, Signer


class SignerPolicyViolation(SigningError):
    """Raised before signing when a tx breaks the configured signer policy."""


def _parse_csv_set(value: Optional[str]) -> FrozenSet[str]:
    if not value:
        return frozenset()
    return frozenset(v.strip().lower() for v in value.split(",") if v.strip())


def _parse_int_set(value: Optional[str]) -> FrozenSet[int]:
    out = set()
    for part in (value or "").split(","):
        s = part.strip()
        if not s:
            continue
        try:
            out.add(int(s, 0))
        except ValueError:
            continue
    return frozenset(out)


def _env_int(name: str) -> Optional[int]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw, 0)
    except ValueError:
        return None


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class SignerPolicyConfig:
    allowed_chain_ids: FrozenSet[int] = frozenset()
    allowed_to_addresses: FrozenSet[str] = frozenset()
    max_value_wei: Optional[int] = None
    max_gas: Optional[int] = None
    max_gas_price_wei: Optional[int] = None
    max_data_bytes: Optional[int] = None
    disallow_contract_creation: bool = False

    def has_rules(self) -> bool:
        return bool(
            self.allowed_chain_ids
            or self.allowed_to_addresses
            or self.max_value_wei is not None
            or self.max_gas is not None
            or self.max_gas_price_wei is not None
            or self.max_data_bytes is not None
            or self.disallow_contract_creation
        )


def policy_config_from_env() -> SignerPolicyConfig:
    """
    Signer-side policy config. All rules are opt-in.
    """
    return SignerPolicyConfig(
        allowed_chain_ids=_parse_int_set(os.getenv("SIGNER_ALLOWED_CHAIN_IDS")),
        allowed_to_addresses=_parse_csv_set(os.getenv("SIGNER_ALLOWED_TO_ADDRESSES")),
        max_value_wei=_env_int("SIGNER_MAX_VALUE_WEI"),
        max_gas=_env_int("SIGNER_MAX_GAS"),
        max_gas_price_wei=_env_int("SIGNER_MAX_GAS_PRICE_WEI"),
        max_data_bytes=_env_int("SIGNER_MAX_DATA_BYTES"),
        disallow_contract_creation=_env_bool("SIGNER_DISALLOW_CONTRACT_CREATION", False),
    )


def _data_len(data: Any) -> int:
    if data is None:
        return 0
    if isinstance(data, (bytes, bytearray)):
        return len(data)
    s = str(data).strip()
    if s.startswith("0x"):
        s = s[2:]
    return len(s) // 2


def _check_max(code: str, field_name: str, value: int, limit: Optional[int]) -> None:
    if limit is not None and value > limit:
        raise SignerPolicyViolation(
            code,
            f"Transaction {field_name} exceeds signer policy limit.",
            {field_name: value, f"max_{field_name}": limit},
        )


def validate_tx_against_policy(tx: Dict[str, Any], *, chain_id: int | None, cfg: SignerPolicyConfig) -> None:
    to = tx.get("to")
    if cfg.disallow_contract_creation and not to:
        raise SignerPolicyViolation(
            "contract_creation_not_allowed",
            "Contract creation tx (missing 'to') is disallowed by signer policy.",
            {},
        )

    if cfg.allowed_chain_ids and chain_id is not None and int(chain_id) not in cfg.allowed_chain_ids:
        raise SignerPolicyViolation(
            "chain_id_not_allowed",
            "Transaction chain_id is not allowlisted by signer policy.",
            {"chain_id": int(chain_id), "allowed_chain_ids": sorted(cfg.allowed_chain_ids)},
        )

    if cfg.allowed_to_addresses and to is not None and str(to).strip().lower() not in cfg.allowed_to_addresses:
        raise SignerPolicyViolation(
            "to_not_allowed",
            "Transaction recipient/contract address is not allowlisted by signer policy.",
            {"to": str(to), "allowed_to_addresses": sorted(cfg.allowed_to_addresses)},
        )

    _check_max("value_too_large", "value_wei", int(tx.get("value") or 0), cfg.max_value_wei)
    _check_max("gas_too_large", "gas", int(tx.get("gas") or 0), cfg.max_gas)
    _check_max("gas_price_too_large", "gas_price_wei", int(tx.get("gasPrice") or 0), cfg.max_gas_price_wei)
    _check_max("data_too_large", "data_bytes", _data_len(tx.get("data")), cfg.max_data_bytes)


class PolicyEnforcedSigner(Signer):
    """
    Wrap a signer with local policy enforcement. The inner signer is never
    reached for a tx that violates the policy.
    """

    def __init__(self, inner: Signer, cfg: SignerPolicyConfig) -> None:
        self._inner = inner
        self._cfg = cfg

    def get_address(self) -> str:
        return self._inner.get_address()

    def sign_transaction(self, tx: Dict[str, Any], *, chain_id: int | None = None) -> SignedTx:
        validate_tx_against_policy(tx, chain_id=chain_id, cfg=self._cfg)
        return self._inner.sign_transaction(tx, chain_id=chain_id)


def maybe_wrap_signer(signer: Signer) -> Signer:
    """
    Wrap signer with policy if SIGNER_POLICY_ENABLED or any rule env var is set.
    """
    cfg = policy_config_from_env()
    if not (_env_bool("SIGNER_POLICY_ENABLED", False) or cfg.has_rules()):
        return signer
    return PolicyEnforcedSigner(signer, cfg)
