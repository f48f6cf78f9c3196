from __future__ import annotations

from config import Settings
from execution import TransactionDispatcher, Web3Provider
from observability import AuditLog
from signing import signing_mode_from_env


class Container:
    def __init__(self, cfg: Settings | None = None) -> None:
        self.settings = cfg or Settings()

        # Observability
        self.audit_log = AuditLog(self.settings.AUDIT_DB_PATH or None)

        # Node + signing
        self.provider = Web3Provider.for_chain(self.settings.EVM_CHAIN, self.settings.HTTP_TIMEOUT_SEC)
        self.signing_mode = signing_mode_from_env(self.settings)

        self.dispatcher = TransactionDispatcher(
            self.provider,
            self.signing_mode,
            audit_log=self.audit_log,
        )
