import os

from dotenv import load_dotenv

load_dotenv()


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


class Settings:
    PROJECT_NAME: str = "evm-tx-dispatch"
    VERSION: str = "0.1.0"

    def __init__(self) -> None:
        # Chain / transport
        self.EVM_CHAIN: str = _env_str("EVM_CHAIN", "ethereum").lower()
        chain_id_raw = _env_str("EVM_CHAIN_ID")
        self.EVM_CHAIN_ID: int | None = int(chain_id_raw, 0) if chain_id_raw else None
        self.HTTP_TIMEOUT_SEC: float = float(_env_str("HTTP_TIMEOUT_SEC", "10"))

        # Signing
        self.SIGNER_TYPE: str = _env_str("SIGNER_TYPE", "node").lower()

        # Observability
        self.AUDIT_DB_PATH: str = _env_str("AUDIT_DB_PATH")


settings = Settings()
