from __future__ import annotations

import os
import sqlite3
import threading
import time
from typing import Any, Dict, List, Optional


class AuditLog:
    """
    Optional SQLite ledger of dispatched transactions.

    This is OFF by default. Enable by setting `AUDIT_DB_PATH` (or pass `db_path`).
    Only successful dispatches are recorded; a row is written after the node has
    accepted the transaction, so the ledger never lists a tx that was not sent.

    IMPORTANT:
    - Never store key material or raw signed payloads here.
    """

    def __init__(self, db_path: str | None = None) -> None:
        self._lock = threading.Lock()
        self._conn: Optional[sqlite3.Connection] = None
        self._explicit_path = db_path

    def enabled(self) -> bool:
        return bool(self._db_path())

    def append(
        self,
        *,
        ts_ms: int,
        tx_hash: str,
        mode: str,
        chain_id: int | None = None,
        sender: str | None = None,
        to: str | None = None,
        nonce: int | None = None,
    ) -> None:
        conn = self._get_conn()
        if conn is None:
            return
        with self._lock:
            conn.execute(
                """
                INSERT INTO dispatched_txs(ts_ms, tx_hash, mode, chain_id, sender, recipient, nonce)
                VALUES(?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    int(ts_ms),
                    str(tx_hash),
                    str(mode),
                    chain_id,
                    sender,
                    to,
                    nonce,
                ),
            )
            conn.commit()

    def recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        conn = self._get_conn()
        if conn is None:
            return []
        with self._lock:
            rows = conn.execute(
                """
                SELECT ts_ms, tx_hash, mode, chain_id, sender, recipient, nonce
                FROM dispatched_txs ORDER BY id DESC LIMIT ?
                """,
                (max(1, int(limit)),),
            ).fetchall()
        keys = ("ts_ms", "tx_hash", "mode", "chain_id", "sender", "to", "nonce")
        return [dict(zip(keys, row)) for row in rows]

    def _db_path(self) -> str:
        if self._explicit_path is not None:
            return self._explicit_path.strip()
        return (os.getenv("AUDIT_DB_PATH") or "").strip()

    def _get_conn(self) -> Optional[sqlite3.Connection]:
        path = self._db_path()
        if not path:
            return None
        with self._lock:
            if self._conn is None:
                self._conn = sqlite3.connect(path, check_same_thread=False)
                if path != ":memory:":
                    self._conn.execute("PRAGMA journal_mode=WAL;")
                self._conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS dispatched_txs(
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        ts_ms INTEGER NOT NULL,
                        tx_hash TEXT NOT NULL,
                        mode TEXT NOT NULL,
                        chain_id INTEGER,
                        sender TEXT,
                        recipient TEXT,
                        nonce INTEGER
                    )
                    """
                )
                self._conn.commit()
            return self._conn


def now_ms() -> int:
    return int(time.time() * 1000)
