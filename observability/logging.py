from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger("evm_dispatch")


def build_log_context(**fields: Any) -> Dict[str, Any]:
    """
    Static fields attached to every event of a component (chain, signing mode, ...).

    `None` values are dropped so the emitted lines stay compact.
    """
    return {k: v for k, v in fields.items() if v is not None}


def log_event(
    event: str,
    *,
    ctx: Optional[Dict[str, Any]] = None,
    data: Optional[Dict[str, Any]] = None,
    level: int = logging.INFO,
) -> None:
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload["ctx"] = ctx
    if data:
        payload["data"] = data
    logger.log(level, json.dumps(payload, sort_keys=True, default=str))
