"""Audit hooks -- logs indicator calculations for the audit trail."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


def log_calculation(
    indicator_id: str,
    indicator_type: str,
    summary: dict[str, Any] | None = None,
    warnings: list[str] | None = None,
) -> dict[str, Any]:
    """Record an indicator calculation in the audit log.

    Returns the audit entry dict for downstream persistence.
    """
    entry = {
        "indicator_id": indicator_id,
        "indicator_type": indicator_type,
        "summary": summary or {},
        "warnings": list(warnings or []),
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
    }
    logger.info("Calculation audit: %s → %s", indicator_type, indicator_id)
    return entry
