"""
Audit Logger — Structured JSON-lines audit trail.

Records every freshly scored decision with: timestamp, session_id, title,
answer count, verdict, severity, adjusted score, and confidence.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from app.config import settings
from app.models.result_models import ScoredResult

logger = logging.getLogger("compass.audit")


class AuditLogger:
    """Writes structured audit entries to a JSON-lines file."""

    def __init__(self, log_path: str | None = None, enabled: bool | None = None) -> None:
        self.log_path = Path(log_path or settings.audit_log_path)
        self.enabled = settings.audit_enabled if enabled is None else enabled

    def log(self, result: ScoredResult) -> None:
        """Append an audit entry for a scored result."""
        if not self.enabled:
            return

        record = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "session_id": result.session_id,
            "decision_title": result.decision_title,
            "total_answers": result.total_answers,
            "decision": result.recommendation.decision.value,
            "severity": result.risk.severity.value,
            "opportunity_score": result.recommendation.opportunity_score,
            "adjusted_score": result.recommendation.adjusted_score,
            "confidence": result.confidence.score,
            "scores": result.scores,
        }

        try:
            with open(self.log_path, "a") as f:
                f.write(json.dumps(record) + "\n")
        except OSError as e:
            logger.error(f"Failed to write audit log: {e}")

