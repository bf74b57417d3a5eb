"""
Scoring Result Data Models — Risk report, recommendation, confidence, and the
aggregate scored result.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from app.models.base import CamelModel


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


SEVERITY_RANK: dict[Severity, int] = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}

# Points subtracted from the opportunity score per severity
SEVERITY_PENALTIES: dict[Severity, int] = {
    Severity.LOW: 0,
    Severity.MEDIUM: 8,
    Severity.HIGH: 20,
    Severity.CRITICAL: 35,
}


class Decision(str, Enum):
    PROCEED = "PROCEED"
    PROCEED_WITH_CAUTION = "PROCEED WITH CAUTION"
    DEFER = "DEFER"
    DO_NOT_PROCEED = "DO NOT PROCEED"


class ConfidenceLabel(str, Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"


class RiskFlag(CamelModel):
    """A single flag or warning raised during risk analysis."""

    code: str = Field(..., description="Machine-readable code, e.g. 'HIGH_RISK'")
    message: str
    categories: list[str] = Field(default_factory=list)


class RiskReport(CamelModel):
    severity: Severity = Severity.LOW
    effective_risk_score: int = Field(..., ge=0, le=100)
    flags: list[RiskFlag] = Field(default_factory=list)
    warnings: list[RiskFlag] = Field(default_factory=list)
    safe: bool = True


class Recommendation(CamelModel):
    decision: Decision
    rationale: str
    action: str
    opportunity_score: int = Field(..., ge=0, le=100)
    adjusted_score: int = Field(..., ge=0, le=100)


class ConfidenceScore(CamelModel):
    score: int = Field(..., ge=0, le=100)
    label: ConfidenceLabel


class ScoredResult(CamelModel):
    """Full output of the scoring pipeline for one session."""

    session_id: str
    decision_title: str
    total_answers: int
    scored_at: datetime
    scores: dict[str, int] = Field(
        default_factory=dict, description="Normalized 0-100 score per category"
    )
    risk: RiskReport
    recommendation: Recommendation
    confidence: ConfidenceScore
