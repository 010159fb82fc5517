"""Data models for ShopSafe."""

from shopsafe.models.compliance import (
    AnalysisResult,
    ComplianceDecision,
    FlaggedSegment,
    RiskLevel,
    Severity,
    risk_level_for,
)
from shopsafe.models.request import AnalysisRequest, ContentPart, EncodedMedia, PartKind

__all__ = [
    # Verdict
    "AnalysisResult",
    "ComplianceDecision",
    "FlaggedSegment",
    "RiskLevel",
    "Severity",
    "risk_level_for",
    # Request
    "AnalysisRequest",
    "ContentPart",
    "EncodedMedia",
    "PartKind",
]
