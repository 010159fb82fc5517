"""Compliance verdict data models.

Field names are snake_case in Python and camelCase on the wire, matching the
response schema sent to the model. Both spellings are accepted on input.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ComplianceDecision(str, Enum):
    """Closed three-value compliance verdict."""

    SAFE_TO_POST = "SAFE TO POST"
    POST_WITH_CHANGES = "POST WITH CHANGES"
    DO_NOT_POST = "DO NOT POST"


class Severity(str, Enum):
    """Severity of a flagged segment."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class RiskLevel(str, Enum):
    """Display band of a 0-100 risk score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


HIGH_RISK_THRESHOLD = 60
MEDIUM_RISK_THRESHOLD = 30


def risk_level_for(score: float) -> RiskLevel:
    """Band a score the way the rubric does (>60 high, 30-60 medium)."""
    if score > HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    if score >= MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def _normalize_enum_text(value: Any) -> Any:
    # "do not post" / "Do Not Post" -> "DO NOT POST"
    if isinstance(value, str):
        return " ".join(value.split()).upper()
    return value


class FlaggedSegment(BaseModel):
    """One claim or moment in the content identified as a policy risk."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    timestamp: str | None = Field(None, description="Position in the video, if any")
    text: str | None = Field(None, description="Quoted claim text, if any")
    reason: str = Field(..., description="Why the segment is risky")
    policy_violation: str = Field(
        ..., alias="policyViolation", description="Violated policy category"
    )
    severity: Severity = Field(..., description="LOW, MEDIUM or HIGH")

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, value: Any) -> Any:
        return _normalize_enum_text(value)


class AnalysisResult(BaseModel):
    """Structured verdict returned by the compliance model."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    decision: ComplianceDecision
    overall_risk_score: float = Field(..., ge=0, le=100, alias="overallRiskScore")
    caption_risk_score: float = Field(..., ge=0, le=100, alias="captionRiskScore")
    video_risk_score: float = Field(..., ge=0, le=100, alias="videoRiskScore")
    flagged_segments: list[FlaggedSegment] = Field(..., alias="flaggedSegments")
    reasoning: str = Field(..., description="Markdown explanation")
    required_fixes: list[str] = Field(..., alias="requiredFixes")
    safer_caption: str | None = Field(None, alias="saferCaption")
    safer_script: str | None = Field(None, alias="saferScript")
    category_detected: str = Field(..., alias="categoryDetected")

    @field_validator("decision", mode="before")
    @classmethod
    def _normalize_decision(cls, value: Any) -> Any:
        return _normalize_enum_text(value)

    @property
    def has_flags(self) -> bool:
        """Whether any segment was flagged."""
        return bool(self.flagged_segments)

    @property
    def high_severity_count(self) -> int:
        """Number of HIGH severity flags."""
        return sum(1 for s in self.flagged_segments if s.severity is Severity.HIGH)

    @property
    def risk_level(self) -> RiskLevel:
        """Display band of the overall score. Never overrides ``decision``."""
        return risk_level_for(self.overall_risk_score)

    def to_wire(self) -> dict[str, Any]:
        """Dump with camelCase keys, omitting absent rewrites."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
