"""Pure presentation helpers the Streamlit app renders from."""

from dataclasses import dataclass

from shopsafe.models.compliance import (
    AnalysisResult,
    ComplianceDecision,
    FlaggedSegment,
    RiskLevel,
    Severity,
)

NO_FLAGS_TITLE = "No high-risk segments detected"
NO_FLAGS_SUBTITLE = "Content appears to follow general safety guidelines."
UNTITLED_FLAG = "Visual/Narrative Flag"


@dataclass(frozen=True)
class BannerStyle:
    """Decision banner appearance."""

    color: str
    icon: str
    tone: str  # streamlit alert kind: success / warning / error


DECISION_STYLES: dict[ComplianceDecision, BannerStyle] = {
    ComplianceDecision.SAFE_TO_POST: BannerStyle(color="#059669", icon="🛡️", tone="success"),
    ComplianceDecision.POST_WITH_CHANGES: BannerStyle(color="#f59e0b", icon="⚠️", tone="warning"),
    ComplianceDecision.DO_NOT_POST: BannerStyle(color="#dc2626", icon="⛔", tone="error"),
}

SEVERITY_COLORS: dict[Severity, str] = {
    Severity.HIGH: "#ef4444",
    Severity.MEDIUM: "#f59e0b",
    Severity.LOW: "#3b82f6",
}

RISK_COLORS: dict[RiskLevel, str] = {
    RiskLevel.HIGH: "#ef4444",
    RiskLevel.MEDIUM: "#f59e0b",
    RiskLevel.LOW: "#10b981",
}


def decision_style(decision: ComplianceDecision) -> BannerStyle:
    return DECISION_STYLES[decision]


def severity_color(severity: Severity) -> str:
    return SEVERITY_COLORS[severity]


def severity_badge(severity: Severity) -> str:
    """Badge text, e.g. ``HIGH RISK``."""
    return f"{severity.value} RISK"


def score_color(score: float) -> str:
    """Bar colour: red above 60, amber above 30, green otherwise."""
    if score > 60:
        return RISK_COLORS[RiskLevel.HIGH]
    if score > 30:
        return RISK_COLORS[RiskLevel.MEDIUM]
    return RISK_COLORS[RiskLevel.LOW]


def format_score(score: float) -> str:
    """``10`` -> ``"10/100"``; keeps one decimal only when needed."""
    value = int(score) if float(score).is_integer() else round(score, 1)
    return f"{value}/100"


def flag_header(flag: FlaggedSegment) -> str:
    """Small header line: the timestamp if known, else the violated policy."""
    if flag.timestamp:
        return f"Timestamp: {flag.timestamp}"
    return flag.policy_violation


def flag_title(flag: FlaggedSegment) -> str:
    return flag.text or UNTITLED_FLAG


@dataclass(frozen=True)
class CaptionVerdict:
    """Condensed view shown by the caption tester."""

    decision: ComplianceDecision
    score_label: str
    safer_caption: str | None
    style: BannerStyle


def caption_verdict(result: AnalysisResult) -> CaptionVerdict:
    """Reduce a result to decision, score and caption rewrite."""
    return CaptionVerdict(
        decision=result.decision,
        score_label=format_score(result.overall_risk_score),
        safer_caption=result.safer_caption or None,
        style=decision_style(result.decision),
    )


def risk_band_label(result: AnalysisResult) -> str:
    """Band of the overall score, e.g. ``MEDIUM RISK``. Display only."""
    return f"{result.risk_level.value.upper()} RISK"
