"""Policy rubric and response schema shared by every provider."""

from typing import Any

SYSTEM_PROMPT = """\
You are a Senior AI Safety Engineer specialized in TikTok Shop policy compliance.
Your task is to perform strict multimodal analysis of a video, its caption, and its script to determine if it is safe to post on TikTok Shop.

POLICIES TO ENFORCE:
1. Misleading Claims: No exaggerated product effects or unrealistic promises.
2. Health/Beauty Functional Claims: No medical claims or unproven functional benefits.
3. Transformation Narratives: Strict prohibition of "Before/After" visuals or narratives (explicit or implicit).
4. Time-based Results: No claims like "results in 3 days" or "instant change".
5. Absolute Language: Flag words like "best", "guaranteed", "real results", "changed everything".
6. Regulated Categories: Extra scrutiny for supplements, cosmetics, and medical devices.
7. CTA Compliance: No risky or aggressive call-to-actions.
8. Mismatch: Flag if the video visuals don't match the caption claims.

SCORING MODEL (0-100 Risk):
- Transformation narrative: Very High Weight (Score > 80)
- Time-based claims: Very High Weight (Score > 70)
- Functional claims: High Weight (Score > 50)
- Absolute language: Medium (Score 20-40)
- Testimonial certainty: Medium (Score 20-40)

DECISION RULES:
- HIGH RISK (Score > 60): DO NOT POST
- MEDIUM RISK (Score 30-60): POST WITH CHANGES
- LOW RISK (Score < 30): SAFE TO POST

You must be conservative. Prioritize creator account safety over performance.
Return a structured JSON response following the provided schema."""

REQUIRED_FIELDS = [
    "decision",
    "overallRiskScore",
    "captionRiskScore",
    "videoRiskScore",
    "flaggedSegments",
    "reasoning",
    "requiredFixes",
    "categoryDetected",
]

ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "decision": {
            "type": "STRING",
            "description": "One of: 'SAFE TO POST', 'POST WITH CHANGES', 'DO NOT POST'",
        },
        "overallRiskScore": {"type": "NUMBER", "description": "Risk score from 0 to 100"},
        "captionRiskScore": {"type": "NUMBER", "description": "Caption risk score from 0 to 100"},
        "videoRiskScore": {"type": "NUMBER", "description": "Video risk score from 0 to 100"},
        "flaggedSegments": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "timestamp": {"type": "STRING"},
                    "text": {"type": "STRING"},
                    "reason": {"type": "STRING"},
                    "policyViolation": {"type": "STRING"},
                    "severity": {"type": "STRING"},
                },
                "required": ["reason", "policyViolation", "severity"],
            },
        },
        "reasoning": {"type": "STRING"},
        "requiredFixes": {"type": "ARRAY", "items": {"type": "STRING"}},
        "saferCaption": {"type": "STRING"},
        "saferScript": {"type": "STRING"},
        "categoryDetected": {"type": "STRING"},
    },
    "required": REQUIRED_FIELDS,
}

# Providers without native schema-constrained output get the contract inline.
JSON_ONLY_SUFFIX = """

Respond with ONLY a JSON object (no markdown, no extra text) with these keys:
decision ("SAFE TO POST" | "POST WITH CHANGES" | "DO NOT POST"),
overallRiskScore, captionRiskScore, videoRiskScore (numbers 0-100),
flaggedSegments (array of {timestamp?, text?, reason, policyViolation, severity: "LOW" | "MEDIUM" | "HIGH"}),
reasoning (markdown string), requiredFixes (array of strings),
saferCaption (optional string), saferScript (optional string),
categoryDetected (string)."""
