"""Parsing and validation of raw model responses."""

import json
import logging

from pydantic import ValidationError

from shopsafe.errors import InvalidResponseError
from shopsafe.models.compliance import AnalysisResult

logger = logging.getLogger(__name__)


def _strip_code_fences(text: str) -> str:
    if text.startswith("```"):
        lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
        return "\n".join(lines).strip()
    return text


def parse_analysis_result(raw_text: str | None) -> AnalysisResult:
    """Parse a raw response body into a validated AnalysisResult.

    Args:
        raw_text: Response body returned by the provider.

    Returns:
        The validated result.

    Raises:
        InvalidResponseError: If the body is empty, not JSON, not an object,
            or does not match the result shape (missing required field,
            unknown enum value, score outside 0-100).
    """
    text = _strip_code_fences((raw_text or "").strip())
    if not text:
        raise InvalidResponseError("Model returned an empty response", raw_text or "")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidResponseError(
            f"Model returned invalid JSON: {exc}", raw_text or ""
        ) from exc

    if not isinstance(data, dict):
        raise InvalidResponseError(
            f"Expected a JSON object, got {type(data).__name__}", raw_text or ""
        )

    try:
        result = AnalysisResult.model_validate(data)
    except ValidationError as exc:
        raise InvalidResponseError(
            f"Model response does not match the analysis schema: "
            f"{exc.error_count()} error(s)\n{exc}",
            raw_text or "",
        ) from exc

    logger.debug(
        "Parsed result: decision=%s overall=%s flags=%d",
        result.decision.value,
        result.overall_risk_score,
        len(result.flagged_segments),
    )
    return result
