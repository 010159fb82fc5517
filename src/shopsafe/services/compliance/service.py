"""Compliance analysis orchestration service."""

import logging

from shopsafe.config import Settings, get_settings
from shopsafe.errors import ConfigurationError, InputValidationError
from shopsafe.models.compliance import AnalysisResult
from shopsafe.models.request import AnalysisRequest
from shopsafe.services.compliance.base import IComplianceProvider
from shopsafe.services.compliance.providers.claude import ClaudeProvider
from shopsafe.services.compliance.providers.gemini import GeminiProvider
from shopsafe.services.compliance.response import parse_analysis_result
from shopsafe.services.encoder import build_analysis_parts, build_caption_parts

logger = logging.getLogger(__name__)

NO_INPUT_MESSAGE = "Please provide at least one input (Video, Caption, or Script)."
EMPTY_CAPTION_MESSAGE = "Please enter a caption to test."
ANALYSIS_FAILED_MESSAGE = "Analysis failed. Please try again."
CAPTION_TEST_FAILED_MESSAGE = "Caption test failed."
MEDIA_UNSUPPORTED_MESSAGE = (
    "The configured provider cannot analyze video. Remove the video or switch to gemini."
)


def create_provider(settings: Settings | None = None) -> IComplianceProvider:
    """Build the provider named by ``settings.provider``.

    API keys are not captured here; providers look them up on each call.

    Raises:
        ConfigurationError: If the provider name is unknown.
    """
    settings = settings or get_settings()
    name = settings.provider.lower()
    if name == "gemini":
        return GeminiProvider(
            model=settings.gemini_model,
            timeout_s=settings.request_timeout_s,
        )
    if name == "claude":
        return ClaudeProvider(
            model=settings.claude_model,
            timeout_s=settings.request_timeout_s,
        )
    raise ConfigurationError(f"Unknown provider '{settings.provider}'. Use gemini or claude.")


class ComplianceService:
    """Runs full analyses and caption tests against one provider.

    Each call is a single round trip. There is no retry, no backoff and no
    local cross-check of the decision against the scores.
    """

    def __init__(self, provider: IComplianceProvider | None = None) -> None:
        """Initialize the compliance service.

        Args:
            provider: Provider to use. Built from settings when omitted.
        """
        self._provider = provider if provider is not None else create_provider()
        logger.info(
            "ComplianceService initialized with provider %s (%s)",
            self._provider.name,
            "available" if self._provider.is_available else "unavailable",
        )

    @property
    def provider(self) -> IComplianceProvider:
        return self._provider

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """Run a full analysis of media, caption and script.

        Args:
            request: Inputs; at least one of media, caption, script.

        Returns:
            Validated AnalysisResult.

        Raises:
            InputValidationError: If no input is provided, or media is given
                to a text-only provider. No request is sent.
            ConfigurationError: If the provider lacks credentials.
            AIProviderError: If the provider call fails.
            InvalidResponseError: If the response is not a valid result.
        """
        if not request.has_content:
            raise InputValidationError(NO_INPUT_MESSAGE)
        if request.media is not None and not self._provider.supports_media:
            raise InputValidationError(MEDIA_UNSUPPORTED_MESSAGE)

        parts = build_analysis_parts(request)
        logger.info(
            "Running full analysis: media=%d bytes caption=%s script=%s",
            request.media.size_bytes if request.media is not None else 0,
            request.has_caption,
            request.has_script,
        )
        raw_text = await self._provider.generate(parts)
        result = parse_analysis_result(raw_text)
        logger.info(
            "Analysis complete: %s (overall risk %s)",
            result.decision.value,
            result.overall_risk_score,
        )
        return result

    async def test_caption(self, caption: str) -> AnalysisResult:
        """Run a caption-only compliance check.

        Raises:
            InputValidationError: If the caption is blank. No request is sent.
            ConfigurationError: If the provider lacks credentials.
            AIProviderError: If the provider call fails.
            InvalidResponseError: If the response is not a valid result.
        """
        if not caption or not caption.strip():
            raise InputValidationError(EMPTY_CAPTION_MESSAGE)

        logger.info("Running caption test (%d chars)", len(caption))
        raw_text = await self._provider.generate(build_caption_parts(caption))
        return parse_analysis_result(raw_text)
