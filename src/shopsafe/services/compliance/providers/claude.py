"""Claude provider for text-only compliance checks."""

import logging

import anthropic

from shopsafe.config import get_settings
from shopsafe.errors import AIProviderError, ConfigurationError, InputValidationError
from shopsafe.models.request import ContentPart, PartKind
from shopsafe.services.compliance.prompts import JSON_ONLY_SUFFIX, SYSTEM_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class ClaudeProvider:
    """Compliance provider using the Anthropic Claude API.

    Claude has no video input, so this provider covers caption and script
    checks only. The response schema is described in the system prompt
    instead of being enforced by the API.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        timeout_s: float | None = None,
    ) -> None:
        """Initialize the Claude provider.

        Args:
            api_key: Fixed Anthropic API key. When omitted, ANTHROPIC_API_KEY
                is looked up from the environment on every call.
            model: Claude model to use for analysis.
            timeout_s: Optional request timeout in seconds.
        """
        self._api_key = api_key
        self._model = model
        self._timeout_s = timeout_s
        self._client: anthropic.AsyncAnthropic | None = None
        self._client_key: str | None = None

        if not self._resolve_api_key():
            logger.warning("ClaudeProvider: No API key found yet, provider unavailable")

    def _resolve_api_key(self) -> str | None:
        return self._api_key or get_settings().anthropic_api_key

    @property
    def name(self) -> str:
        """Provider name identifier."""
        return "claude"

    @property
    def is_available(self) -> bool:
        """Whether an Anthropic API key is configured right now."""
        return bool(self._resolve_api_key())

    @property
    def supports_media(self) -> bool:
        return False

    def _get_client(self) -> anthropic.AsyncAnthropic:
        api_key = self._resolve_api_key()
        if not api_key:
            raise ConfigurationError("ANTHROPIC_API_KEY is not set")
        if self._client is None or api_key != self._client_key:
            kwargs = {"api_key": api_key}
            if self._timeout_s is not None:
                kwargs["timeout"] = self._timeout_s
            self._client = anthropic.AsyncAnthropic(**kwargs)
            self._client_key = api_key
        return self._client

    async def generate(self, parts: list[ContentPart]) -> str:
        """Send the text parts to Claude as one user message.

        Raises:
            ConfigurationError: If no API key is configured.
            InputValidationError: If a media part is included.
            AIProviderError: If the API call fails.
        """
        client = self._get_client()
        if any(p.kind is PartKind.INLINE_DATA for p in parts):
            raise InputValidationError(
                "The claude provider cannot analyze video. Remove the video "
                "or switch to the gemini provider."
            )

        prompt = "\n\n".join(p.text or "" for p in parts)

        logger.info("Claude request: model=%s parts=%d", self._model, len(parts))
        try:
            response = await client.messages.create(
                model=self._model,
                max_tokens=4096,
                system=SYSTEM_PROMPT + JSON_ONLY_SUFFIX,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as exc:
            raise AIProviderError(f"Claude API error: {exc}") from exc

        # Extract text content from response
        raw_text = ""
        for block in response.content:
            if block.type == "text":
                raw_text += block.text
        return raw_text
