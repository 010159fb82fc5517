"""Gemini provider: multimodal, schema-constrained generation."""

import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from shopsafe.config import get_settings
from shopsafe.errors import AIProviderError, ConfigurationError
from shopsafe.models.request import ContentPart, PartKind
from shopsafe.services.compliance.prompts import ANALYSIS_SCHEMA, SYSTEM_PROMPT
from shopsafe.services.encoder import decode_media

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-3-flash-preview"


def to_genai_part(part: ContentPart) -> types.Part:
    """Convert a provider-neutral part into a google-genai Part."""
    if part.kind is PartKind.INLINE_DATA:
        media = part.inline_data
        return types.Part.from_bytes(data=decode_media(media), mime_type=media.mime_type)
    return types.Part.from_text(text=part.text or "")


class GeminiProvider:
    """Compliance provider using the Google Gen AI SDK.

    Sends the rubric as the system instruction and constrains the output to
    ``ANALYSIS_SCHEMA`` as JSON. A missing API key does not fail at
    construction; it fails on the first call, before any network traffic.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        timeout_s: float | None = None,
    ) -> None:
        """Initialize the Gemini provider.

        Args:
            api_key: Fixed Gemini API key. When omitted, GEMINI_API_KEY is
                looked up from the environment on every call.
            model: Gemini model to use for analysis.
            timeout_s: Optional request timeout. None waits indefinitely.
        """
        self._api_key = api_key
        self._model = model
        self._timeout_s = timeout_s
        self._client: genai.Client | None = None
        self._client_key: str | None = None

        if not self._resolve_api_key():
            logger.warning("GeminiProvider: No API key found yet, provider unavailable")

    def _resolve_api_key(self) -> str | None:
        return self._api_key or get_settings().gemini_api_key

    @property
    def name(self) -> str:
        """Provider name identifier."""
        return "gemini"

    @property
    def is_available(self) -> bool:
        """Whether a Gemini API key is configured right now."""
        return bool(self._resolve_api_key())

    @property
    def supports_media(self) -> bool:
        return True

    def _get_client(self) -> genai.Client:
        api_key = self._resolve_api_key()
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        # Rebuild when the key was set or rotated since the last call
        if self._client is None or api_key != self._client_key:
            http_options = None
            if self._timeout_s is not None:
                http_options = types.HttpOptions(timeout=int(self._timeout_s * 1000))
            self._client = genai.Client(api_key=api_key, http_options=http_options)
            self._client_key = api_key
        return self._client

    def _build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPT,
            response_mime_type="application/json",
            response_schema=ANALYSIS_SCHEMA,
        )

    async def generate(self, parts: list[ContentPart]) -> str:
        """Send one schema-constrained request to Gemini.

        Args:
            parts: Ordered request parts.

        Returns:
            Raw response text (may be empty if the model returned nothing).

        Raises:
            ConfigurationError: If no API key is configured.
            AIProviderError: If the API call or transport fails.
        """
        client = self._get_client()
        contents = [types.Content(role="user", parts=[to_genai_part(p) for p in parts])]

        logger.info("Gemini request: model=%s parts=%d", self._model, len(parts))
        try:
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=contents,
                config=self._build_config(),
            )
        except genai_errors.APIError as exc:
            raise AIProviderError(f"Gemini API error: {exc}") from exc
        except httpx.HTTPError as exc:
            raise AIProviderError(f"Gemini transport error: {exc}") from exc

        return response.text or ""
