"""Unit tests for the Gemini and Claude providers (SDK calls mocked)."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from shopsafe.errors import AIProviderError, ConfigurationError, InputValidationError
from shopsafe.models.request import ContentPart, EncodedMedia
from shopsafe.services.compliance.prompts import REQUIRED_FIELDS, SYSTEM_PROMPT
from shopsafe.services.compliance.providers.claude import ClaudeProvider
from shopsafe.services.compliance.providers.gemini import GeminiProvider, to_genai_part
from shopsafe.services.encoder import encode_media_bytes

from tests.samples import SAFE_RESPONSE

_GENAI_CLIENT = "shopsafe.services.compliance.providers.gemini.genai.Client"
_ANTHROPIC_CLIENT = "shopsafe.services.compliance.providers.claude.anthropic.AsyncAnthropic"


def _mock_genai_client(text: str | None = None, side_effect: Exception | None = None) -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=SimpleNamespace(text=text), side_effect=side_effect
    )
    return client


# ---------------------------------------------------------------------------
# Prompt contract
# ---------------------------------------------------------------------------

class TestPrompts:
    def test_decision_thresholds_present(self) -> None:
        assert "Score > 60): DO NOT POST" in SYSTEM_PROMPT
        assert "Score 30-60): POST WITH CHANGES" in SYSTEM_PROMPT
        assert "Score < 30): SAFE TO POST" in SYSTEM_PROMPT

    def test_required_fields(self) -> None:
        assert "saferCaption" not in REQUIRED_FIELDS
        assert "categoryDetected" in REQUIRED_FIELDS


# ---------------------------------------------------------------------------
# Gemini
# ---------------------------------------------------------------------------

class TestGeminiProvider:
    def test_unavailable_without_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        provider = GeminiProvider()
        assert not provider.is_available

    def test_key_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        assert GeminiProvider().is_available

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_network(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        with patch(_GENAI_CLIENT) as client_cls:
            with pytest.raises(ConfigurationError):
                await GeminiProvider().generate([ContentPart.from_text("x")])
            client_cls.assert_not_called()

    def test_key_exported_after_construction(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        provider = GeminiProvider()
        assert not provider.is_available

        monkeypatch.setenv("GEMINI_API_KEY", "now-set")
        with patch(_GENAI_CLIENT) as client_cls:
            provider._get_client()

        assert provider.is_available
        assert client_cls.call_args.kwargs["api_key"] == "now-set"

    def test_client_rebuilt_when_key_rotates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "first")
        provider = GeminiProvider()
        with patch(_GENAI_CLIENT) as client_cls:
            provider._get_client()
            provider._get_client()
            monkeypatch.setenv("GEMINI_API_KEY", "second")
            provider._get_client()

        assert [c.kwargs["api_key"] for c in client_cls.call_args_list] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_generate_sends_schema_constrained_request(self) -> None:
        client = _mock_genai_client(text=json.dumps(SAFE_RESPONSE))
        media = encode_media_bytes(b"video-bytes", "video/mp4")
        parts = [ContentPart.from_text("intro"), ContentPart.from_media(media)]

        with patch(_GENAI_CLIENT, return_value=client):
            raw = await GeminiProvider(api_key="k", model="gemini-test").generate(parts)

        assert json.loads(raw)["decision"] == "SAFE TO POST"
        client.aio.models.generate_content.assert_awaited_once()
        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["config"].response_schema is not None
        assert len(kwargs["contents"][0].parts) == 2

    @pytest.mark.asyncio
    async def test_empty_text_returns_empty_string(self) -> None:
        with patch(_GENAI_CLIENT, return_value=_mock_genai_client(text=None)):
            raw = await GeminiProvider(api_key="k").generate([ContentPart.from_text("x")])
        assert raw == ""

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self) -> None:
        client = _mock_genai_client(side_effect=httpx.ConnectError("connection refused"))
        with patch(_GENAI_CLIENT, return_value=client):
            with pytest.raises(AIProviderError):
                await GeminiProvider(api_key="k").generate([ContentPart.from_text("x")])

    def test_media_part_decoded_to_bytes(self) -> None:
        part = to_genai_part(ContentPart.from_media(encode_media_bytes(b"abc", "video/quicktime")))
        assert part.inline_data.data == b"abc"
        assert part.inline_data.mime_type == "video/quicktime"

    def test_text_part(self) -> None:
        assert to_genai_part(ContentPart.from_text("CAPTION: hi")).text == "CAPTION: hi"


# ---------------------------------------------------------------------------
# Claude
# ---------------------------------------------------------------------------

class TestClaudeProvider:
    @pytest.mark.asyncio
    async def test_missing_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        provider = ClaudeProvider()
        assert not provider.is_available
        with patch(_ANTHROPIC_CLIENT) as client_cls:
            with pytest.raises(ConfigurationError):
                await provider.generate([ContentPart.from_text("x")])
            client_cls.assert_not_called()

    def test_key_exported_after_construction(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        provider = ClaudeProvider()

        monkeypatch.setenv("ANTHROPIC_API_KEY", "now-set")
        with patch(_ANTHROPIC_CLIENT) as client_cls:
            provider._get_client()

        assert provider.is_available
        assert client_cls.call_args.kwargs["api_key"] == "now-set"

    @pytest.mark.asyncio
    async def test_rejects_media(self) -> None:
        client = MagicMock()
        client.messages.create = AsyncMock()
        parts = [ContentPart.from_media(EncodedMedia(data="AAAA"))]

        with patch(_ANTHROPIC_CLIENT, return_value=client):
            with pytest.raises(InputValidationError):
                await ClaudeProvider(api_key="k").generate(parts)
        client.messages.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_generate_joins_text_blocks(self) -> None:
        client = MagicMock()
        client.messages.create = AsyncMock(
            return_value=SimpleNamespace(
                content=[
                    SimpleNamespace(type="text", text='{"decision": '),
                    SimpleNamespace(type="text", text='"SAFE TO POST"}'),
                ]
            )
        )

        with patch(_ANTHROPIC_CLIENT, return_value=client):
            raw = await ClaudeProvider(api_key="k").generate(
                [ContentPart.from_text("intro"), ContentPart.from_text("CAPTION: c")]
            )

        assert raw == '{"decision": "SAFE TO POST"}'
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["messages"][0]["content"] == "intro\n\nCAPTION: c"
        assert kwargs["system"].startswith(SYSTEM_PROMPT)
