"""Tests for ComplianceService."""

import json

import pytest

from shopsafe.config import Settings
from shopsafe.errors import (
    AIProviderError,
    ConfigurationError,
    InputValidationError,
    InvalidResponseError,
)
from shopsafe.models.compliance import ComplianceDecision
from shopsafe.models.request import AnalysisRequest, EncodedMedia, PartKind
from shopsafe.services.compliance.providers.claude import ClaudeProvider
from shopsafe.services.compliance.providers.gemini import GeminiProvider
from shopsafe.services.compliance.service import (
    MEDIA_UNSUPPORTED_MESSAGE,
    NO_INPUT_MESSAGE,
    ComplianceService,
    create_provider,
)

from tests.samples import DO_NOT_POST_RESPONSE, FakeProvider


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_rejects_empty_input_without_request(
        self, service: ComplianceService, fake_provider: FakeProvider
    ) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            await service.analyze(AnalysisRequest(caption="", script=""))
        assert str(exc_info.value) == NO_INPUT_MESSAGE
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_one_request_with_provided_parts(
        self, service: ComplianceService, fake_provider: FakeProvider
    ) -> None:
        media = EncodedMedia(data="AAAA")
        result = await service.analyze(AnalysisRequest(media=media, caption="Glow fast"))

        assert result.decision is ComplianceDecision.SAFE_TO_POST
        assert len(fake_provider.calls) == 1
        parts = fake_provider.calls[0]
        assert [p.kind for p in parts] == [PartKind.TEXT, PartKind.INLINE_DATA, PartKind.TEXT]
        assert parts[2].text == "CAPTION: Glow fast"

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, failing_provider: FakeProvider) -> None:
        service = ComplianceService(provider=failing_provider)
        with pytest.raises(AIProviderError):
            await service.analyze(AnalysisRequest(caption="c"))
        assert len(failing_provider.calls) == 1

    @pytest.mark.asyncio
    async def test_malformed_response(self) -> None:
        service = ComplianceService(provider=FakeProvider(response="not json"))
        with pytest.raises(InvalidResponseError):
            await service.analyze(AnalysisRequest(script="s"))

    @pytest.mark.asyncio
    async def test_no_local_threshold_enforcement(self) -> None:
        # Decision is taken from the model even if the score disagrees.
        body = json.dumps({**DO_NOT_POST_RESPONSE, "overallRiskScore": 12})
        service = ComplianceService(provider=FakeProvider(response=body))
        result = await service.analyze(AnalysisRequest(caption="c"))
        assert result.decision is ComplianceDecision.DO_NOT_POST

    @pytest.mark.asyncio
    async def test_media_rejected_by_text_only_provider(self) -> None:
        provider = FakeProvider(supports_media=False)
        service = ComplianceService(provider=provider)

        with pytest.raises(InputValidationError) as exc_info:
            await service.analyze(AnalysisRequest(media=EncodedMedia(data="AAAA"), caption="c"))

        assert str(exc_info.value) == MEDIA_UNSUPPORTED_MESSAGE
        assert provider.calls == []


class TestCaptionTest:
    @pytest.mark.asyncio
    async def test_blank_caption_rejected(
        self, service: ComplianceService, fake_provider: FakeProvider
    ) -> None:
        with pytest.raises(InputValidationError):
            await service.test_caption("  ")
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_single_caption_part(
        self, service: ComplianceService, fake_provider: FakeProvider
    ) -> None:
        await service.test_caption("100% guaranteed results")
        assert len(fake_provider.calls) == 1
        (part,) = fake_provider.calls[0]
        assert part.text.endswith(": 100% guaranteed results")


class TestCreateProvider:
    def test_gemini_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "key")
        provider = create_provider(Settings())
        assert isinstance(provider, GeminiProvider)
        assert provider.is_available

    def test_key_exported_after_build(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        provider = create_provider(Settings())
        assert not provider.is_available

        monkeypatch.setenv("GEMINI_API_KEY", "late-key")
        assert provider.is_available

    def test_claude(self) -> None:
        provider = create_provider(Settings(provider="claude"))
        assert isinstance(provider, ClaudeProvider)
        assert not provider.supports_media

    def test_unknown(self) -> None:
        with pytest.raises(ConfigurationError):
            create_provider(Settings(provider="llama"))
