"""Shared fixtures."""

from __future__ import annotations

import json

import pytest

from shopsafe.errors import AIProviderError
from shopsafe.services.compliance.service import ComplianceService

from tests.samples import SAFE_RESPONSE, FakeProvider


@pytest.fixture
def safe_json() -> str:
    return json.dumps(SAFE_RESPONSE)


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def service(fake_provider: FakeProvider) -> ComplianceService:
    return ComplianceService(provider=fake_provider)


@pytest.fixture
def failing_provider() -> FakeProvider:
    return FakeProvider(error=AIProviderError("quota exceeded"))
