"""Compliance model providers."""

from shopsafe.services.compliance.providers.claude import ClaudeProvider
from shopsafe.services.compliance.providers.gemini import GeminiProvider

__all__ = ["ClaudeProvider", "GeminiProvider"]
