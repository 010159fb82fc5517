"""Base interface for compliance model providers."""

from typing import Protocol

from shopsafe.models.request import ContentPart


class IComplianceProvider(Protocol):
    """Protocol defining the contract for compliance model providers.

    A provider performs one round trip: the fixed rubric and schema plus the
    given content parts go out, the raw response text comes back. Parsing
    and validation happen in the service.
    """

    async def generate(self, parts: list[ContentPart]) -> str:
        """Send one request and return the raw response body.

        Args:
            parts: Ordered request parts (text and inline media).

        Returns:
            Raw response text, expected to be a JSON document.
        """
        ...

    @property
    def name(self) -> str:
        """Provider name identifier."""
        ...

    @property
    def is_available(self) -> bool:
        """Whether the provider has the credentials it needs."""
        ...

    @property
    def supports_media(self) -> bool:
        """Whether inline media parts can be sent."""
        ...
