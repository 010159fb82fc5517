"""Custom exceptions for ShopSafe."""


class ShopSafeError(Exception):
    """Base exception for ShopSafe."""

    pass


class InputValidationError(ShopSafeError):
    """User input rejected before any external call."""

    pass


class ConfigurationError(ShopSafeError):
    """Required configuration (e.g. an API key) is missing."""

    pass


class MediaReadError(ShopSafeError):
    """Selected media file could not be read."""

    pass


class AIProviderError(ShopSafeError):
    """AI provider call failed (network, quota, rejected request)."""

    pass


class InvalidResponseError(ShopSafeError):
    """AI provider returned a body that is not a valid analysis result."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text
