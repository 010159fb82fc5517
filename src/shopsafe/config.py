"""Configuration management for ShopSafe."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # AI provider
    provider: str = Field("gemini", description="gemini (multimodal) or claude (text only)")
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-3-flash-preview"
    anthropic_api_key: str | None = None
    claude_model: str = "claude-sonnet-4-20250514"
    request_timeout_s: float | None = None

    # Uploaded media for the Streamlit UI
    temp_dir: Path = Path("./temp")

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.temp_dir.mkdir(parents=True, exist_ok=True)


def get_settings() -> Settings:
    """Read settings fresh from the environment.

    API keys are looked up at call time, so a key exported after import is
    still picked up.
    """
    return Settings()


# Global settings instance
settings = Settings()
