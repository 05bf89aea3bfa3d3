"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Google Gemini (conversation text)
    gemini_api_key: str = ""
    gemini_api_url: str = "https://generativelanguage.googleapis.com"

    # ElevenLabs (TTS)
    elevenlabs_api_key: str = ""
    elevenlabs_api_url: str = "https://api.elevenlabs.io"

    # Per-model bound on conversation generation, in seconds
    conversation_timeout: float = 10.0

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 3000
    log_level: str = "INFO"

    def secrets(self) -> list[str]:
        """Return the configured secret values that must never be logged."""
        return [s for s in (self.gemini_api_key, self.elevenlabs_api_key) if s]

    def credential_status(self) -> dict[str, bool]:
        """Report which upstream credentials are present, without their values."""
        return {
            "gemini": bool(self.gemini_api_key),
            "elevenlabs": bool(self.elevenlabs_api_key),
        }


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
