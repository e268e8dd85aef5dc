"""Runtime configuration for the interview coach."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(
        env_prefix="INTERVIEW_COACH_", env_file=".env", extra="ignore", populate_by_name=True
    )

    app_name: str = "interview-coach"
    log_level: str = "WARNING"
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "INTERVIEW_COACH_OPENAI_API_KEY"),
        description="Bearer credential for the chat-completion endpoint.",
    )
    openai_base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    request_timeout_seconds: float = 30.0
    question_topic: str = "JavaScript"
    speech_language: str = "en-US"
    phrase_time_limit: float = Field(default=30.0, description="Upper bound on one spoken answer, in seconds.")
    listen_timeout: float | None = Field(default=10.0, description="Seconds to wait for speech to begin.")
    voice_enabled: bool = True

    @property
    def api_key_configured(self) -> bool:
        return bool(self.openai_api_key and self.openai_api_key.strip())

    def masked_api_key(self) -> str | None:
        if not self.api_key_configured:
            return None
        key = self.openai_api_key.strip()
        return f"{key[:3]}...{key[-4:]}" if len(key) > 10 else "***"


settings = Settings()
