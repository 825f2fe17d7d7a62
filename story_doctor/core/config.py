"""Configuration management for Story Doctor."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    STORY_DOCTOR_ENV: str = Field(default="dev", description="Environment: dev, staging, prod, test")

    # OpenAI configuration (optional: without a key every request uses fallback questions)
    OPENAI_API_KEY: str | None = Field(default=None, description="OpenAI API key")
    QUESTION_MODEL: str = Field(default="gpt-4o-mini", description="Model for question generation")
    QUESTION_TEMPERATURE: float = Field(
        default=0.6, ge=0.0, le=2.0, description="Sampling temperature for question generation"
    )
    INTERPRETATION_TEMPERATURE: float = Field(
        default=0.3, ge=0.0, le=2.0, description="Sampling temperature for result interpretation"
    )
    LLM_TIMEOUT_MS: int = Field(
        default=6000, gt=0, description="Budget for a single generation call before falling back"
    )
    QUESTIONS_PER_SET: int = Field(
        default=6, ge=1, le=10, description="Number of questions requested from the model"
    )

    # Ephemeral store
    SESSION_CAPACITY: int = Field(default=1000, gt=0, description="Max sessions kept in memory")
    QUESTION_SET_CAPACITY: int = Field(
        default=500, gt=0, description="Max question sets kept in memory"
    )
    CACHE_TTL_SECONDS: float = Field(
        default=30 * 60, gt=0, description="Default time-to-live for generic cache entries"
    )
    CACHE_SWEEP_INTERVAL_SECONDS: float = Field(
        default=5 * 60, gt=0, description="Interval between expired-entry sweeps"
    )

    # HTTP
    CORS_ORIGIN: str = Field(
        default="http://localhost:3000", description="Allowed browser origin for the web client"
    )

    @property
    def llm_configured(self) -> bool:
        """Whether an API key is present for the generation provider."""
        return bool(self.OPENAI_API_KEY)

    @property
    def llm_timeout_seconds(self) -> float:
        return self.LLM_TIMEOUT_MS / 1000.0


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If environment variables hold invalid values
    """
    return Settings()
