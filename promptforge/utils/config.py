"""Application configuration settings using Pydantic."""

from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field, ValidationError


class Settings(BaseSettings):
    """Application configuration settings."""

    # OpenAI Configuration (empty key means the Generation Service is not configured)
    openai_api_key: str = Field("", validation_alias="OPENAI_API_KEY")
    openai_model: str = Field("gpt-4o-mini", validation_alias="OPENAI_MODEL")
    openai_max_tokens: int = Field(2048, validation_alias="OPENAI_MAX_TOKENS")
    openai_temperature: float = Field(0.7, validation_alias="OPENAI_TEMPERATURE")
    openai_top_p: float = Field(1.0, validation_alias="OPENAI_TOP_P")
    openai_top_k: int = Field(1, validation_alias="OPENAI_TOP_K")

    # Generation Orchestrator
    generation_timeout_seconds: float = Field(
        20.0, validation_alias="GENERATION_TIMEOUT_SECONDS"
    )
    retry_timeout_increment_seconds: float = Field(
        10.0, validation_alias="RETRY_TIMEOUT_INCREMENT_SECONDS"
    )
    min_acceptable_length: int = Field(40, validation_alias="MIN_ACCEPTABLE_LENGTH")

    # Suggestion Aggregator
    advisory_enabled: bool = Field(True, validation_alias="ADVISORY_ENABLED")
    advisory_timeout_seconds: float = Field(8.0, validation_alias="ADVISORY_TIMEOUT_SECONDS")
    advisory_min_keywords_length: int = Field(
        5, validation_alias="ADVISORY_MIN_KEYWORDS_LENGTH"
    )
    max_suggestions: int = Field(5, validation_alias="MAX_SUGGESTIONS")

    # API Configuration
    api_host: str = Field("0.0.0.0", validation_alias="API_HOST")
    api_port: int = Field(8000, validation_alias="API_PORT")
    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    # CORS Configuration
    allowed_origins: list[str] = Field(
        ["*"],
        validation_alias="ALLOWED_ORIGINS",
    )

    # Trusted Hosts Configuration
    trusted_hosts: list[str] = Field(["*"], validation_alias="TRUSTED_HOSTS")

    # Rate Limiting
    rate_limit_per_minute: int = Field(30, validation_alias="RATE_LIMIT_PER_MINUTE")

    # Curated catalog served when the vendor model listing is unavailable
    fallback_models: list[str] = Field(
        ["gpt-4o-mini", "gpt-4o", "gpt-4.1-mini", "gpt-4.1"],
        validation_alias="FALLBACK_MODELS",
    )

    class Config:
        """Pydantic configuration to load from .env file."""

        env_file = ".env"
        case_sensitive = False

    @property
    def generation_configured(self) -> bool:
        """Whether an API key for the Generation Service is available."""
        return bool(self.openai_api_key.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    try:
        s = Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        # Raise a helpful message in logs for invalid envs
        raise RuntimeError(f"Configuration error: {e}") from e
    return s
