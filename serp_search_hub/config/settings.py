"""Application settings with modern Pydantic v2 patterns."""

from functools import lru_cache

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SERPER_ENDPOINT = "https://google.serper.dev/search"


class SerperSettings(BaseModel):
    """Serper search endpoint configuration."""

    endpoint: str = Field(
        default=DEFAULT_SERPER_ENDPOINT, description="Search endpoint URL"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    num_results: int = Field(
        default=40, ge=1, le=100, description="Results requested per query"
    )


class RewriterSettings(BaseModel):
    """Query rewriter configuration."""

    max_queries: int = Field(
        default=5, ge=1, description="Maximum sub-queries produced per prompt"
    )


class AppSettings(BaseSettings):
    """Main application settings with modern Pydantic v2 patterns."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
        validate_default=True,
    )

    # Application metadata
    app_name: str = Field(default="SERP Search Hub", description="Application name")
    log_level: str = Field(default="INFO", description="Logging level")

    # Provider credential, read from SERP_API_KEY
    serp_api_key: SecretStr = Field(
        default=SecretStr(""), description="API key for the Serper search provider"
    )

    # Nested configurations
    serper: SerperSettings = Field(
        default_factory=SerperSettings, description="Serper endpoint settings"
    )
    rewriter: RewriterSettings = Field(
        default_factory=RewriterSettings, description="Query rewriter settings"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    def get_api_key(self) -> str | None:
        """Return the provider credential, or None when it is not configured."""
        value = self.serp_api_key.get_secret_value().strip()
        return value or None


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
