"""Application settings using pydantic-settings."""

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ACCEPTED_TYPES = ["image/jpeg", "image/png", "image/webp", "application/pdf"]


class APIServerSettings(BaseModel):
    """API server configuration."""

    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")
    workers: int = Field(default=1, ge=1, le=32, description="Number of uvicorn workers")
    cors_allow_origins: list[str] = Field(
        default_factory=list, description="CORS allowed origins (empty = no CORS)"
    )
    rate_limit: str = Field(default="10/minute", description="Rate limit for verification endpoint")
    api_key: str | None = Field(
        default=None, description="API key for authentication (None = auth disabled)"
    )


class VerificationSettings(BaseModel):
    """External verification endpoint and intake configuration."""

    base_url: str | None = Field(
        default=None,
        description="Base URL of the verification service (None = demo mode with mock results)",
    )
    request_timeout: float = Field(
        default=60.0, gt=0, description="Timeout in seconds for a verification request"
    )
    health_timeout: float = Field(
        default=5.0, gt=0, description="Deadline in seconds for the health probe"
    )
    allow_demo_mode: bool = Field(
        default=True, description="Fall back to mock results when base_url is not configured"
    )
    mock_delay_min: float = Field(
        default=2.0, ge=0, description="Minimum simulated processing delay in demo mode"
    )
    mock_delay_max: float = Field(
        default=3.0, ge=0, description="Maximum simulated processing delay in demo mode"
    )
    accepted_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ACCEPTED_TYPES),
        description="MIME types accepted for upload",
    )
    max_file_size: int = Field(
        default=10 * 1024 * 1024, ge=1, description="Max upload size in bytes (default 10MB)"
    )
    history_limit: int = Field(
        default=20, ge=1, le=100, description="Number of history rows returned per listing"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str | None) -> str | None:
        """Normalize the base URL, treating blank values as unset."""
        if v is None or not v.strip():
            return None
        return v.strip().rstrip("/")

    @model_validator(mode="after")
    def validate_mock_delay(self) -> "VerificationSettings":
        """Ensure the mock delay range is ordered."""
        if self.mock_delay_max < self.mock_delay_min:
            raise ValueError("mock_delay_max must be greater than or equal to mock_delay_min")
        return self

    @property
    def demo_mode(self) -> bool:
        """
        Whether results come from the local mock generator.

        Returns:
            bool: True if no verification endpoint is configured.
        """
        return self.base_url is None


class RateLimitSettings(BaseModel):
    """Rate-limit collaborator configuration."""

    function_url: str | None = Field(
        default=None,
        description="URL of the rate-limit function (None = in-process fixed window limiter)",
    )
    timeout: float = Field(default=5.0, gt=0, description="Timeout for the rate-limit check")
    auth_token: str | None = Field(
        default=None, description="Bearer token sent to the rate-limit function"
    )


class DatabaseSettings(BaseModel):
    """Database configuration."""

    url: str = Field(default="sqlite:///./property_verification.db", description="Database URL")
    echo: bool = Field(default=False, description="Echo SQL statements")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    loggers: dict[str, str] = Field(default={}, description="Loggers and their levels")
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="[%(asctime)s] %(levelname)s [%(name)s] %(message)s",
        description="Log format",
    )
    date_format: str = Field(default="%Y-%m-%d %H:%M:%S", description="Log date format")
    rotate_logs: bool = Field(default=False, description="Rotate logs daily")
    log_file: str | None = Field(default=None, description="Log file to write to")


class AppSettings(BaseSettings):
    """Root application settings."""

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_prefix="PVS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_server: APIServerSettings = Field(default_factory=APIServerSettings)
    verification: VerificationSettings = Field(default_factory=VerificationSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
