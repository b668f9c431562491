"""Rate limit check result model."""

from pydantic import BaseModel, ConfigDict, Field


class RateLimitResult(BaseModel):
    """Answer from the rate-limit collaborator."""

    allowed: bool = Field(description="Whether the request may proceed")
    remaining: int | None = Field(default=None, description="Requests left in the window")
    retry_after: int | None = Field(default=None, description="Seconds until the window resets")
    error: str | None = Field(default=None, description="Limiter error message")

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "allowed": False,
                "remaining": None,
                "retry_after": 42,
                "error": "Rate limit exceeded",
            }
        },
    )
