"""Rate limit action enum."""

from enum import StrEnum


class RateLimitAction(StrEnum):
    """Bucket a rate limit check is counted against."""

    AUTH = "auth"
    PROPERTY = "property"
    DEFAULT = "default"
