"""Settings module - pydantic-settings based configuration."""

from functools import lru_cache

from property_verification.core.settings.app_settings import (
    AppSettings,
    DatabaseSettings,
    LoggingSettings,
    RateLimitSettings,
    VerificationSettings,
)


@lru_cache
def get_settings() -> AppSettings:
    """
    Get cached application settings singleton.

    The verification base URL is read once here; later changes to the
    environment only take effect after reload_settings().

    Returns:
        AppSettings: The application settings instance.
    """
    return AppSettings()


def reload_settings() -> AppSettings:
    """
    Clear settings cache and reload.

    Returns:
        AppSettings: The newly loaded application settings instance.
    """
    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "RateLimitSettings",
    "VerificationSettings",
    "get_settings",
    "reload_settings",
]
