"""
Configuration Management for ProxyTrace

Uses Pydantic Settings for environment-based configuration of policy
defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library configuration loaded from environment variables.

    Environment variables should be prefixed with PROXYTRACE_.
    Example: PROXYTRACE_OBSERVABLE_REGISTER_KEY=subscribe
    """

    model_config = SettingsConfigDict(
        env_prefix="PROXYTRACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Log every routed operation, not only rejections"
    )

    observable_register_key: str = Field(
        default="on_change",
        description="Member name that exposes listener registration on observables"
    )

    report_unknown_chain_calls: bool = Field(
        default=True,
        description="Log calls to missing methods swallowed by permissive chaining"
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the settings instance.

    Lazily created so environment variables and .env files can be set
    up before first use.

    Returns:
        Settings: The library configuration.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """
    Reset the settings instance.

    Useful for testing or when environment variables change.
    """
    global _settings
    _settings = None
