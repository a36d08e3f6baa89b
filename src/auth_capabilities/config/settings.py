"""Configuration Settings for Auth Capabilities

Manages environment variables and library configuration.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings"""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_CAPABILITIES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    service_name: str = "auth-capabilities"

    # Provider selection; overrides the bootstrap config's default when set
    default_provider: Optional[str] = None

    # Reject unknown capability keys and non-callable bindings on install
    validate_features: bool = True

    # Check accessor results against their contract attributes
    check_results: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance

    Returns:
        Settings instance
    """
    return Settings()
