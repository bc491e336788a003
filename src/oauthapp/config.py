"""
oauthapp Configuration

Environment-based configuration for provider operations.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class OAuthAppSettings(BaseSettings):
    """oauthapp configuration loaded from environment variables."""

    # Token endpoint requests
    TOKEN_RESPONSE_MAX_BYTES: int = Field(
        default=1 << 20,
        gt=0,
        description="Maximum number of token response bytes read (1MB)",
    )
    DEFAULT_OPERATION_TIMEOUT: float | None = Field(
        None,
        gt=0,
        description="Deadline in seconds for token operations whose context sets none",
    )
    TOKEN_REQUEST_ACCEPT: str = Field(
        default="application/json",
        description="Accept header sent to token endpoints",
    )

    model_config = {
        "env_file": ".env",
        "env_prefix": "OAUTHAPP_",
        "case_sensitive": True,
        "extra": "ignore",
    }


# Global settings instance
settings = OAuthAppSettings()
