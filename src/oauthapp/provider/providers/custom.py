"""
Custom OAuth Provider

Provider whose endpoints come entirely from configuration. Leaving out
``auth_code_url`` yields a client-credentials-only provider.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, field_validator

from oauthapp.provider.context import OperationContext
from oauthapp.provider.endpoint import EndpointTemplate
from oauthapp.provider.factory import validate_config
from oauthapp.provider.models import AuthStyle
from oauthapp.provider.provider import Provider

CUSTOM_NAME = "custom"


class CustomConfig(BaseModel):
    """Custom provider configuration."""

    auth_code_url: AnyHttpUrl | None = Field(None, description="Authorization endpoint URL")
    token_url: AnyHttpUrl = Field(..., description="Token endpoint URL")
    auth_style: AuthStyle = Field(default=AuthStyle.IN_PARAMS, description="Client authentication style")

    model_config = ConfigDict(extra="forbid")

    @field_validator("auth_code_url", mode="before")
    @classmethod
    def empty_auth_code_url(cls, value: object) -> object:
        return value or None


def custom_factory(ctx: OperationContext | None, config: Mapping[str, str]) -> Provider:
    """Build a provider from explicitly configured endpoints."""
    parsed = validate_config(CUSTOM_NAME, CustomConfig, config)

    endpoint = EndpointTemplate(
        auth_url=str(parsed.auth_code_url) if parsed.auth_code_url else None,
        token_url=str(parsed.token_url),
        auth_style=parsed.auth_style,
    )
    return Provider(CUSTOM_NAME, endpoint)
