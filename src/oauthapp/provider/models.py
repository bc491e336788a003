"""
Provider Models

Pydantic models for resolved endpoints and issued tokens.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuthStyle(str, Enum):
    """How client credentials are presented to the token endpoint."""

    IN_PARAMS = "in_params"  # client_id/client_secret in the form body
    IN_HEADER = "in_header"  # HTTP Basic Authorization header


class GrantType(str, Enum):
    """OAuth grant types."""

    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"
    CLIENT_CREDENTIALS = "client_credentials"


class Endpoint(BaseModel):
    """Fully resolved provider endpoint."""

    auth_url: str | None = Field(None, description="Authorization endpoint URL, None if unsupported")
    token_url: str = Field(..., description="Token endpoint URL")
    auth_style: AuthStyle = Field(default=AuthStyle.IN_PARAMS, description="Client authentication style")
    auth_url_params: dict[str, str] = Field(
        default_factory=dict,
        description="Default query parameters for authorization URLs",
    )

    model_config = ConfigDict(frozen=True)


_CANONICAL_TOKEN_TYPES = {
    "": "Bearer",
    "bearer": "Bearer",
    "mac": "MAC",
    "basic": "Basic",
}


class Token(BaseModel):
    """Access token issued by a token endpoint.

    Tokens are plain values; whoever receives one owns it.
    """

    access_token: str = Field(..., description="OAuth access token")
    token_type: str = Field(default="", description="Token type as returned by the server")
    refresh_token: str | None = Field(None, description="Refresh token")
    expiry: datetime | None = Field(None, description="Absolute expiry time, None if it never expires")
    extra_data: dict[str, Any] = Field(
        default_factory=dict,
        description="Non-standard fields from the token response",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("expiry")
    @classmethod
    def expiry_as_utc(cls, value: datetime | None) -> datetime | None:
        # Naive expiries are taken to be UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def type(self) -> str:
        """
        Canonical token type.

        Known types are normalized case-insensitively ("bearer" becomes
        "Bearer"); an empty type defaults to "Bearer". Unknown types are
        returned unchanged.
        """
        return _CANONICAL_TOKEN_TYPES.get(self.token_type.lower(), self.token_type)

    def valid(self, now: datetime | None = None) -> bool:
        """
        Check whether the token can be used.

        Args:
            now: Reference time, defaults to the current UTC time

        Returns:
            True if the access token is set and not yet expired
        """
        if not self.access_token:
            return False
        if self.expiry is None:
            return True

        if now is None:
            now = datetime.now(UTC)
        return now < self.expiry
