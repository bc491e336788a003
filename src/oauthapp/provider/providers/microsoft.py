"""
Microsoft Azure AD Provider

Microsoft identity platform v2.0 endpoints, parameterized by tenant.

The tenant is resolved in this order:
- the ``tenant`` configuration key, which cannot be overridden per call
- a ``tenant`` provider option on the call
- ``organizations`` (any work or school account)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from oauthapp.provider.endpoint import EndpointTemplate, Placeholder
from oauthapp.provider.factory import templated_factory
from oauthapp.provider.models import AuthStyle

AZURE_AD_NAME = "microsoft_azure_ad"

DEFAULT_TENANT = "organizations"

AZURE_AD_ENDPOINT = EndpointTemplate(
    auth_url="https://login.microsoftonline.com/{tenant}/oauth2/v2.0/authorize",
    token_url="https://login.microsoftonline.com/{tenant}/oauth2/v2.0/token",
    auth_style=AuthStyle.IN_PARAMS,
    placeholders=(Placeholder(name="tenant", fallback=DEFAULT_TENANT),),
)


class AzureADConfig(BaseModel):
    """Azure AD provider configuration."""

    tenant: str | None = Field(None, description="Directory (tenant) ID or domain")

    model_config = ConfigDict(extra="forbid")


azure_ad_factory = templated_factory(
    AZURE_AD_ENDPOINT,
    AzureADConfig,
    name=AZURE_AD_NAME,
)
