"""
GitLab OAuth Provider

Works with gitlab.com and self-managed instances through the ``base_url``
configuration key. The base URL is configuration only; it is never taken
from per-call options.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field

from oauthapp.provider.context import OperationContext
from oauthapp.provider.endpoint import EndpointTemplate
from oauthapp.provider.factory import validate_config
from oauthapp.provider.models import AuthStyle
from oauthapp.provider.provider import Provider

GITLAB_NAME = "gitlab"

DEFAULT_BASE_URL = "https://gitlab.com"


class GitLabConfig(BaseModel):
    """GitLab provider configuration."""

    base_url: AnyHttpUrl = Field(
        default=DEFAULT_BASE_URL,
        description="GitLab instance URL",
    )

    model_config = ConfigDict(extra="forbid")


def gitlab_factory(ctx: OperationContext | None, config: Mapping[str, str]) -> Provider:
    """Build a GitLab provider for the configured instance."""
    parsed = validate_config(GITLAB_NAME, GitLabConfig, config)
    base_url = str(parsed.base_url).rstrip("/")

    endpoint = EndpointTemplate(
        auth_url=f"{base_url}/oauth/authorize",
        token_url=f"{base_url}/oauth/token",
        auth_style=AuthStyle.IN_PARAMS,
    )
    return Provider(GITLAB_NAME, endpoint)
