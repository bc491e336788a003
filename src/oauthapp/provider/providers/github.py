"""
GitHub OAuth Provider

GitHub OAuth apps support the authorization code flow only; refresh is
available for apps with expiring user tokens enabled.
"""

from __future__ import annotations

from oauthapp.provider.endpoint import EndpointTemplate
from oauthapp.provider.factory import basic_factory
from oauthapp.provider.models import AuthStyle, GrantType

GITHUB_NAME = "github"

# GitHub OAuth endpoints
GITHUB_ENDPOINT = EndpointTemplate(
    auth_url="https://github.com/login/oauth/authorize",
    token_url="https://github.com/login/oauth/access_token",
    auth_style=AuthStyle.IN_PARAMS,
)

github_factory = basic_factory(
    GITHUB_ENDPOINT,
    name=GITHUB_NAME,
    unsupported_grants=[GrantType.CLIENT_CREDENTIALS],
)
