"""Bitbucket Cloud OAuth provider."""

from __future__ import annotations

from oauthapp.provider.endpoint import EndpointTemplate
from oauthapp.provider.factory import basic_factory
from oauthapp.provider.models import AuthStyle

BITBUCKET_NAME = "bitbucket"

# Bitbucket expects consumer credentials as HTTP Basic auth
BITBUCKET_ENDPOINT = EndpointTemplate(
    auth_url="https://bitbucket.org/site/oauth2/authorize",
    token_url="https://bitbucket.org/site/oauth2/access_token",
    auth_style=AuthStyle.IN_HEADER,
)

bitbucket_factory = basic_factory(BITBUCKET_ENDPOINT, name=BITBUCKET_NAME)
