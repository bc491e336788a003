"""
Google OAuth Provider

Google OAuth 2.0 endpoints. Authorization URLs request offline access so
that the code exchange yields a refresh token.
"""

from __future__ import annotations

from oauthapp.provider.endpoint import EndpointTemplate
from oauthapp.provider.factory import basic_factory
from oauthapp.provider.models import AuthStyle, GrantType

GOOGLE_NAME = "google"

# Google OAuth endpoints
GOOGLE_ENDPOINT = EndpointTemplate(
    auth_url="https://accounts.google.com/o/oauth2/v2/auth",
    token_url="https://oauth2.googleapis.com/token",
    auth_style=AuthStyle.IN_PARAMS,
    auth_url_params={
        "access_type": "offline",  # Request refresh token
        "include_granted_scopes": "true",  # Incremental authorization
    },
)

google_factory = basic_factory(
    GOOGLE_ENDPOINT,
    name=GOOGLE_NAME,
    unsupported_grants=[GrantType.CLIENT_CREDENTIALS],
)
