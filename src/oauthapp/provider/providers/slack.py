"""Slack OAuth v2 provider."""

from __future__ import annotations

from oauthapp.provider.endpoint import EndpointTemplate
from oauthapp.provider.factory import basic_factory
from oauthapp.provider.models import AuthStyle, GrantType

SLACK_NAME = "slack"

SLACK_ENDPOINT = EndpointTemplate(
    auth_url="https://slack.com/oauth/v2/authorize",
    token_url="https://slack.com/api/oauth.v2.access",
    auth_style=AuthStyle.IN_PARAMS,
)

slack_factory = basic_factory(
    SLACK_ENDPOINT,
    name=SLACK_NAME,
    unsupported_grants=[GrantType.CLIENT_CREDENTIALS],
)
