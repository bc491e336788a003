"""
OAuth Provider Implementations

Built-in provider families (GitHub, GitLab, Google, Microsoft Azure AD, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from oauthapp.provider.providers.bitbucket import BITBUCKET_NAME, bitbucket_factory
from oauthapp.provider.providers.custom import CUSTOM_NAME, custom_factory
from oauthapp.provider.providers.github import GITHUB_NAME, github_factory
from oauthapp.provider.providers.gitlab import GITLAB_NAME, gitlab_factory
from oauthapp.provider.providers.google import GOOGLE_NAME, google_factory
from oauthapp.provider.providers.microsoft import AZURE_AD_NAME, azure_ad_factory
from oauthapp.provider.providers.slack import SLACK_NAME, slack_factory

if TYPE_CHECKING:
    from oauthapp.provider.registry import Registry


def register_builtin_providers(registry: Registry) -> None:
    """Register every built-in provider family on a registry."""
    registry.register(BITBUCKET_NAME, bitbucket_factory)
    registry.register(CUSTOM_NAME, custom_factory)
    registry.register(GITHUB_NAME, github_factory)
    registry.register(GITLAB_NAME, gitlab_factory)
    registry.register(GOOGLE_NAME, google_factory)
    registry.register(AZURE_AD_NAME, azure_ad_factory)
    registry.register(SLACK_NAME, slack_factory)


__all__ = [
    "register_builtin_providers",
]
