"""
Tests for the built-in provider families.
"""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import httpx
import pytest
import respx

from oauthapp.provider import (
    AuthStyle,
    InvalidConfigurationError,
    OperationContext,
    UnsupportedOperationError,
    WithURLParams,
    global_registry,
)


class TestCustomProvider:
    """Test providers configured entirely from configuration."""

    @pytest.mark.asyncio
    async def test_auth_code_url(self) -> None:
        """Test configured endpoints are used."""
        provider = await global_registry.new(
            None,
            "custom",
            {
                "auth_code_url": "https://idp.example.com/authorize?prompt=login",
                "token_url": "https://idp.example.com/token",
            },
        )

        url, ok = provider.public("foo").auth_code_url("state")

        assert ok
        u = urlsplit(url)
        assert u.path == "/authorize"
        qs = parse_qs(u.query)
        assert qs["prompt"] == ["login"]
        assert qs["client_id"] == ["foo"]

    @pytest.mark.asyncio
    async def test_client_credentials_only(self, ctx: OperationContext) -> None:
        """Test a provider without authorization URL reports the flow as unsupported."""
        provider = await global_registry.new(ctx, "custom", {"token_url": "https://idp.example.com/token"})
        ops = provider.private("foo", "bar")

        assert ops.auth_code_url("state") == ("", False)

        with pytest.raises(UnsupportedOperationError) as exc_info:
            await ops.auth_code_exchange(ctx, "123456")

        assert exc_info.value.operation == "authorization_code"

    @respx.mock
    @pytest.mark.asyncio
    async def test_auth_style_in_header(self, ctx: OperationContext) -> None:
        """Test the configured auth style is honoured."""
        route = respx.post("https://idp.example.com/token").mock(
            return_value=httpx.Response(200, json={"access_token": "abcd"}),
        )

        provider = await global_registry.new(
            ctx,
            "custom",
            {"token_url": "https://idp.example.com/token", "auth_style": "in_header"},
        )
        await provider.private("foo", "bar").client_credentials(ctx)

        assert provider.endpoint.auth_style == AuthStyle.IN_HEADER
        assert route.calls.last.request.headers["authorization"].startswith("Basic ")

    @pytest.mark.parametrize(
        ("config", "bad_key"),
        [
            ({}, "token_url"),
            ({"token_url": "not a url"}, "token_url"),
            ({"token_url": "https://idp.example.com/token", "auth_style": "in_body"}, "auth_style"),
            ({"token_url": "https://idp.example.com/token", "tokenurl": "x"}, "tokenurl"),
        ],
    )
    @pytest.mark.asyncio
    async def test_invalid_configuration(self, config: dict[str, str], bad_key: str) -> None:
        """Test invalid configuration is reported with the offending key."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            await global_registry.new(None, "custom", config)

        assert bad_key in exc_info.value.keys
        assert exc_info.value.provider == "custom"


class TestGitLabProvider:
    """Test GitLab instance configuration."""

    @pytest.mark.asyncio
    async def test_default_instance(self) -> None:
        """Test gitlab.com is used by default."""
        provider = await global_registry.new(None, "gitlab", {})

        url, ok = provider.public("foo").auth_code_url("state")

        assert ok
        assert url.startswith("https://gitlab.com/oauth/authorize?")

    @respx.mock
    @pytest.mark.asyncio
    async def test_self_managed_instance(self, ctx: OperationContext) -> None:
        """Test a configured base URL is used for both endpoints."""
        route = respx.post("https://gitlab.example.com/oauth/token").mock(
            return_value=httpx.Response(200, json={"access_token": "abcd", "token_type": "bearer"}),
        )

        provider = await global_registry.new(ctx, "gitlab", {"base_url": "https://gitlab.example.com/"})
        url, _ = provider.public("foo").auth_code_url("state")
        token = await provider.private("foo", "bar").client_credentials(ctx)

        assert url.startswith("https://gitlab.example.com/oauth/authorize?")
        assert token.access_token == "abcd"
        assert route.called

    @pytest.mark.asyncio
    async def test_invalid_base_url(self) -> None:
        """Test malformed base URLs are rejected."""
        with pytest.raises(InvalidConfigurationError):
            await global_registry.new(None, "gitlab", {"base_url": "gitlab"})


class TestFixedProviders:
    """Test providers with fixed endpoints."""

    @pytest.mark.asyncio
    async def test_google_offline_access(self) -> None:
        """Test Google authorization URLs request offline access."""
        provider = await global_registry.new(None, "google", {})

        url, ok = provider.public("foo").auth_code_url("state")

        assert ok
        assert url.startswith("https://accounts.google.com/o/oauth2/v2/auth?")
        qs = parse_qs(urlsplit(url).query)
        assert qs["access_type"] == ["offline"]
        assert qs["include_granted_scopes"] == ["true"]

    @pytest.mark.asyncio
    async def test_google_defaults_overridable(self) -> None:
        """Test caller URL params win over provider defaults."""
        provider = await global_registry.new(None, "google", {})

        url, _ = provider.public("foo").auth_code_url("state", WithURLParams({"access_type": "online"}))

        assert parse_qs(urlsplit(url).query)["access_type"] == ["online"]

    @pytest.mark.asyncio
    async def test_github_client_credentials_unsupported(self, ctx: OperationContext) -> None:
        """Test unsupported grants fail without a request."""
        provider = await global_registry.new(ctx, "github", {})

        with pytest.raises(UnsupportedOperationError):
            await provider.private("foo", "bar").client_credentials(ctx)

    @pytest.mark.parametrize(
        ("name", "prefix"),
        [
            ("bitbucket", "https://bitbucket.org/site/oauth2/authorize?"),
            ("github", "https://github.com/login/oauth/authorize?"),
            ("slack", "https://slack.com/oauth/v2/authorize?"),
        ],
    )
    @pytest.mark.asyncio
    async def test_auth_code_url(self, name: str, prefix: str) -> None:
        """Test fixed authorization endpoints."""
        provider = await global_registry.new(None, name, {})

        url, ok = provider.public("foo").auth_code_url("state")

        assert ok
        assert url.startswith(prefix)

    @respx.mock
    @pytest.mark.asyncio
    async def test_bitbucket_header_auth(self, ctx: OperationContext) -> None:
        """Test Bitbucket receives credentials in the Authorization header."""
        route = respx.post("https://bitbucket.org/site/oauth2/access_token").mock(
            return_value=httpx.Response(200, json={"access_token": "abcd"}),
        )

        provider = await global_registry.new(ctx, "bitbucket", {})
        await provider.private("foo", "bar").client_credentials(ctx)

        request = route.calls.last.request
        assert request.headers["authorization"].startswith("Basic ")
        assert b"client_secret" not in request.content

    @pytest.mark.asyncio
    async def test_fixed_providers_reject_configuration(self) -> None:
        """Test providers without options reject any key."""
        with pytest.raises(InvalidConfigurationError):
            await global_registry.new(None, "slack", {"team": "T123"})
