"""
Tests for the provider registry.
"""

from __future__ import annotations

from collections.abc import Mapping

import pytest

from oauthapp.provider import (
    AuthStyle,
    DuplicateProviderError,
    EndpointTemplate,
    InvalidConfigurationError,
    InvalidProviderNameError,
    OperationContext,
    Provider,
    Registry,
    UnknownProviderError,
    basic_factory,
    global_registry,
)


class TestRegistry:
    """Test registration and construction."""

    @pytest.mark.asyncio
    async def test_duplicate_registration(self, registry: Registry) -> None:
        """Test second registration fails and keeps the first factory."""
        other = basic_factory(
            EndpointTemplate(auth_url="http://other/authorize", token_url="http://other/token"),
        )

        with pytest.raises(DuplicateProviderError) as exc_info:
            registry.register("basic", other)

        assert exc_info.value.name == "basic"
        assert not exc_info.value.retryable

        provider = await registry.new(None, "basic", {})
        url, ok = provider.public("foo").auth_code_url("state")
        assert ok
        assert url.startswith("http://localhost/authorize?")

    def test_empty_name(self, registry: Registry) -> None:
        """Test empty provider names are refused."""
        with pytest.raises(InvalidProviderNameError):
            registry.register("", basic_factory(EndpointTemplate(token_url="http://x/token")))

    @pytest.mark.asyncio
    async def test_unknown_provider(self, registry: Registry) -> None:
        """Test constructing an unregistered provider."""
        with pytest.raises(UnknownProviderError) as exc_info:
            await registry.new(None, "missing", {})

        assert exc_info.value.name == "missing"
        assert exc_info.value.available == ["basic"]

    @pytest.mark.asyncio
    async def test_invalid_configuration_propagates(self, registry: Registry) -> None:
        """Test factory errors reach the caller unchanged."""
        error = InvalidConfigurationError("broken", "always fails")

        def broken_factory(ctx: OperationContext | None, config: Mapping[str, str]) -> Provider:
            raise error

        registry.register("broken", broken_factory)

        with pytest.raises(InvalidConfigurationError) as exc_info:
            await registry.new(None, "broken", {})

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_basic_rejects_configuration(self, registry: Registry) -> None:
        """Test the basic provider accepts no configuration keys."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            await registry.new(None, "basic", {"tenant": "northwind"})

        assert exc_info.value.keys == ("tenant",)

    @pytest.mark.asyncio
    async def test_async_factory(self, registry: Registry) -> None:
        """Test coroutine factories are awaited."""
        seen: list[Mapping[str, str]] = []

        async def async_factory(ctx: OperationContext | None, config: Mapping[str, str]) -> Provider:
            seen.append(config)
            return Provider(
                "async",
                EndpointTemplate(token_url="http://async/token", auth_style=AuthStyle.IN_HEADER),
            )

        registry.register("async", async_factory)
        provider = await registry.new(None, "async", {"key": "value"})

        assert provider.name == "async"
        assert seen == [{"key": "value"}]

    @pytest.mark.asyncio
    async def test_config_defaults_to_empty(self, registry: Registry) -> None:
        """Test omitted configuration is treated as empty."""
        provider = await registry.new(None, "basic")

        assert provider.name == "basic"

    def test_independent_registries(self, registry: Registry) -> None:
        """Test fresh registries do not share state."""
        assert registry.names() == ["basic"]
        assert "basic" in registry
        assert len(Registry()) == 0
        assert "basic" not in global_registry

    def test_global_registry_builtins(self) -> None:
        """Test built-in providers are registered on the global registry."""
        assert global_registry.names() == [
            "bitbucket",
            "custom",
            "github",
            "gitlab",
            "google",
            "microsoft_azure_ad",
            "slack",
        ]
