"""
Provider Registry

Maps provider type names to factories and builds configured providers.

Registration is a startup activity: register every factory before the
registry is shared, and do not register concurrently with lookups. After
that, lookups and construction are safe from any number of threads or
tasks, since the mapping is no longer written.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping

import structlog

from oauthapp.provider.context import OperationContext
from oauthapp.provider.exceptions import (
    DuplicateProviderError,
    InvalidProviderNameError,
    UnknownProviderError,
)
from oauthapp.provider.factory import FactoryFunc
from oauthapp.provider.provider import Provider
from oauthapp.provider.providers import register_builtin_providers

logger = structlog.get_logger()


class Registry:
    """
    Provider factory registry.

    Independent instances can be created freely; global_registry is the
    conventionally shared one holding the built-in providers.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._factories: dict[str, FactoryFunc] = {}

    def register(self, name: str, factory: FactoryFunc) -> None:
        """
        Register a provider factory.

        Args:
            name: Provider type name
            factory: Factory building providers of this type

        Raises:
            DuplicateProviderError: If the name is already registered
            InvalidProviderNameError: If the name is empty
        """
        if not name:
            raise InvalidProviderNameError(name)

        if name in self._factories:
            raise DuplicateProviderError(name)

        self._factories[name] = factory
        logger.info("Provider registered", provider=name)

    async def new(
        self,
        ctx: OperationContext | None,
        name: str,
        config: Mapping[str, str] | None = None,
    ) -> Provider:
        """
        Build a configured provider.

        Args:
            ctx: Context for any construction-time requests, may be None
            name: Provider type name
            config: Provider configuration

        Returns:
            Configured provider

        Raises:
            UnknownProviderError: If no factory is registered under name
            InvalidConfigurationError: If the factory rejects the configuration
        """
        factory = self._factories.get(name)
        if factory is None:
            raise UnknownProviderError(name, self._factories)

        provider = factory(ctx, dict(config or {}))
        if inspect.isawaitable(provider):
            provider = await provider
        return provider

    def names(self) -> list[str]:
        """List registered provider names, sorted."""
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


# Global provider registry
global_registry = Registry()
register_builtin_providers(global_registry)
