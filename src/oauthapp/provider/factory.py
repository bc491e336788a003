"""
Provider Factories

Factory builders shared by the provider families. A factory takes an
operation context and the raw provider configuration and returns a
configured Provider; it may be a plain or an async callable.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from oauthapp.provider.context import OperationContext
from oauthapp.provider.endpoint import EndpointTemplate
from oauthapp.provider.exceptions import InvalidConfigurationError
from oauthapp.provider.models import GrantType
from oauthapp.provider.provider import Provider

FactoryFunc = Callable[
    [OperationContext | None, Mapping[str, str]],
    Provider | Awaitable[Provider],
]

ConfigT = TypeVar("ConfigT", bound=BaseModel)


class EmptyConfig(BaseModel):
    """Configuration model for providers that accept no options."""

    model_config = ConfigDict(extra="forbid")


def validate_config(name: str, model: type[ConfigT], config: Mapping[str, str]) -> ConfigT:
    """
    Validate raw provider configuration against a config model.

    Models are expected to forbid extra keys so that typos are reported
    rather than ignored.

    Args:
        name: Provider type name, used in the error
        model: Pydantic model describing the accepted keys
        config: Raw configuration

    Returns:
        Parsed configuration

    Raises:
        InvalidConfigurationError: If the configuration does not validate
    """
    try:
        return model.model_validate(dict(config))
    except ValidationError as e:
        keys = []
        reasons = []
        for error in e.errors():
            key = ".".join(str(part) for part in error["loc"])
            if key:
                keys.append(key)
            reasons.append(f"{key or 'configuration'}: {error['msg']}")
        raise InvalidConfigurationError(name, "; ".join(reasons), keys) from e


def basic_factory(
    endpoint: EndpointTemplate,
    *,
    name: str = "basic",
    unsupported_grants: Iterable[GrantType] = (),
) -> FactoryFunc:
    """
    Build a factory for a provider with a fixed endpoint and no options.

    Args:
        endpoint: Provider endpoint
        name: Provider type name
        unsupported_grants: Grants the provider does not support

    Returns:
        Provider factory
    """
    unsupported = frozenset(unsupported_grants)

    def factory(ctx: OperationContext | None, config: Mapping[str, str]) -> Provider:
        validate_config(name, EmptyConfig, config)
        return Provider(name, endpoint, unsupported)

    return factory


def templated_factory(
    endpoint: EndpointTemplate,
    config_model: type[BaseModel],
    *,
    name: str,
    unsupported_grants: Iterable[GrantType] = (),
) -> FactoryFunc:
    """
    Build a factory whose configuration binds endpoint placeholders.

    Config model fields named after a placeholder are bound into the
    endpoint template at construction; unset fields leave the placeholder
    to per-call options or its fallback.

    Args:
        endpoint: Endpoint template with placeholders
        config_model: Pydantic model describing the accepted keys
        name: Provider type name
        unsupported_grants: Grants the provider does not support

    Returns:
        Provider factory
    """
    placeholder_names = {placeholder.name for placeholder in endpoint.placeholders}
    unsupported = frozenset(unsupported_grants)

    def factory(ctx: OperationContext | None, config: Mapping[str, str]) -> Provider:
        parsed = validate_config(name, config_model, config)
        values = {
            key: value
            for key, value in parsed.model_dump().items()
            if key in placeholder_names
        }
        return Provider(name, endpoint.bind(values), unsupported)

    return factory
