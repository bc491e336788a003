"""
Request Options

Closed set of per-call directives accepted by provider operations. Options
are folded left-to-right into a RequestOptions builder; which values finally
reach the provider is decided by the provider, not by option order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass
class RequestOptions:
    """Mutable builder collecting the effect of all options of one call."""

    redirect_url: str | None = None
    scopes: list[str] = field(default_factory=list)
    url_params: dict[str, str] = field(default_factory=dict)
    provider_options: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class WithRedirectURL:
    """Set the redirect URI of the request."""

    url: str

    def apply(self, builder: RequestOptions) -> None:
        builder.redirect_url = self.url


@dataclass(frozen=True, init=False)
class WithScopes:
    """Add scopes to the request, keeping first-seen order."""

    scopes: tuple[str, ...]

    def __init__(self, scopes: Iterable[str]) -> None:
        # A bare string would otherwise be split into characters
        if isinstance(scopes, str):
            scopes = scopes.split()
        object.__setattr__(self, "scopes", tuple(scopes))

    def apply(self, builder: RequestOptions) -> None:
        for scope in self.scopes:
            if scope and scope not in builder.scopes:
                builder.scopes.append(scope)


@dataclass(frozen=True, init=False)
class WithURLParams:
    """Add raw parameters to the authorization URL or token request body."""

    params: Mapping[str, str]

    def __init__(self, params: Mapping[str, str]) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(params)))

    def apply(self, builder: RequestOptions) -> None:
        builder.url_params.update(self.params)


@dataclass(frozen=True, init=False)
class WithProviderOptions:
    """Provider-specific named values, such as a tenant.

    Values for names the provider has already fixed in its configuration
    are ignored.
    """

    options: Mapping[str, str]

    def __init__(self, options: Mapping[str, str] | None = None) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(options or {})))

    def apply(self, builder: RequestOptions) -> None:
        builder.provider_options.update(self.options)


Option = WithRedirectURL | WithScopes | WithURLParams | WithProviderOptions


def apply_options(options: Iterable[Option]) -> RequestOptions:
    """
    Fold options into a fresh builder.

    Args:
        options: Options in the order the caller passed them

    Returns:
        Builder holding the combined effect of all options

    Raises:
        TypeError: If an element is not one of the supported options
    """
    builder = RequestOptions()
    for option in options:
        if not isinstance(option, (WithRedirectURL, WithScopes, WithURLParams, WithProviderOptions)):
            raise TypeError(f"unsupported option: {option!r}")
        option.apply(builder)
    return builder
