"""
OAuth Providers

Provider registry, operation views, request options and the token model.
"""

from oauthapp.provider.context import OperationContext
from oauthapp.provider.endpoint import EndpointTemplate, Placeholder
from oauthapp.provider.exceptions import (
    DuplicateProviderError,
    InvalidConfigurationError,
    InvalidProviderNameError,
    MalformedResponseError,
    MissingRefreshTokenError,
    OAuthAppError,
    TokenEndpointError,
    TransportError,
    UnknownProviderError,
    UnsupportedOperationError,
)
from oauthapp.provider.factory import FactoryFunc, basic_factory, templated_factory
from oauthapp.provider.models import AuthStyle, Endpoint, GrantType, Token
from oauthapp.provider.options import (
    Option,
    WithProviderOptions,
    WithRedirectURL,
    WithScopes,
    WithURLParams,
)
from oauthapp.provider.provider import PrivateOperations, Provider, PublicOperations
from oauthapp.provider.registry import Registry, global_registry

__all__ = [
    "AuthStyle",
    "DuplicateProviderError",
    "Endpoint",
    "EndpointTemplate",
    "FactoryFunc",
    "GrantType",
    "InvalidConfigurationError",
    "InvalidProviderNameError",
    "MalformedResponseError",
    "MissingRefreshTokenError",
    "OAuthAppError",
    "OperationContext",
    "Option",
    "Placeholder",
    "PrivateOperations",
    "Provider",
    "PublicOperations",
    "Registry",
    "Token",
    "TokenEndpointError",
    "TransportError",
    "UnknownProviderError",
    "UnsupportedOperationError",
    "WithProviderOptions",
    "WithRedirectURL",
    "WithScopes",
    "WithURLParams",
    "basic_factory",
    "global_registry",
    "templated_factory",
]
