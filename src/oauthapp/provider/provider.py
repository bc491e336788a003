"""
OAuth Provider

A provider binds an endpoint template to the generic OAuth 2.0 operations.
Operations are exposed through two views: PublicOperations need only a
client ID, PrivateOperations also carry the client secret and talk to the
token endpoint. Providers hold no mutable state and can be shared freely.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from oauthapp.provider.context import OperationContext
from oauthapp.provider.endpoint import EndpointTemplate
from oauthapp.provider.exceptions import MissingRefreshTokenError, UnsupportedOperationError
from oauthapp.provider.executor import retrieve_token
from oauthapp.provider.models import Endpoint, GrantType, Token
from oauthapp.provider.options import Option, RequestOptions, apply_options


class Provider:
    """
    Configured OAuth provider.

    Constructed once per (provider type, configuration) pair by a registry
    factory.
    """

    def __init__(
        self,
        name: str,
        endpoint: EndpointTemplate,
        unsupported_grants: Iterable[GrantType] = (),
    ) -> None:
        """
        Initialize provider.

        Args:
            name: Provider type name
            endpoint: Endpoint template with configuration values bound
            unsupported_grants: Grants the provider's token endpoint rejects
        """
        self._name = name
        self._endpoint = endpoint
        self._unsupported_grants = frozenset(unsupported_grants)

    @property
    def name(self) -> str:
        return self._name

    @property
    def endpoint(self) -> EndpointTemplate:
        return self._endpoint

    def supports(self, grant_type: GrantType) -> bool:
        """Check whether the provider supports a grant."""
        if grant_type == GrantType.AUTHORIZATION_CODE and self._endpoint.auth_url is None:
            return False
        return grant_type not in self._unsupported_grants

    def resolve_endpoint(self, options: RequestOptions) -> Endpoint:
        return self._endpoint.resolve(options.provider_options)

    def public(self, client_id: str) -> PublicOperations:
        """Operations available without a client secret."""
        return PublicOperations(self, client_id)

    def private(self, client_id: str, client_secret: str) -> PrivateOperations:
        """Operations that authenticate the client against the token endpoint."""
        return PrivateOperations(self, client_id, client_secret)

    def __repr__(self) -> str:
        return f"Provider(name={self._name!r})"


class PublicOperations:
    """Client-secret-free operations of a provider."""

    def __init__(self, provider: Provider, client_id: str) -> None:
        self._provider = provider
        self._client_id = client_id

    @property
    def client_id(self) -> str:
        return self._client_id

    def auth_code_url(self, state: str, *options: Option) -> tuple[str, bool]:
        """
        Build the authorization request URL.

        Args:
            state: CSRF state parameter
            *options: Redirect URL, scopes, URL params and provider options

        Returns:
            Tuple of (URL, ok). ok is False, with an empty URL, when the
            provider has no authorization code flow.
        """
        opts = apply_options(options)
        if not self._provider.supports(GrantType.AUTHORIZATION_CODE):
            return "", False

        endpoint = self._provider.resolve_endpoint(opts)
        if endpoint.auth_url is None:
            return "", False

        scheme, netloc, path, query, fragment = urlsplit(endpoint.auth_url)

        params: dict[str, str] = dict(parse_qsl(query, keep_blank_values=True))
        params.update(endpoint.auth_url_params)
        params["response_type"] = "code"
        params["client_id"] = self._client_id
        if opts.redirect_url:
            params["redirect_uri"] = opts.redirect_url
        params["state"] = state
        if opts.scopes:
            params["scope"] = " ".join(opts.scopes)
        params.update(opts.url_params)

        return urlunsplit((scheme, netloc, path, urlencode(sorted(params.items())), fragment)), True


class PrivateOperations(PublicOperations):
    """Provider operations that require the client secret."""

    def __init__(self, provider: Provider, client_id: str, client_secret: str) -> None:
        super().__init__(provider, client_id)
        self._client_secret = client_secret

    async def auth_code_exchange(
        self,
        ctx: OperationContext,
        code: str,
        *options: Option,
    ) -> Token:
        """
        Exchange an authorization code for a token.

        The redirect URL option must match the one used to obtain the code.

        Raises:
            UnsupportedOperationError: If the provider has no authorization code flow
            TransportError, TokenEndpointError, MalformedResponseError: On request failure
        """
        opts = apply_options(options)

        form = {
            "grant_type": GrantType.AUTHORIZATION_CODE.value,
            "code": code,
        }
        if opts.redirect_url:
            form["redirect_uri"] = opts.redirect_url

        return await self._token(ctx, GrantType.AUTHORIZATION_CODE, form, opts)

    async def refresh_token(
        self,
        ctx: OperationContext,
        token: Token,
        *options: Option,
    ) -> Token:
        """
        Refresh a token using its refresh token.

        If the response carries no refresh token, the input's refresh token
        is kept on the returned token.

        Raises:
            MissingRefreshTokenError: If the token has no refresh token
            UnsupportedOperationError: If the provider does not support refresh
            TransportError, TokenEndpointError, MalformedResponseError: On request failure
        """
        if not token.refresh_token:
            raise MissingRefreshTokenError()

        opts = apply_options(options)

        form = {
            "grant_type": GrantType.REFRESH_TOKEN.value,
            "refresh_token": token.refresh_token,
        }
        if opts.scopes:
            form["scope"] = " ".join(opts.scopes)

        refreshed = await self._token(ctx, GrantType.REFRESH_TOKEN, form, opts)
        if not refreshed.refresh_token:
            refreshed = refreshed.model_copy(update={"refresh_token": token.refresh_token})
        return refreshed

    async def client_credentials(self, ctx: OperationContext, *options: Option) -> Token:
        """
        Obtain a token for the client itself.

        Raises:
            UnsupportedOperationError: If the provider does not support client credentials
            TransportError, TokenEndpointError, MalformedResponseError: On request failure
        """
        opts = apply_options(options)

        form = {"grant_type": GrantType.CLIENT_CREDENTIALS.value}
        if opts.scopes:
            form["scope"] = " ".join(opts.scopes)

        return await self._token(ctx, GrantType.CLIENT_CREDENTIALS, form, opts)

    async def _token(
        self,
        ctx: OperationContext,
        grant_type: GrantType,
        form: dict[str, str],
        opts: RequestOptions,
    ) -> Token:
        if not self._provider.supports(grant_type):
            raise UnsupportedOperationError(grant_type.value)

        endpoint = self._provider.resolve_endpoint(opts)
        for key, value in opts.url_params.items():
            form.setdefault(key, value)

        return await retrieve_token(ctx, endpoint, self._client_id, self._client_secret, form)
