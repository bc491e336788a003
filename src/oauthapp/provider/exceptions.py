"""Provider exceptions.

Exception hierarchy for provider registration, construction and token
endpoint operations. Construction-time errors are never retryable; transport
failures and server-side token endpoint failures are.
"""

from __future__ import annotations

from collections.abc import Iterable


class OAuthAppError(Exception):
    """Base exception for all oauthapp errors."""

    def __init__(self, message: str) -> None:
        """Initialize oauthapp error.

        Args:
            message: Error description
        """
        self.message = message
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        """Whether repeating the same call may succeed."""
        return False


class DuplicateProviderError(OAuthAppError):
    """Raised when a provider name is registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"provider '{name}' is already registered")


class InvalidProviderNameError(OAuthAppError):
    """Raised when registering a provider under an empty name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"invalid provider name: {name!r}")


class UnknownProviderError(OAuthAppError):
    """Raised when no factory is registered under the requested name."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.name = name
        self.available = sorted(available)
        super().__init__(
            f"provider '{name}' is not registered "
            f"(available: {', '.join(self.available) or 'none'})"
        )


class InvalidConfigurationError(OAuthAppError):
    """Raised by a provider factory when its configuration is unusable."""

    def __init__(
        self,
        provider: str,
        reason: str,
        keys: Iterable[str] = (),
    ) -> None:
        """Initialize configuration error.

        Args:
            provider: Provider type name
            reason: What is wrong with the configuration
            keys: Configuration keys involved, if known
        """
        self.provider = provider
        self.reason = reason
        self.keys = tuple(keys)
        super().__init__(f"invalid configuration for provider '{provider}': {reason}")


class MissingRefreshTokenError(OAuthAppError):
    """Raised when refreshing a token that carries no refresh token."""

    def __init__(self) -> None:
        super().__init__("token has no refresh token")


class UnsupportedOperationError(OAuthAppError):
    """Raised when a provider does not support the requested grant."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"provider does not support operation '{operation}'")


class TransportError(OAuthAppError):
    """Raised when the token request could not be completed.

    Covers network failures and an elapsed operation deadline. The
    underlying exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, deadline_exceeded: bool = False) -> None:
        self.deadline_exceeded = deadline_exceeded
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        return True


class TokenEndpointError(OAuthAppError):
    """Raised when the token endpoint answers with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        body: str,
        error_code: str | None = None,
        error_description: str | None = None,
        error_uri: str | None = None,
    ) -> None:
        """Initialize token endpoint error.

        Args:
            status_code: HTTP status code
            body: Raw response body
            error_code: RFC 6749 ``error`` value, if the body carried one
            error_description: RFC 6749 ``error_description`` value
            error_uri: RFC 6749 ``error_uri`` value
        """
        self.status_code = status_code
        self.body = body
        self.error_code = error_code
        self.error_description = error_description
        self.error_uri = error_uri

        message = f"token endpoint returned status {status_code}"
        if error_code:
            message += f": {error_code}"
            if error_description:
                message += f" ({error_description})"
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        return self.status_code >= 500


class MalformedResponseError(OAuthAppError):
    """Raised when a successful token response cannot be parsed."""

    def __init__(self, reason: str, body: str = "") -> None:
        self.reason = reason
        self.body = body
        super().__init__(f"malformed token response: {reason}")
