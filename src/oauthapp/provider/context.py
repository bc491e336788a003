"""Per-call operation context."""

from __future__ import annotations

from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class OperationContext:
    """
    Caller-owned context for one or more provider operations.

    Carries the HTTP client used for token endpoint requests and an optional
    deadline. The client is never created by oauthapp, so hosts can supply
    proxies, mutual TLS or test transports.

    Attributes:
        http_client: Client used for outbound requests
        timeout: Deadline in seconds for each operation, None for no deadline
    """

    http_client: httpx.AsyncClient
    timeout: float | None = None
