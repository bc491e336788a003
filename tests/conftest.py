"""Root-level pytest configuration for all tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from oauthapp.provider import (
    AuthStyle,
    EndpointTemplate,
    OperationContext,
    Registry,
    basic_factory,
)

BASIC_TEST_ENDPOINT = EndpointTemplate(
    auth_url="http://localhost/authorize",
    token_url="http://localhost/token",
    auth_style=AuthStyle.IN_PARAMS,
)


@pytest.fixture
def registry() -> Registry:
    """Create fresh registry with the basic test provider."""
    registry = Registry()
    registry.register("basic", basic_factory(BASIC_TEST_ENDPOINT))
    return registry


@pytest_asyncio.fixture
async def ctx() -> AsyncIterator[OperationContext]:
    """Create operation context with a real (respx-interceptable) client."""
    async with httpx.AsyncClient() as client:
        yield OperationContext(http_client=client, timeout=10)
