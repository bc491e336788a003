"""
Token Endpoint Executor

Performs a single token endpoint exchange and parses the response into a
Token. Failures are classified into transport, endpoint and malformed
response errors; nothing is retried here.
"""

from __future__ import annotations

import asyncio
import json
import math
import time
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any
from urllib.parse import parse_qs, quote_plus

import httpx
import structlog

from oauthapp.config import settings
from oauthapp.provider.context import OperationContext
from oauthapp.provider.exceptions import (
    MalformedResponseError,
    TokenEndpointError,
    TransportError,
)
from oauthapp.provider.models import AuthStyle, Endpoint, Token

logger = structlog.get_logger()

FORM_CONTENT_TYPES = frozenset({"application/x-www-form-urlencoded", "text/plain"})

# Fields mapped onto Token attributes; everything else lands in extra_data
STANDARD_FIELDS = frozenset({"access_token", "token_type", "refresh_token", "expires_in", "expires"})


async def retrieve_token(
    ctx: OperationContext,
    endpoint: Endpoint,
    client_id: str,
    client_secret: str,
    form: Mapping[str, str],
) -> Token:
    """
    Request a token from the endpoint's token URL.

    Args:
        ctx: Operation context holding the HTTP client and deadline
        endpoint: Resolved provider endpoint
        client_id: OAuth client ID
        client_secret: OAuth client secret
        form: Grant-specific form parameters

    Returns:
        Parsed token

    Raises:
        TransportError: If the request fails or the deadline elapses
        TokenEndpointError: If the endpoint answers with a non-2xx status
        MalformedResponseError: If a successful response cannot be parsed
    """
    data = dict(form)
    request_kwargs: dict[str, Any] = {
        "headers": {"Accept": settings.TOKEN_REQUEST_ACCEPT},
    }

    if endpoint.auth_style == AuthStyle.IN_HEADER:
        request_kwargs["auth"] = httpx.BasicAuth(quote_plus(client_id), quote_plus(client_secret))
    else:
        data["client_id"] = client_id
        if client_secret:
            data["client_secret"] = client_secret

    timeout = ctx.timeout if ctx.timeout is not None else settings.DEFAULT_OPERATION_TIMEOUT

    logger.debug(
        "token_request_started",
        token_url=endpoint.token_url,
        grant_type=data.get("grant_type"),
        auth_style=endpoint.auth_style.value,
    )
    start_time = time.monotonic()

    try:
        async with asyncio.timeout(timeout) as deadline:
            async with ctx.http_client.stream(
                "POST",
                endpoint.token_url,
                data=data,
                **request_kwargs,
            ) as response:
                body = await _read_body(response, settings.TOKEN_RESPONSE_MAX_BYTES)
    except TimeoutError as e:
        if deadline.expired():
            raise TransportError(
                f"token request exceeded deadline of {timeout}s",
                deadline_exceeded=True,
            ) from e
        raise TransportError(f"token request timed out: {e}") from e
    except httpx.HTTPError as e:
        raise TransportError(f"token request failed: {e}") from e

    logger.debug(
        "token_request_completed",
        token_url=endpoint.token_url,
        status_code=response.status_code,
        duration_ms=(time.monotonic() - start_time) * 1000,
    )

    content_type = response.headers.get("content-type", "")
    if not 200 <= response.status_code < 300:
        raise parse_error_response(response.status_code, body, content_type)

    return parse_token_response(body, content_type)


async def _read_body(response: httpx.Response, limit: int) -> bytes:
    buf = bytearray()
    async for chunk in response.aiter_bytes():
        buf.extend(chunk)
        if len(buf) >= limit:
            break
    return bytes(buf[:limit])


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def _decode_form(text: str) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(text, keep_blank_values=True).items()}


def parse_error_response(status_code: int, body: bytes, content_type: str) -> TokenEndpointError:
    """
    Build a TokenEndpointError from a non-2xx response.

    RFC 6749 error fields are extracted when the body carries them in
    either JSON or form encoding.
    """
    text = body.decode("utf-8", errors="replace")

    fields: dict[str, Any] = {}
    if _media_type(content_type) in FORM_CONTENT_TYPES:
        fields = _decode_form(text)
    else:
        try:
            decoded = json.loads(text)
        except ValueError:
            decoded = None
        if isinstance(decoded, dict):
            fields = decoded

    def field(name: str) -> str | None:
        value = fields.get(name)
        return value if isinstance(value, str) and value else None

    return TokenEndpointError(
        status_code,
        text,
        error_code=field("error"),
        error_description=field("error_description"),
        error_uri=field("error_uri"),
    )


def _expires_in(value: Any, body: str) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise MalformedResponseError("expires_in is not a number", body)
    if isinstance(value, float) and not math.isfinite(value):
        raise MalformedResponseError(f"expires_in is not finite: {value!r}", body)
    try:
        if isinstance(value, (int, float)):
            return int(value)
        return int(str(value).strip())
    except (OverflowError, ValueError) as e:
        raise MalformedResponseError(f"expires_in is not a number: {value!r}", body) from e


def parse_token_response(body: bytes, content_type: str, now: datetime | None = None) -> Token:
    """
    Parse a successful token endpoint response.

    Form-encoded and text/plain bodies are read as query strings; every
    other content type is treated as JSON.

    Args:
        body: Raw response body
        content_type: Response Content-Type header
        now: Reference time for expiry computation

    Returns:
        Parsed token

    Raises:
        MalformedResponseError: If the body is unparseable or has no access token
    """
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedResponseError("body is not valid UTF-8") from e

    fields: dict[str, Any]
    if _media_type(content_type) in FORM_CONTENT_TYPES:
        fields = _decode_form(text)
        expires = fields.get("expires_in") or fields.get("expires")
    else:
        try:
            decoded = json.loads(text)
        except ValueError as e:
            raise MalformedResponseError(f"invalid JSON: {e}", text) from e
        if not isinstance(decoded, dict):
            raise MalformedResponseError("JSON body is not an object", text)
        fields = decoded
        expires = fields.get("expires_in")

    access_token = fields.get("access_token")
    if not isinstance(access_token, str) or not access_token:
        raise MalformedResponseError("server response missing access_token", text)

    token_type = fields.get("token_type") or ""
    refresh_token = fields.get("refresh_token") or None
    if not isinstance(token_type, str) or not isinstance(refresh_token, (str, type(None))):
        raise MalformedResponseError("token_type and refresh_token must be strings", text)

    expiry = None
    expires_in = _expires_in(expires, text)
    if expires_in is not None and expires_in > 0:
        try:
            expiry = (now or datetime.now(UTC)) + timedelta(seconds=expires_in)
        except OverflowError as e:
            raise MalformedResponseError(f"expires_in is out of range: {expires_in}", text) from e

    return Token(
        access_token=access_token,
        token_type=token_type,
        refresh_token=refresh_token,
        expiry=expiry,
        extra_data={key: value for key, value in fields.items() if key not in STANDARD_FIELDS},
    )
