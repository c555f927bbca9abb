"""Request building and response handling shared by the API clients."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Protocol, runtime_checkable

import httpx

from .errors import APIError, ResponseError, ResponseTooLargeError
from .urls import join_path

JSON_CONTENT_TYPE = "application/json"
MAX_API_ERROR_BODY_BYTES = 1 << 20
DEFAULT_RESPONSE_BODY_LIMIT = 10 << 20

_ACCEPT = "Accept"
_AUTHORIZATION = "Authorization"
_CONTENT_TYPE = "Content-Type"
_LIBRARY_HEADERS = frozenset(name.lower() for name in (_ACCEPT, _AUTHORIZATION, _CONTENT_TYPE))


@runtime_checkable
class TokenProvider(Protocol):
    """Supplies a bearer token for each request."""

    def token(self) -> str:
        """Return a current access token."""


@dataclass
class ClientConfig:
    """Settings shared by every request a client makes."""

    base_url: str
    http_client: httpx.Client
    token: str = ""
    token_provider: TokenProvider | None = None
    option_error: Exception | None = None
    response_body_limit: int = DEFAULT_RESPONSE_BODY_LIMIT
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class Response:
    """Status, headers and decoded JSON payload of a completed response."""

    status_code: int
    headers: httpx.Headers
    data: Any = None


class _LimitExceeded(Exception):
    pass


def build_request(
    config: ClientConfig,
    method: str,
    path: str,
    params: Mapping[str, str] | None = None,
    body: Any = None,
) -> httpx.Request:
    """Build a request against the configured base URL with auth and JSON headers."""
    if config.option_error is not None:
        raise config.option_error
    url = join_path(config.base_url, path)

    content: bytes | None = None
    if body is not None:
        try:
            content = json.dumps(body).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise ValueError(f"marshal request body: {exc}") from exc

    headers = httpx.Headers(
        {name: value for name, value in config.headers.items() if name.lower() not in _LIBRARY_HEADERS}
    )
    headers[_ACCEPT] = JSON_CONTENT_TYPE
    if config.token_provider is not None:
        token = config.token_provider.token()
        if not token:
            raise ValueError("token provider returned an empty token")
        headers[_AUTHORIZATION] = f"Bearer {token}"
    elif config.token:
        headers[_AUTHORIZATION] = f"Bearer {config.token}"
    if content is not None:
        headers[_CONTENT_TYPE] = JSON_CONTENT_TYPE

    return httpx.Request(method, url, params=params, headers=headers, content=content)


def _read_limited(response: httpx.Response, limit: int) -> bytes:
    buffer = bytearray()
    for chunk in response.iter_bytes():
        buffer.extend(chunk)
        if len(buffer) > limit:
            raise _LimitExceeded
    return bytes(buffer)


def _status_text(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def _api_error(
    status_code: int,
    response: httpx.Response,
    limit: int,
    extract_error: Callable[[bytes], str] | None,
) -> APIError:
    try:
        body = _read_limited(response, limit)[:MAX_API_ERROR_BODY_BYTES]
    except _LimitExceeded:
        return APIError(status_code, str(ResponseTooLargeError("read error response body", limit)))
    message = extract_error(body) if body and extract_error is not None else ""
    return APIError(
        status_code,
        message or _status_text(status_code),
        body.decode("utf-8", errors="replace"),
    )


def check_json_content_type(content_type: str, body: bytes) -> None:
    """Raise ``ResponseError`` unless ``body`` is empty or labelled as JSON."""
    if not body:
        return
    media_type = content_type.strip().split(";", 1)[0].strip().lower()
    if media_type != JSON_CONTENT_TYPE:
        raise ResponseError(f'unexpected Content-Type "{content_type}" (expected {JSON_CONTENT_TYPE})')


def _decode_json(body: bytes) -> Any:
    text = body.decode("utf-8", errors="replace").lstrip()
    try:
        value, _ = json.JSONDecoder().raw_decode(text)
    except json.JSONDecodeError as exc:
        raise ResponseError(f"decode response body: {exc}") from exc
    return value


def send(
    config: ClientConfig,
    request: httpx.Request,
    extract_error: Callable[[bytes], str] | None = None,
) -> Response:
    """Send ``request`` and return its decoded JSON; raise ``APIError`` on non-2xx."""
    limit = config.response_body_limit if config.response_body_limit > 0 else DEFAULT_RESPONSE_BODY_LIMIT
    http_response = config.http_client.send(request, stream=True)
    try:
        status_code = http_response.status_code
        headers = httpx.Headers(http_response.headers)
        if not 200 <= status_code < 300:
            raise _api_error(status_code, http_response, limit, extract_error)
        try:
            body = _read_limited(http_response, limit)
        except _LimitExceeded:
            raise ResponseTooLargeError("decode response body", limit) from None
    finally:
        http_response.close()

    check_json_content_type(headers.get(_CONTENT_TYPE, ""), body)
    data = _decode_json(body) if body else None
    return Response(status_code=status_code, headers=headers, data=data)