"""Base HTTP session for the market data API."""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any

import httpx

import json

from .transport import (
    DEFAULT_RESPONSE_BODY_LIMIT,
    ClientConfig,
    TokenProvider,
    build_request,
    send,
)
from .urls import validate_base_url, with_path_prefix

DEFAULT_BASE_URL = "https://api.schwabapi.com"
API_PATH_PREFIX = "/marketdata/v1"


def extract_error(body: bytes) -> str:
    """Return the ``detail`` or ``title`` of a JSON error body, or an empty string."""
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return ""
    if data is None:
        return ""
    if not isinstance(data, dict):
        return ""
    detail = data.get("detail")
    title = data.get("title")
    if (detail is not None and not isinstance(detail, str)) or (
        title is not None and not isinstance(title, str)
    ):
        return ""
    return detail or title or ""


def format_query_value(value: Any) -> str:
    """Render a value the way the API expects it in a query string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "+Inf" if value > 0 else "-Inf"
        if value == 0:
            return "0"
        return format(Decimal(repr(value)).normalize(), "f")
    return str(value)


def optional_query(params: Mapping[str, Any]) -> dict[str, str]:
    """Drop unset values (None, empty strings, numeric zero) and format the rest."""
    query: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, str) and value == "":
            continue
        if not isinstance(value, bool) and isinstance(value, (int, float)) and value == 0:
            continue
        query[key] = format_query_value(value)
    return query


class BaseClient:
    """Holds connection settings and performs GET requests against the API."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str = "",
        token_provider: TokenProvider | None = None,
        http_client: httpx.Client | None = None,
        response_body_limit: int = DEFAULT_RESPONSE_BODY_LIMIT,
        headers: Mapping[str, str] | None = None,
        user_agent: str | None = None,
    ) -> None:
        root = DEFAULT_BASE_URL
        option_error: Exception | None = None
        if base_url is not None:
            try:
                root = validate_base_url(base_url)
            except ValueError as exc:
                option_error = exc

        merged_headers = dict(headers or {})
        if user_agent:
            merged_headers["User-Agent"] = user_agent

        self._owns_http_client = http_client is None
        self.config = ClientConfig(
            base_url=with_path_prefix(root, API_PATH_PREFIX),
            http_client=http_client if http_client is not None else httpx.Client(),
            token=token,
            token_provider=token_provider,
            option_error=option_error,
            response_body_limit=response_body_limit,
            headers=merged_headers,
        )

    def close(self) -> None:
        """Close the HTTP client if this session created it."""
        if self._owns_http_client:
            self.config.http_client.close()

    def __enter__(self) -> BaseClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def request(self, path: str, params: Mapping[str, str] | None = None) -> Any:
        """GET ``path`` with ``params`` and return the decoded JSON body (None if empty)."""
        request = build_request(self.config, "GET", path, params)
        return send(self.config, request, extract_error).data