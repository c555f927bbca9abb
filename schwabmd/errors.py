"""Exceptions raised by the market data client."""

from __future__ import annotations


class APIError(Exception):
    """The API answered with a status code outside the 2xx range."""

    def __init__(self, status_code: int, message: str, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.body = body

    def __str__(self) -> str:
        return f"API error {self.status_code}: {self.message}"


class ResponseError(Exception):
    """A successful response could not be read or decoded."""


class ResponseTooLargeError(ResponseError):
    """A response body exceeded the configured size limit."""

    def __init__(self, operation: str, limit: int) -> None:
        self.operation = operation
        self.limit = limit
        super().__init__(
            f"{operation}: response body too large: configured limit is {limit} bytes"
        )