"""Casdoor SDK exceptions for error handling.

Every failure surfaced by the SDK is a ``CasdoorError`` carrying an
HTTP-status shaped ``status_code`` and a human readable ``message``.
The originating library exception, when there is one, is kept as ``__cause__``.
"""
from __future__ import annotations

from http import HTTPStatus

import httpx


class CasdoorError(Exception):
    """Base exception for all Casdoor SDK operations.

    Attributes:
        status_code: HTTP-status shaped code
        message: Error message
    """

    default_status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = int(status_code if status_code is not None else self.default_status)
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class TransportError(CasdoorError):
    """Network, timeout or HTTP status failure while talking to Casdoor."""

    @classmethod
    def from_httpx(cls, exc: httpx.HTTPError) -> "TransportError":
        """Map an httpx failure to a status code.

        The server's own status wins when a response exists, otherwise the
        failure category decides: timeout -> 408, request construction -> 400,
        anything else -> 500.
        """
        if isinstance(exc, httpx.HTTPStatusError):
            code = exc.response.status_code
        elif isinstance(exc, httpx.TimeoutException):
            code = HTTPStatus.REQUEST_TIMEOUT
        elif isinstance(exc, (httpx.UnsupportedProtocol, httpx.LocalProtocolError)):
            code = HTTPStatus.BAD_REQUEST
        else:
            code = HTTPStatus.INTERNAL_SERVER_ERROR
        return cls(str(exc) or type(exc).__name__, code)


class SerializationError(CasdoorError):
    """Query string or JSON encode/decode failure."""

    default_status = HTTPStatus.BAD_REQUEST


class UrlParseError(CasdoorError):
    """A constructed URL is malformed."""

    default_status = HTTPStatus.BAD_REQUEST


class TokenExchangeError(CasdoorError):
    """OAuth2 authorization-code or refresh-token grant failed."""


class JwtVerificationError(CasdoorError):
    """JWT signature, audience or temporal claim check failed.

    Attributes:
        reason: Machine readable sub-reason (expired, invalid_signature,
            invalid_audience, ...)
    """

    default_status = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, reason: str = "invalid", status_code: int | None = None):
        self.reason = reason
        super().__init__(message, status_code)


class BusinessError(CasdoorError):
    """Casdoor answered with ``status: "error"``."""


class UnknownStatusError(CasdoorError):
    """Casdoor answered with a status label the SDK does not know."""

    def __init__(self, status: str, msg: str, status_code: int | None = None):
        self.status = status
        self.msg = msg
        super().__init__(f"Unknown: status={status}, msg={msg}", status_code)


class NotFoundError(CasdoorError):
    """A required payload is missing from an otherwise successful response."""

    default_status = HTTPStatus.NOT_FOUND


class InvalidArgumentError(CasdoorError):
    """The caller passed an invalid argument combination."""

    default_status = HTTPStatus.BAD_REQUEST


class ConfigError(CasdoorError):
    """Configuration is missing or cannot be parsed."""
