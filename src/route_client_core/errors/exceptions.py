"""Structured exceptions for compiled route calls."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class APIError(Exception):
    """Base exception for everything a route call can report."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response


class SchemaError(APIError):
    """The route schema cannot be compiled against the API version.

    Raised once, while the client is being constructed. Never retried.
    """

    def __init__(self, message: str, route: str | None = None):
        super().__init__(message)
        self.route = route


class BadRequestError(APIError):
    """A message parameter failed validation before any network I/O."""

    def __init__(self, message: str, param: str | None = None, **kwargs):
        kwargs.setdefault("status_code", 400)
        super().__init__(message, **kwargs)
        self.param = param


class GatewayTimeoutError(APIError):
    """The request exceeded its configured timeout."""

    def __init__(self, message: str = "Gateway Timeout", **kwargs):
        kwargs.setdefault("status_code", 504)
        super().__init__(message, **kwargs)


class TransportError(APIError):
    """Low-level failure: DNS, refused or reset connection, TLS, unreadable file body."""

    pass


class HttpError(APIError):
    """The remote side answered with an error status.

    ``body`` holds the raw response text, unmodified.
    """

    def __init__(self, message: str, body: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.body = body


class ClientError(HttpError):
    """4xx responses."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(HttpError):
    """5xx responses."""

    pass
