"""Error taxonomy and response classification for compiled route calls."""

from route_client_core.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ForbiddenError,
    GatewayTimeoutError,
    HttpError,
    NotFoundError,
    RateLimitError,
    SchemaError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from route_client_core.errors.handler import error_for_status, is_error_status

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientError",
    "ForbiddenError",
    "GatewayTimeoutError",
    "HttpError",
    "NotFoundError",
    "RateLimitError",
    "SchemaError",
    "ServerError",
    "TransportError",
    "UnauthorizedError",
    "error_for_status",
    "is_error_status",
]
