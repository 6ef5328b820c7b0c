"""API version capability sets and the shared endpoint implementations."""

from route_client_core.api.base import (
    ApiVersion,
    Implementation,
    JsonResult,
    forward,
    get_api_version,
    json_forward,
    register_api_version,
)

__all__ = [
    "ApiVersion",
    "Implementation",
    "JsonResult",
    "forward",
    "get_api_version",
    "json_forward",
    "register_api_version",
]
