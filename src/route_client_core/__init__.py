"""Route Client Core - schema-driven HTTP API clients.

A declarative route schema (URL templates, methods, parameter rules and
request formats) is compiled into async endpoint functions that:
- validate and coerce their parameters
- build the URL, query string or body in the declared format
- apply authentication, custom headers and upstream proxies
- send the request with httpx and classify the response

Example:
    ```python
    from route_client_core import ApiVersion, ClientConfig, RouteClient, json_forward

    class ExampleApi(ApiVersion):
        version = "1.0.0"
        routes = {
            "defines": {
                "constants": {"protocol": "https", "host": "api.example.com"},
                "params": {},
                "request-headers": [],
            },
            "users": {"get": {"url": "/users/:id", "method": "GET", "params": {"id": {"required": True}}}},
        }
        sections = {"users": {"get": json_forward}}

    async with RouteClient(ClientConfig(), api_class=ExampleApi) as client:
        result = await client.users.get({"id": "42"})
    ```
"""

# Set before the imports below; the dispatcher reads it for its user agent
__version__ = "0.1.0"

from route_client_core.api.base import (
    ApiVersion,
    JsonResult,
    forward,
    get_api_version,
    json_forward,
    register_api_version,
)
from route_client_core.auth import AuthContext, CredentialResolver
from route_client_core.client import RouteClient
from route_client_core.config import ClientConfig
from route_client_core.transport.completion import Completion

__all__ = [
    "ApiVersion",
    "AuthContext",
    "ClientConfig",
    "Completion",
    "CredentialResolver",
    "JsonResult",
    "RouteClient",
    "__version__",
    "forward",
    "get_api_version",
    "json_forward",
    "register_api_version",
]
