"""Testing utilities for route clients.

``RecordingTransport`` is an ``httpx.MockTransport`` that remembers every
request it handled; ``build_client`` compiles a schema against a throwaway
API version wired to such a transport.

Example:
    ```python
    from route_client_core.testing import RecordingTransport, build_client


    async def test_get_user():
        transport = RecordingTransport(lambda request: httpx.Response(200, json={"id": 42}))
        client = build_client(SCHEMA, {"users": {"get": forward}}, transport=transport)
        response = await client.users.get({"id": "42"})
        assert transport.requests[0].url.path == "/users/42"
    ```
"""

from collections.abc import Callable, Mapping
from typing import Any

import httpx

from route_client_core.api.base import ApiVersion, Implementation
from route_client_core.client import RouteClient
from route_client_core.config import ClientConfig


class RecordingTransport(httpx.MockTransport):
    """Mock transport that records requests, with their bodies read."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._respond = handler or (lambda request: httpx.Response(200))
        super().__init__(self._record)

    async def _record(self, request: httpx.Request) -> httpx.Response:
        await request.aread()
        self.requests.append(request)
        return self._respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_api_class(
    routes: Mapping[str, Any],
    sections: Mapping[str, Mapping[str, Implementation]],
    version: str = "test",
) -> type[ApiVersion]:
    """Create an unregistered API version class for a schema."""
    return type("TestApi", (ApiVersion,), {"version": version, "routes": routes, "sections": sections})


def build_client(
    routes: Mapping[str, Any],
    sections: Mapping[str, Mapping[str, Implementation]],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    config: ClientConfig | Mapping[str, Any] | None = None,
) -> RouteClient:
    """Compile ``routes`` into a client whose requests go to ``transport``."""
    if config is None:
        config = ClientConfig(proxy="")
    return RouteClient(
        config,
        api_class=make_api_class(routes, sections),
        transport=transport or RecordingTransport(),
    )


__all__ = ["RecordingTransport", "build_client", "make_api_class"]
