"""API versions: the capability sets compiled routes are attached to.

An API version declares its route schema and, per namespace, the
implementation of every function the schema names. Implementations are
coroutines called as ``implementation(api, message, route, completion)``
with an already validated message.

Example:
    ```python
    @register_api_version
    class GitHubV3(ApiVersion):
        version = "3.0.0"
        routes = load_routes("routes.json")
        sections = {
            "repos": {"getAll": json_forward, "get": json_forward},
            "user": {"get": forward},
        }
    ```
"""

import logging
from collections.abc import Awaitable, Callable, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

import httpx

from route_client_core.errors.exceptions import HttpError, SchemaError
from route_client_core.schema.models import RouteDefinition
from route_client_core.transport.completion import Completion

if TYPE_CHECKING:
    from route_client_core.client import RouteClient

logger = logging.getLogger(__name__)

Implementation = Callable[["ApiVersion", MutableMapping[str, Any], RouteDefinition, Completion], Awaitable[None]]

META_HEADERS = (
    "x-ratelimit-limit",
    "x-ratelimit-remaining",
    "x-ratelimit-reset",
    "x-oauth-scopes",
    "link",
    "location",
    "last-modified",
    "etag",
    "status",
)

_API_VERSIONS: dict[str, type["ApiVersion"]] = {}


class ApiVersion:
    """Capability set for one version of an API.

    Subclasses set ``version``, ``routes`` and ``sections``. The client
    owning the instance is available as ``self.client``.
    """

    version: ClassVar[str] = ""
    routes: ClassVar[Mapping[str, Any]] = {}
    sections: ClassVar[Mapping[str, Mapping[str, Implementation]]] = {}

    def __init__(self, client: "RouteClient") -> None:
        self.client = client

    async def send_error(
        self,
        error: Exception,
        route: RouteDefinition | None,
        message: Mapping[str, Any],
        completion: Completion,
    ) -> None:
        """Report a failed call. Override to translate or enrich errors."""
        completion.deliver(error=error)

    async def http_send(self, message: Mapping[str, Any], route: RouteDefinition, completion: Completion) -> None:
        await self.client.http_send(message, route, completion)


@dataclass(slots=True)
class JsonResult:
    """Decoded JSON body plus selected response headers."""

    data: Any
    meta: dict[str, str] = field(default_factory=dict)
    response: httpx.Response | None = field(default=None, repr=False)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "JsonResult":
        """Decode a response body; an empty body decodes to None.

        Raises:
            ValueError: If the body is not valid JSON.
        """
        data = response.json() if response.text else None
        meta = {name: response.headers[name] for name in META_HEADERS if name in response.headers}
        return cls(data=data, meta=meta, response=response)


async def forward(
    api: ApiVersion, message: MutableMapping[str, Any], route: RouteDefinition, completion: Completion
) -> None:
    """Send the request and deliver the raw ``httpx.Response``."""
    await api.http_send(message, route, completion)


async def json_forward(
    api: ApiVersion, message: MutableMapping[str, Any], route: RouteDefinition, completion: Completion
) -> None:
    """Send the request and deliver a :class:`JsonResult`."""
    inner = Completion()
    await api.http_send(message, route, inner)
    if inner.error is not None:
        await api.send_error(inner.error, route, message, completion)
        return

    response: httpx.Response = inner.result
    try:
        result = JsonResult.from_response(response)
    except ValueError as e:
        logger.warning(f"Route '{route.path}' returned a body that is not JSON: {e}")
        error = HttpError(
            f"Invalid JSON in response body: {e}",
            body=response.text,
            status_code=response.status_code,
            response=response,
        )
        await api.send_error(error, route, message, completion)
        return
    completion.deliver(result=result)


def register_api_version(cls: type[ApiVersion]) -> type[ApiVersion]:
    """Class decorator making an API version available by its ``version`` string."""
    if not cls.version:
        raise SchemaError(f"API version class {cls.__name__} does not declare a version")
    _API_VERSIONS[cls.version] = cls
    return cls


def get_api_version(version: str) -> type[ApiVersion]:
    """Look up a registered API version.

    Raises:
        SchemaError: If no API version is registered under ``version``.
    """
    try:
        return _API_VERSIONS[version]
    except KeyError:
        raise SchemaError(f"Unsupported API version '{version}'") from None
