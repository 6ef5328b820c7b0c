"""Route client facade.

Ties an API version, its compiled routes, authentication settings and one
``httpx.AsyncClient`` together.

Example:
    ```python
    config = ClientConfig(version="3.0.0", protocol="https", timeout=5000)
    async with RouteClient(config) as client:
        client.authenticate(AuthContext.bearer_token(token))
        repos = await client.repos.getAll({"user": "octocat", "per_page": "50"})
        same_namespace = client.getReposApi()
    ```
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from route_client_core.api.base import ApiVersion, get_api_version
from route_client_core.auth.context import AuthContext
from route_client_core.config import ClientConfig
from route_client_core.schema.compiler import Namespace, RouteTable, compile_routes
from route_client_core.schema.models import RouteDefinition
from route_client_core.schema.resolver import resolve_schema
from route_client_core.transport.completion import Completion
from route_client_core.transport.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "route_client_core"


class RouteClient:
    """Client exposing one compiled API version.

    Namespaces are attributes (``client.repos``) and each has a
    ``get<Namespace>Api()`` accessor. Routes are compiled once, here; a
    schema that does not match the API version raises ``SchemaError``.

    Args:
        config: Client configuration. A mapping is accepted as well.
        api_class: API version to compile. Defaults to the version
            registered under ``config.version``.
        http_client: Pre-built ``httpx.AsyncClient``; the caller keeps
            ownership of it.
        transport: httpx transport for the client this instance builds,
            e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        config: ClientConfig | Mapping[str, Any] | None = None,
        *,
        api_class: type[ApiVersion] | None = None,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if config is None:
            config = ClientConfig()
        elif not isinstance(config, ClientConfig):
            config = ClientConfig.from_mapping(config)
        self.config = config

        if self.config.debug:
            logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

        if api_class is None:
            api_class = get_api_version(self.config.version)
        self.api = api_class(self)
        self.version = api_class.version

        resolved = resolve_schema(api_class.routes)
        self.constants = resolved.defines.constants
        self.routes: RouteTable = compile_routes(resolved, self.api)

        self._owns_http = http_client is None
        if http_client is None:
            verify = True if self.config.reject_unauthorized is None else self.config.reject_unauthorized
            http_client = httpx.AsyncClient(timeout=None, verify=verify, trust_env=False, transport=transport)
        self._http = http_client
        self._dispatcher = Dispatcher(self.config, resolved.defines, self._http)
        self.auth: AuthContext | None = None

    def authenticate(self, auth: AuthContext | None) -> None:
        """Set (or with None, clear) the credentials used for every call."""
        self.auth = auth if auth is not None and auth.enabled else None
        logger.debug(f"Authentication set to {auth.type if self.auth else 'none'}")

    async def http_send(self, message: Mapping[str, Any], route: RouteDefinition, completion: Completion) -> None:
        await self._dispatcher.send(message, route, completion, auth=self.auth)

    def namespace(self, name: str) -> Namespace:
        return self.routes.namespace(name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name == "routes":
            raise AttributeError(name)
        if name in self.routes:
            return self.routes.namespace(name)
        accessor = self.routes.accessor(name)
        if accessor is not None:
            return accessor
        raise AttributeError(f"{type(self).__name__} has no namespace or accessor '{name}'")

    def __dir__(self) -> list[str]:
        return [*super().__dir__(), *self.routes.namespaces, *self.routes.accessor_names]

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "RouteClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
