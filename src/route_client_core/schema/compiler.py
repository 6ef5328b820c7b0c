"""Route compiler: resolved schema in, table of callable endpoints out.

Compilation is a two-phase build. The namespaces and functions the API
version implements are enumerated first; every terminal route of the
schema is then attached to that pre-declared structure as a
:class:`CompiledEndpoint`. A route that names an unknown namespace or an
unimplemented function stops compilation with :class:`SchemaError`, so a
client never starts with a partially wired surface.

Example:
    ```python
    table = compile_routes(resolve_schema(MyApi.routes), api)
    repos = table.namespace("repos")
    response = await repos.getAll({"user": "octocat"})
    ```
"""

import json
import logging
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from route_client_core.errors.exceptions import BadRequestError, SchemaError
from route_client_core.schema.models import ResolvedSchema, RouteDefinition
from route_client_core.schema.validator import validate_params
from route_client_core.transport.completion import Callback, Completion

if TYPE_CHECKING:
    from route_client_core.api.base import ApiVersion, Implementation

logger = logging.getLogger(__name__)


class CompiledEndpoint:
    """A callable endpoint bound to its route and implementation.

    Calling it validates the message, then hands it to the implementation.
    A validation failure goes to the API version's ``send_error`` and the
    implementation is never invoked.
    """

    __slots__ = ("api", "route", "implementation")

    def __init__(self, api: "ApiVersion", route: RouteDefinition, implementation: "Implementation") -> None:
        self.api = api
        self.route = route
        self.implementation = implementation

    @property
    def namespace(self) -> str:
        return self.route.namespace

    @property
    def name(self) -> str:
        return self.route.name

    async def __call__(self, message: MutableMapping[str, Any] | None = None, callback: Callback | None = None) -> Any:
        """Run the call.

        Args:
            message: Parameter values; validated and coerced in place.
            callback: Optional ``callback(error, result)``, invoked exactly
                once. When given, errors are delivered to it instead of
                being raised.

        Returns:
            The result delivered by the implementation.

        Raises:
            APIError: The delivered error, when no callback was given.
        """
        message = {} if message is None else message
        completion = Completion(callback)
        try:
            validate_params(message, self.route.params)
        except BadRequestError as e:
            logger.warning(f"Rejected call to '{self.route.path}': {e}")
            await self.api.send_error(e, self.route, message, completion)
            return completion.outcome()

        await self.implementation(self.api, message, self.route, completion)
        return completion.outcome()

    def __repr__(self) -> str:
        return f"<CompiledEndpoint {self.namespace}.{self.name} {self.route.method} {self.route.url}>"


class Namespace:
    """Read-only group of endpoints, reachable by item or attribute access.

    Endpoints named ``get``, ``keys``, ``items`` or ``values`` must stay
    reachable as attributes, so the endpoints are its only public attributes.
    """

    __slots__ = ("_name", "_endpoints")

    def __init__(self, name: str, endpoints: Mapping[str, CompiledEndpoint]) -> None:
        self._name = name
        self._endpoints = MappingProxyType(dict(endpoints))

    def __getitem__(self, key: str) -> CompiledEndpoint:
        return self._endpoints[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._endpoints)

    def __len__(self) -> int:
        return len(self._endpoints)

    def __contains__(self, key: object) -> bool:
        return key in self._endpoints

    def __getattr__(self, key: str) -> CompiledEndpoint:
        if key.startswith("_"):
            raise AttributeError(key)
        try:
            return self._endpoints[key]
        except KeyError:
            raise AttributeError(f"Namespace '{self._name}' has no endpoint '{key}'") from None

    def __repr__(self) -> str:
        return f"<Namespace {self._name}: {', '.join(self._endpoints)}>"


class RouteTable:
    """Compiled surface of an API version, fixed once built."""

    def __init__(self, namespaces: Mapping[str, Namespace]) -> None:
        self._namespaces = MappingProxyType(dict(namespaces))
        self._accessors = MappingProxyType({accessor_name(name): name for name in self._namespaces})

    @property
    def namespaces(self) -> Mapping[str, Namespace]:
        return self._namespaces

    def namespace(self, name: str) -> Namespace:
        return self._namespaces[name]

    def get(self, namespace: str, name: str) -> CompiledEndpoint | None:
        section = self._namespaces.get(namespace)
        if section is None or name not in section:
            return None
        return section[name]

    def accessor(self, name: str) -> Callable[[], Namespace] | None:
        """Return the ``get<Namespace>Api`` function named ``name``, if any."""
        namespace = self._accessors.get(name)
        if namespace is None:
            return None
        return lambda: self._namespaces[namespace]

    @property
    def accessor_names(self) -> tuple[str, ...]:
        return tuple(self._accessors)

    def endpoints(self) -> Iterator[CompiledEndpoint]:
        for section in self._namespaces.values():
            for name in section:
                yield section[name]

    def __contains__(self, name: object) -> bool:
        return name in self._namespaces

    def __len__(self) -> int:
        return sum(len(section) for section in self._namespaces.values())


def accessor_name(namespace: str) -> str:
    """``"pullRequests"`` -> ``"getPullRequestsApi"``."""
    # Keeps the namespace's inner capitals; camel-casing "get-pullRequests-api"
    # would flatten them to "getPullrequestsApi".
    return f"get{namespace[:1].upper()}{namespace[1:]}Api"


def compile_routes(resolved: ResolvedSchema, api: "ApiVersion") -> RouteTable:
    """Attach every resolved route to its implementation.

    Args:
        resolved: Output of :func:`resolve_schema`.
        api: The API version providing implementations.

    Returns:
        RouteTable holding one namespace per section that received routes.

    Raises:
        SchemaError: If a route's namespace or function is not implemented.
    """
    declared = {name: dict(functions) for name, functions in api.sections.items()}
    attached: dict[str, dict[str, CompiledEndpoint]] = {name: {} for name in declared}

    for route in resolved.routes:
        implementations = declared.get(route.namespace)
        if implementations is None:
            raise SchemaError(
                f"Unsupported route section, not implemented in version {api.version} "
                f"for route '{route.path}' and block: {_describe(route)}",
                route=route.path,
            )
        implementation = implementations.get(route.name)
        if implementation is None:
            logger.debug(f"No implementation for {route.namespace}.{route.name}")
            raise SchemaError(
                f"Unsupported route, not implemented in version {api.version} "
                f"for route '{route.path}' and block: {_describe(route)}",
                route=route.path,
            )
        attached[route.namespace][route.name] = CompiledEndpoint(api, route, implementation)

    table = RouteTable({name: Namespace(name, endpoints) for name, endpoints in attached.items() if endpoints})
    logger.debug(f"Compiled {len(table)} endpoints in {len(table.namespaces)} namespaces for version {api.version}")
    return table


def _describe(route: RouteDefinition) -> str:
    return json.dumps(_plain(route.source), default=str)


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    return value
