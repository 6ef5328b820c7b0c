"""Route schema resolution.

Walks the nested route schema once and produces a :class:`ResolvedSchema`:
every terminal route becomes a :class:`RouteDefinition` whose ``$name``
parameter references have been replaced by the matching rule from
``defines.params``. The input mapping is only read, never modified, so the
same schema can be resolved any number of times.

Example:
    ```python
    schema = {
        "defines": {
            "constants": {"protocol": "https", "host": "api.example.com"},
            "params": {"page": {"type": "Number"}},
            "request-headers": ["If-None-Match"],
        },
        "repos": {
            "get-all": {
                "url": "/users/:user/repos",
                "method": "GET",
                "params": {"user": {"required": True}, "$page": None},
            }
        },
    }
    resolved = resolve_schema(schema)
    resolved.routes[0].params["page"].type  # "number"
    ```
"""

import copy
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from route_client_core.errors.exceptions import SchemaError
from route_client_core.schema.models import (
    ParamRule,
    ResolvedSchema,
    RouteDefinition,
    SchemaConstants,
    SchemaDefines,
)
from route_client_core.utils import to_camel_case

logger = logging.getLogger(__name__)

DEFINES_KEY = "defines"


def resolve_schema(schema: Mapping[str, Any]) -> ResolvedSchema:
    """Resolve a route schema into immutable route definitions.

    Args:
        schema: The nested route schema, including its ``defines`` block.

    Returns:
        ResolvedSchema with the parsed defines and all terminal routes.

    Raises:
        SchemaError: If a ``$`` parameter reference has no entry in
            ``defines.params``.
    """
    defines = _parse_defines(schema.get(DEFINES_KEY) or {})
    routes = tuple(
        _resolve_route(path, block, defines)
        for path, block in _walk({k: v for k, v in schema.items() if k != DEFINES_KEY})
    )
    logger.debug(f"Resolved {len(routes)} routes from schema")
    return ResolvedSchema(defines=defines, routes=routes)


def is_terminal(block: Mapping[str, Any]) -> bool:
    """A node is a route definition iff it carries both a url and params."""
    return bool(block.get("url")) and isinstance(block.get("params"), Mapping)


def split_route_path(path: str) -> tuple[str, str]:
    """Derive ``(namespace, function name)`` from a route path.

    The first segment names the namespace; the remaining segments are
    hyphen-joined into the function name. Both are camel-cased, so
    ``"pull-requests/get-comments"`` gives ``("pullRequests", "getComments")``.
    """
    parts = path.split("/")
    namespace = to_camel_case(parts[0].lower())
    return namespace, to_camel_case("-".join(parts[1:]))


def _walk(struct: Mapping[str, Any], base: str = "") -> Iterator[tuple[str, Mapping[str, Any]]]:
    for part, block in struct.items():
        if not block or not isinstance(block, Mapping):
            continue
        path = f"{base}/{part}" if base else part
        if is_terminal(block):
            yield path, block
        else:
            yield from _walk(block, path)


def _parse_defines(data: Mapping[str, Any]) -> SchemaDefines:
    params = {name: ParamRule.from_schema(rule) for name, rule in (data.get("params") or {}).items()}
    return SchemaDefines(
        constants=SchemaConstants.from_schema(data.get("constants")),
        params=MappingProxyType(params),
        request_headers=tuple(header.lower() for header in data.get("request-headers") or ()),
    )


def _resolve_params(path: str, params: Mapping[str, Any], defines: SchemaDefines) -> dict[str, ParamRule]:
    resolved: dict[str, ParamRule] = {}
    for name, rule in params.items():
        if name.startswith("$"):
            name = name[1:]
            if name not in defines.params:
                raise SchemaError(
                    f"Invalid variable parameter name substitution; param '{name}' "
                    f"not found in defines block (route '{path}')",
                    route=path,
                )
            resolved[name] = defines.params[name]
        else:
            resolved[name] = ParamRule.from_schema(rule)
    return resolved


def _resolve_route(path: str, block: Mapping[str, Any], defines: SchemaDefines) -> RouteDefinition:
    namespace, name = split_route_path(path)
    route_headers = tuple(header.lower() for header in block.get("request-headers") or ())
    timeout = block.get("timeout")
    return RouteDefinition(
        path=path,
        namespace=namespace,
        name=name,
        url=block["url"],
        method=str(block.get("method") or "GET").upper(),
        params=MappingProxyType(_resolve_params(path, block["params"], defines)),
        request_format=block.get("requestFormat"),
        request_headers=route_headers + defines.request_headers,
        has_file_body=bool(block.get("hasFileBody", False)),
        timeout=float(timeout) if timeout is not None else None,
        host=block.get("host"),
        source=MappingProxyType(copy.deepcopy(dict(block))),
    )
