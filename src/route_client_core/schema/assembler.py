"""Translate validated parameters into a URL and a query or body payload."""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from route_client_core.schema.models import RouteDefinition, SchemaDefines
from route_client_core.utils import encode_uri_component, to_json, to_text

if TYPE_CHECKING:
    from route_client_core.config import ClientConfig

logger = logging.getLogger(__name__)

BODYLESS_METHODS = frozenset(["HEAD", "GET", "DELETE"])

_COMBINED_SEPARATOR = re.compile(r"\s*\+\s*")


@dataclass(slots=True)
class AssembledRequest:
    """Final route URL plus the payload in its format-specific shape.

    ``query`` is a dict for ``json``, the raw payload for ``raw`` and an
    ordered list of ``name=value`` strings otherwise.
    """

    url: str
    query: Any


def has_body(route: RouteDefinition) -> bool:
    return not route.has_file_body and route.method.upper() not in BODYLESS_METHODS


def request_format(route: RouteDefinition, defines: SchemaDefines) -> str:
    """Pick the encoding for a route's parameters.

    Bodyless methods and file uploads always use ``query``.
    """
    if not has_body(route):
        return "query"
    return route.request_format or defines.constants.request_format or "json"


def _placeholder(name: str) -> re.Pattern[str]:
    return re.compile(rf":{re.escape(name)}(?![A-Za-z0-9_])")


def build_url_and_query(
    message: Mapping[str, Any],
    route: RouteDefinition,
    fmt: str,
    config: "ClientConfig | None" = None,
) -> AssembledRequest:
    """Substitute path parameters and encode the rest according to ``fmt``.

    Parameters that cannot be serialized are logged and dropped.

    Args:
        message: Validated message.
        route: Route being called.
        fmt: One of ``json``, ``form``, ``query`` or ``raw``.
        config: Client configuration, used for the path prefix.

    Returns:
        AssembledRequest with the final URL and payload.
    """
    url = route.url
    path_prefix = config.path_prefix if config is not None else None
    if path_prefix and not url.startswith(path_prefix):
        url = path_prefix + url

    if fmt == "json":
        query: Any = {}
    elif fmt == "raw":
        query = message.get("data")
        if isinstance(query, (dict, list, tuple)):
            try:
                to_json(query)
            except (TypeError, ValueError) as e:
                logger.warning(f"Dropping parameter 'data' for route '{route.path}': cannot serialize value ({e})")
                query = None
    else:
        query = []

    for name, rule in route.params.items():
        value = message.get(name)
        if value is None:
            continue

        placeholder = _placeholder(name)
        is_url_param = placeholder.search(url) is not None

        try:
            if is_url_param or fmt != "json":
                encoded = _encode_value(value, combined=rule.combined)
            else:
                # Body values are serialized later, all at once; fail here instead
                to_json(value)
                encoded = value
        except (TypeError, ValueError) as e:
            logger.warning(f"Dropping parameter '{name}' for route '{route.path}': cannot serialize value ({e})")
            continue

        if is_url_param:
            url = placeholder.sub(lambda _m: encoded, url, count=1)
        elif fmt == "json":
            query[name] = encoded
        elif fmt != "raw":
            query.append(f"{name}={encoded}")

    return AssembledRequest(url=url, query=query)


def _encode_value(value: Any, combined: bool = False) -> str:
    if isinstance(value, (dict, list, tuple)):
        return encode_uri_component(to_json(value))
    if combined:
        terms = _COMBINED_SEPARATOR.split(to_text(value))
        return "+".join(encode_uri_component(term) for term in terms)
    return encode_uri_component(value)
