"""Immutable, resolved views of a route schema."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class ParamRule:
    """Validation and coercion contract for one named parameter."""

    required: bool = False
    allow_empty: bool = False
    type: str | None = None
    validation: str | None = None
    combined: bool = False
    description: str | None = None

    @classmethod
    def from_schema(cls, data: Mapping[str, Any] | None) -> "ParamRule":
        data = data or {}
        param_type = data.get("type")
        return cls(
            required=bool(data.get("required", False)),
            allow_empty=bool(data.get("allow-empty", False)),
            type=param_type.lower() if isinstance(param_type, str) and param_type else None,
            validation=data.get("validation") or None,
            combined=bool(data.get("combined", False)),
            description=data.get("description"),
        )


@dataclass(frozen=True, slots=True)
class SchemaConstants:
    """Global defaults from ``defines.constants``."""

    protocol: str | None = None
    host: str | None = None
    port: int | None = None
    request_media: str | None = None
    request_format: str | None = None

    @classmethod
    def from_schema(cls, data: Mapping[str, Any] | None) -> "SchemaConstants":
        data = data or {}
        port = data.get("port")
        return cls(
            protocol=data.get("protocol"),
            host=data.get("host"),
            port=int(port) if port else None,
            request_media=data.get("requestMedia"),
            request_format=data.get("requestFormat"),
        )


@dataclass(frozen=True, slots=True)
class SchemaDefines:
    """The ``defines`` block: constants, reusable params and global header allow-list."""

    constants: SchemaConstants = field(default_factory=SchemaConstants)
    params: Mapping[str, ParamRule] = field(default_factory=lambda: MappingProxyType({}))
    request_headers: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """One terminal route with every ``$`` reference already resolved.

    ``path`` is the slash-joined position in the schema tree, e.g.
    ``"repos/get-all"``. ``request_headers`` is the effective allow-list:
    route headers followed by the global ones, all lower-cased.
    """

    path: str
    namespace: str
    name: str
    url: str
    method: str
    params: Mapping[str, ParamRule]
    request_format: str | None = None
    request_headers: tuple[str, ...] = ()
    has_file_body: bool = False
    timeout: float | None = None
    host: str | None = None
    source: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), repr=False)


@dataclass(frozen=True, slots=True)
class ResolvedSchema:
    """A fully resolved schema: the defines plus every terminal route in tree order."""

    defines: SchemaDefines
    routes: tuple[RouteDefinition, ...]
