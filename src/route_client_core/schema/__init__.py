"""Route schema handling: resolution, compilation, validation and request assembly."""

from route_client_core.schema.assembler import AssembledRequest, build_url_and_query, request_format
from route_client_core.schema.compiler import CompiledEndpoint, Namespace, RouteTable, compile_routes
from route_client_core.schema.models import ParamRule, ResolvedSchema, RouteDefinition, SchemaConstants, SchemaDefines
from route_client_core.schema.resolver import resolve_schema, split_route_path
from route_client_core.schema.validator import validate_params

__all__ = [
    "AssembledRequest",
    "CompiledEndpoint",
    "Namespace",
    "ParamRule",
    "ResolvedSchema",
    "RouteDefinition",
    "RouteTable",
    "SchemaConstants",
    "SchemaDefines",
    "build_url_and_query",
    "compile_routes",
    "request_format",
    "resolve_schema",
    "split_route_path",
    "validate_params",
]
