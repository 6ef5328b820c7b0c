"""Client configuration.

Configuration is read-only once the client is built; dispatch never writes
back into it.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from route_client_core.utils import is_true

PROXY_ENV_VARS = ("HTTPS_PROXY", "HTTP_PROXY")


@dataclass(frozen=True)
class ClientConfig:
    """Settings for a :class:`~route_client_core.client.RouteClient`.

    Attributes:
        version: API version whose routes should be compiled.
        url: Prefix prepended to every route URL (after the path prefix).
        host: Target host; a route's own host wins over it.
        port: Target port. Defaults to 443 for https, 80 otherwise.
        protocol: ``http`` or ``https``.
        proxy: Upstream proxy URL. None falls back to ``HTTPS_PROXY`` /
            ``HTTP_PROXY``; an empty string disables proxying.
        path_prefix: Prefix for route URLs, normalised to ``/prefix``.
        timeout: Request timeout in milliseconds; a route timeout wins.
        reject_unauthorized: TLS certificate verification toggle.
        headers: Client-level headers, filtered per route like caller headers.
        request_media: Default ``accept`` header.
        debug: Emit request and response traces at DEBUG level.
    """

    version: str | None = None
    url: str | None = None
    host: str | None = None
    port: int | None = None
    protocol: str | None = None
    proxy: str | None = None
    path_prefix: str | None = None
    timeout: float | None = None
    reject_unauthorized: bool | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    request_media: str | None = None
    debug: bool = False

    def __post_init__(self) -> None:
        if self.path_prefix is not None:
            object.__setattr__(self, "path_prefix", normalize_path_prefix(self.path_prefix))
        object.__setattr__(self, "debug", is_true(self.debug))
        object.__setattr__(self, "headers", dict(self.headers or {}))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClientConfig":
        """Build a config from a plain mapping, accepting camelCase keys.

        ``pathPrefix``, ``rejectUnauthorized`` and ``requestMedia`` map to
        their snake_case attributes; unknown keys are ignored.
        """
        aliases = {
            "pathPrefix": "path_prefix",
            "rejectUnauthorized": "reject_unauthorized",
            "requestMedia": "request_media",
        }
        known = set(cls.__dataclass_fields__)
        kwargs = {}
        for key, value in data.items():
            name = aliases.get(key, key)
            if name in known:
                kwargs[name] = value
        if kwargs.get("port") is not None:
            kwargs["port"] = int(kwargs["port"])
        return cls(**kwargs)

    def resolve_proxy(self) -> str | None:
        """Return the proxy to use: explicit setting first, then the environment."""
        if self.proxy is not None:
            return self.proxy or None
        for name in PROXY_ENV_VARS:
            value = os.environ.get(name)
            if value:
                return value
        return None


def normalize_path_prefix(prefix: str) -> str:
    """``"api/v3/"`` and ``"//api/v3"`` both become ``"/api/v3"``."""
    return "/" + prefix.strip("/")
