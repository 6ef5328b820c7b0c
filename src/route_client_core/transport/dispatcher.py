"""Outbound request construction and dispatch.

The dispatcher turns a validated message and its route into one HTTP
request, sends it through an ``httpx.AsyncClient`` and delivers a single
classified outcome to the call's :class:`Completion`.

Request construction (``prepare``) is synchronous and side-effect free;
only the file-body stat, the file stream and the socket exchange suspend.

Example:
    ```python
    dispatcher = Dispatcher(config, resolved.defines, httpx.AsyncClient(timeout=None))
    completion = Completion()
    await dispatcher.send({"user": "octocat"}, route, completion, auth=auth)
    response = completion.outcome()
    ```
"""

import logging
import mimetypes
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

import anyio
import httpx

from route_client_core import __version__
from route_client_core.auth.context import AuthContext, apply_auth
from route_client_core.config import ClientConfig
from route_client_core.errors.exceptions import BadRequestError, GatewayTimeoutError, TransportError
from route_client_core.errors.handler import error_for_status
from route_client_core.schema.assembler import build_url_and_query, has_body, request_format
from route_client_core.schema.models import RouteDefinition, SchemaDefines
from route_client_core.transport.completion import Completion
from route_client_core.utils import to_json, to_text

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"route-client-core/{__version__}"
FILE_CHUNK_SIZE = 64 * 1024

CONTENT_TYPES = {
    "json": "application/json; charset=utf-8",
    "raw": "text/plain; charset=utf-8",
    "form": "application/x-www-form-urlencoded; charset=utf-8",
}

_MASKED_QUERY_KEYS = ("access_token=", "client_secret=")


@dataclass(slots=True)
class OutboundRequest:
    """Everything needed to put one request on the wire.

    ``host``/``port``/``protocol`` name the machine the request is sent to,
    which is the proxy when ``proxied`` is set. ``path`` is the request
    target: an absolute URL when proxied, an origin-relative path otherwise.
    """

    method: str
    protocol: str
    host: str
    port: int
    path: str
    headers: dict[str, str]
    body: bytes = b""
    proxied: bool = False
    timeout: float | None = None
    file_path: str | None = field(default=None, repr=False)

    @property
    def origin(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"


def default_port(protocol: str) -> int:
    return 443 if protocol == "https" else 80


class Dispatcher:
    """Build, send and classify requests for compiled routes.

    Args:
        config: Client configuration (read-only).
        defines: Resolved schema defines, for constants.
        http_client: The ``httpx.AsyncClient`` requests are sent with.
    """

    def __init__(self, config: ClientConfig, defines: SchemaDefines, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._defines = defines
        self._http = http_client

    def prepare(
        self,
        message: Mapping[str, Any],
        route: RouteDefinition,
        auth: AuthContext | None = None,
    ) -> OutboundRequest:
        """Assemble the outbound request for a validated message."""
        config = self._config
        constants = self._defines.constants
        body_allowed = has_body(route)
        fmt = request_format(route, self._defines)
        assembled = build_url_and_query(message, route, fmt, config)
        query = assembled.query

        path = f"{config.url}{assembled.url}" if config.url else assembled.url
        protocol = config.protocol or constants.protocol or "http"
        host = route.host or config.host or constants.host
        port = config.port or constants.port or default_port(protocol)

        proxy_url = config.resolve_proxy()
        if proxy_url:
            path = f"{protocol}://{host}:{port}{path}"
            if not proxy_url.startswith(("http://", "https://")):
                proxy_url = f"https://{proxy_url}"
            parsed = urlsplit(proxy_url)
            protocol = parsed.scheme
            host = parsed.hostname
            port = parsed.port or default_port(protocol)

        if not body_allowed and query:
            path += "?" + "&".join(query)

        headers = {"host": host, "content-length": "0"}
        body = b""
        if body_allowed:
            if fmt == "json":
                payload = to_json(query)
            elif fmt == "raw":
                payload = query if isinstance(query, (bytes, bytearray)) else to_text(query or "")
            else:
                payload = "&".join(query)
            body = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
            headers["content-length"] = str(len(body))
            headers["content-type"] = CONTENT_TYPES.get(fmt, CONTENT_TYPES["form"])

        path = apply_auth(auth, path, headers)

        # Client-level headers override caller headers of the same name
        custom_headers = {**(message.get("headers") or {}), **config.headers}
        allowed = set(route.request_headers)
        for name, value in custom_headers.items():
            if name.lower() in allowed:
                headers[name.lower()] = str(value)

        headers.setdefault("user-agent", DEFAULT_USER_AGENT)
        if "accept" not in headers:
            accept = config.request_media or constants.request_media
            if accept:
                headers["accept"] = accept

        timeout = route.timeout if route.timeout is not None else config.timeout

        return OutboundRequest(
            method=route.method.upper(),
            protocol=protocol,
            host=host,
            port=int(port),
            path=path,
            headers=headers,
            body=body,
            proxied=bool(proxy_url),
            timeout=timeout or None,
            file_path=message.get("filePath") if route.has_file_body else None,
        )

    async def send(
        self,
        message: Mapping[str, Any],
        route: RouteDefinition,
        completion: Completion,
        auth: AuthContext | None = None,
    ) -> None:
        """Dispatch one call and deliver its outcome to ``completion``."""
        outbound = self.prepare(message, route, auth)

        if route.has_file_body:
            if not outbound.file_path:
                completion.deliver(error=BadRequestError("Missing 'filePath' for file upload", param="filePath"))
                return
            try:
                stat = await anyio.Path(outbound.file_path).stat()
            except OSError as e:
                completion.deliver(error=TransportError(f"Cannot read file body '{outbound.file_path}': {e}"))
                return
            outbound.headers["content-length"] = str(stat.st_size)
            content_type, _ = mimetypes.guess_type(str(message.get("name") or outbound.file_path))
            outbound.headers["content-type"] = content_type or "application/octet-stream"

        await self._perform(outbound, completion)

    def build_request(self, outbound: OutboundRequest) -> httpx.Request:
        """Convert an outbound request into an ``httpx.Request``.

        Proxied requests are addressed to the proxy origin and carry the
        absolute target URL as their request target.
        """
        kwargs: dict[str, Any] = {"headers": outbound.headers}
        if outbound.file_path:
            kwargs["content"] = _stream_file(outbound.file_path)
        elif outbound.body:
            kwargs["content"] = outbound.body
        if outbound.timeout:
            kwargs["timeout"] = httpx.Timeout(outbound.timeout / 1000)

        if outbound.proxied:
            kwargs["extensions"] = {"target": outbound.path.encode("utf-8")}
            url = f"{outbound.origin}/"
        else:
            url = f"{outbound.origin}{outbound.path}"
        return self._http.build_request(outbound.method, url, **kwargs)

    async def _perform(self, outbound: OutboundRequest, completion: Completion) -> None:
        logger.debug(
            f"REQUEST: {outbound.method} {outbound.origin} {_mask_path(outbound.path)} "
            f"headers={_mask_headers(outbound.headers)}"
        )
        if outbound.body:
            logger.debug(f"REQUEST BODY: {outbound.body[:500]!r}")

        request = self.build_request(outbound)
        try:
            response = await self._http.send(request)
        except httpx.TimeoutException as e:
            logger.warning(f"Request {outbound.method} {_mask_path(outbound.path)} timed out: {e}")
            completion.deliver(error=GatewayTimeoutError())
            return
        except (httpx.RequestError, OSError) as e:
            logger.warning(f"Request {outbound.method} {_mask_path(outbound.path)} failed: {e}")
            completion.deliver(error=TransportError(str(e) or e.__class__.__name__))
            return

        logger.debug(f"STATUS: {response.status_code}")
        logger.debug(f"HEADERS: {dict(response.headers)}")

        error = error_for_status(response)
        if error is not None:
            completion.deliver(error=error)
        else:
            completion.deliver(result=response)


async def _stream_file(path: str) -> AsyncIterator[bytes]:
    async with await anyio.open_file(path, "rb") as f:
        while chunk := await f.read(FILE_CHUNK_SIZE):
            yield chunk


def _mask_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {k: ("***" if k == "authorization" else v) for k, v in headers.items()}


def _mask_path(path: str) -> str:
    for key in _MASKED_QUERY_KEYS:
        start = path.find(key)
        if start != -1:
            end = path.find("&", start)
            path = path[: start + len(key)] + "***" + (path[end:] if end != -1 else "")
    return path
