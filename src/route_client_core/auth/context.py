"""Authentication settings and their injection into outbound requests."""

import base64
from dataclasses import dataclass
from typing import Literal

from route_client_core.auth.exceptions import InvalidAuthError
from route_client_core.utils import encode_uri_component

AuthType = Literal["none", "basic", "oauth", "token"]


@dataclass(frozen=True, slots=True)
class AuthContext:
    """Validated authentication settings.

    Build through the named constructors; combinations that cannot
    authenticate raise :class:`InvalidAuthError` immediately.

    Example:
        ```python
        auth = AuthContext.basic("octocat", "s3cret")
        auth = AuthContext.oauth(token="abc123")
        auth = AuthContext.oauth(key="client-id", secret="client-secret")
        auth = AuthContext.bearer_token("abc123")
        ```
    """

    type: AuthType = "none"
    username: str | None = None
    password: str | None = None
    token: str | None = None
    key: str | None = None
    secret: str | None = None

    def __post_init__(self) -> None:
        if self.type not in ("none", "basic", "oauth", "token"):
            raise InvalidAuthError("Invalid authentication type, must be 'basic', 'oauth' or 'token'")
        if self.type == "basic" and (not self.username or not self.password):
            raise InvalidAuthError("Basic authentication requires both a username and password to be set")
        if self.type == "oauth" and not self.token and not (self.key and self.secret):
            raise InvalidAuthError("OAuth2 authentication requires a token or key & secret to be set")
        if self.type == "token" and not self.token:
            raise InvalidAuthError("Token authentication requires a token to be set")

    @classmethod
    def none(cls) -> "AuthContext":
        return cls()

    @classmethod
    def basic(cls, username: str, password: str) -> "AuthContext":
        return cls(type="basic", username=username, password=password)

    @classmethod
    def oauth(cls, token: str | None = None, key: str | None = None, secret: str | None = None) -> "AuthContext":
        return cls(type="oauth", token=token, key=key, secret=secret)

    @classmethod
    def bearer_token(cls, token: str) -> "AuthContext":
        return cls(type="token", token=token)

    @property
    def enabled(self) -> bool:
        return self.type != "none"


def apply_auth(auth: AuthContext | None, path: str, headers: dict[str, str]) -> str:
    """Inject credentials into a request.

    OAuth credentials go on the query string; token and basic auth set the
    ``authorization`` header in place.

    Args:
        auth: Authentication settings, or None for anonymous calls.
        path: Request path, possibly already carrying a query string.
        headers: Lower-cased request headers, updated in place.

    Returns:
        The request path, extended with OAuth query parameters if needed.
    """
    if auth is None or not auth.enabled:
        return path

    separator = "&" if "?" in path else "?"
    if auth.type == "oauth":
        if auth.token:
            return f"{path}{separator}access_token={encode_uri_component(auth.token)}"
        return (
            f"{path}{separator}client_id={encode_uri_component(auth.key)}"
            f"&client_secret={encode_uri_component(auth.secret)}"
        )
    if auth.type == "token":
        headers["authorization"] = f"token {auth.token}"
    elif auth.type == "basic":
        credentials = base64.b64encode(f"{auth.username}:{auth.password}".encode()).decode("ascii")
        headers["authorization"] = f"Basic {credentials}"
    return path
