"""Authentication components for route clients.

- AuthContext: validated none/basic/oauth/token settings
- apply_auth: injects credentials into an outbound request
- CredentialResolver: explicit value -> env -> .env -> default resolution

Example:
    ```python
    from route_client_core.auth import AuthContext, CredentialResolver

    client.authenticate(AuthContext.bearer_token("abc123"))
    client.authenticate(CredentialResolver().resolve_auth(prefix="GITHUB"))
    ```
"""

from route_client_core.auth.context import AuthContext, apply_auth
from route_client_core.auth.credentials import CredentialResolver
from route_client_core.auth.exceptions import (
    CredentialError,
    CredentialNotFoundError,
    InvalidAuthError,
)

__all__ = [
    "AuthContext",
    "CredentialError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "InvalidAuthError",
    "apply_auth",
]
