"""Credential resolution for route clients.

Credentials are looked up in priority order:

1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv, loaded into the environment once)
4. Default value

Values are never logged; only the source they came from is.

Example:
    ```python
    from route_client_core.auth import CredentialResolver

    resolver = CredentialResolver()
    auth = resolver.resolve_auth(prefix="GITHUB")
    # GITHUB_TOKEN=...            -> AuthContext(type="token")
    # GITHUB_USERNAME/_PASSWORD   -> AuthContext(type="basic")
    ```
"""

import logging
import os
from threading import Lock

from dotenv import load_dotenv

from route_client_core.auth.context import AuthContext
from route_client_core.auth.exceptions import CredentialNotFoundError

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Resolve credentials and authentication settings from several sources.

    Args:
        dotenv_path: Path to a .env file. None lets python-dotenv search
            parent directories.
        load_dotenv: Set to False to skip .env loading entirely.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        if load_dotenv:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return
        with self._dotenv_lock:
            if self._dotenv_loaded:
                return
            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Resolve a single credential; the first source that has it wins.

        Raises:
            CredentialNotFoundError: If ``required`` and nothing was found.
        """
        if value is not None:
            result, source = value, "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result, source = os.environ[env_var_name], f"environment variable '{env_var_name}'"
        else:
            result, source = default, "default value"

        if result is not None:
            logger.debug(f"Resolved credential from {source}: ***")
        elif required:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)
        return result

    def resolve_auth(self, prefix: str) -> AuthContext:
        """Build authentication settings from ``<PREFIX>_*`` variables.

        Checked in order, the first complete set wins:

        - ``<PREFIX>_TOKEN`` -> token auth
        - ``<PREFIX>_OAUTH_TOKEN`` -> oauth with a token
        - ``<PREFIX>_CLIENT_ID`` + ``<PREFIX>_CLIENT_SECRET`` -> oauth with key & secret
        - ``<PREFIX>_USERNAME`` + ``<PREFIX>_PASSWORD`` -> basic auth

        Returns:
            The resolved AuthContext, ``AuthContext.none()`` if nothing is set.
        """
        prefix = prefix.rstrip("_").upper()

        token = self.resolve(env_var_name=f"{prefix}_TOKEN")
        if token:
            return AuthContext.bearer_token(token)

        oauth_token = self.resolve(env_var_name=f"{prefix}_OAUTH_TOKEN")
        if oauth_token:
            return AuthContext.oauth(token=oauth_token)

        client_id = self.resolve(env_var_name=f"{prefix}_CLIENT_ID")
        client_secret = self.resolve(env_var_name=f"{prefix}_CLIENT_SECRET")
        if client_id and client_secret:
            return AuthContext.oauth(key=client_id, secret=client_secret)

        username = self.resolve(env_var_name=f"{prefix}_USERNAME")
        password = self.resolve(env_var_name=f"{prefix}_PASSWORD")
        if username and password:
            return AuthContext.basic(username, password)

        logger.debug(f"No credentials found for prefix '{prefix}', using anonymous access")
        return AuthContext.none()
