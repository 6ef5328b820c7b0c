"""Exceptions for authentication settings and credential resolution."""


class CredentialError(Exception):
    """Base exception for credential-related errors."""

    pass


class CredentialNotFoundError(CredentialError):
    """A required credential was not found in any source.

    Attributes:
        env_var_name: The environment variable that was checked, if any.
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class InvalidAuthError(CredentialError, ValueError):
    """Authentication settings are incomplete or of an unknown type.

    Raised eagerly when an :class:`AuthContext` is built, never per call.
    """

    pass
