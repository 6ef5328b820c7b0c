"""Response classification for dispatched requests."""

import httpx

from route_client_core.errors.exceptions import (
    ClientError,
    ForbiddenError,
    HttpError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
)

_EXCEPTION_MAP: dict[int, type[HttpError]] = {
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    429: RateLimitError,
}


def is_error_status(status_code: int) -> bool:
    """Statuses in [400, 600) and anything below 10 are failures."""
    return 400 <= status_code < 600 or status_code < 10


def error_for_status(response: httpx.Response) -> HttpError | None:
    """Build the typed error for a failed response, or None on success.

    The response body must already be read. It is kept verbatim on the
    returned error as ``body``.

    Args:
        response: HTTP response object

    Returns:
        HttpError subclass instance, or None when the status is a success
    """
    status_code = response.status_code
    if not is_error_status(status_code):
        return None

    if status_code in _EXCEPTION_MAP:
        exc_class = _EXCEPTION_MAP[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = HttpError

    body = response.text
    message = f"HTTP {status_code}: {body[:200]}" if body else f"HTTP {status_code}"

    if exc_class is RateLimitError:
        retry_after = None
        if "retry-after" in response.headers:
            try:
                retry_after = int(response.headers["retry-after"])
            except (ValueError, TypeError):
                retry_after = None
        return RateLimitError(
            message,
            retry_after=retry_after,
            body=body,
            status_code=status_code,
            response=response,
        )

    return exc_class(message, body=body, status_code=status_code, response=response)
