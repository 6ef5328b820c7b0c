"""One-shot outcome channel for a single endpoint call."""

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Callback = Callable[[Exception | None, Any], None]


class Completion:
    """Deliver the outcome of one call exactly once.

    The first ``deliver()`` wins; anything delivered afterwards (a late
    transport error after the response was already classified, for
    instance) is dropped. When a callback is attached it receives
    ``(error, result)``; otherwise ``outcome()`` returns the result or
    raises the error.

    Example:
        ```python
        completion = Completion()
        completion.deliver(result=response)
        completion.deliver(error=TransportError("reset"))  # ignored
        completion.outcome()  # response
        ```
    """

    def __init__(self, callback: Callback | None = None) -> None:
        self._callback = callback
        self._done = False
        self.error: Exception | None = None
        self.result: Any = None

    @property
    def done(self) -> bool:
        return self._done

    def deliver(self, error: Exception | None = None, result: Any = None) -> bool:
        """Record the outcome and notify the callback.

        Returns:
            True if this call delivered the outcome, False if one was
            already delivered.
        """
        if self._done:
            logger.debug(f"Dropping late outcome (error={error!r}); call already completed")
            return False
        self._done = True
        self.error = error
        self.result = result
        if self._callback is not None:
            self._callback(error, result)
        return True

    def outcome(self) -> Any:
        """Return the delivered result, raising the error if no callback took it."""
        if not self._done:
            raise RuntimeError("Call finished without delivering an outcome")
        if self.error is not None and self._callback is None:
            raise self.error
        return self.result
