r"""Exceptions raised or reported by the retry engine.

Neither exception is raised for ordinary attempt failures: the error
raised by the caller's operation is always reported as-is. These two
types only stand in when there is no underlying attempt error to
report, i.e. when a call is cancelled or when the wall-clock budget
runs out before any attempt has failed.
"""

from __future__ import annotations

__all__ = ["AbortError", "RetryTimeoutError"]


class AbortError(Exception):
    """Raised when a retry call is cancelled through its token.

    Clocks raise this from ``sleep`` to report a cancelled wait, and
    the executor reports it as the error of an aborted failure.

    Args:
        message: The error message (default: ``"Aborted"``).
        reason: Optional reason attached to the cancellation token.

    Example:
        ```pycon
        >>> from aretry.exceptions import AbortError
        >>> error = AbortError(reason="shutdown")
        >>> str(error)
        'Aborted'
        >>> error.reason
        'shutdown'

        ```
    """

    def __init__(self, message: str = "Aborted", reason: object = None) -> None:
        super().__init__(message)
        self.message = message
        self.reason = reason


class RetryTimeoutError(Exception):
    """Raised when the wall-clock budget runs out before any attempt
    failed.

    Args:
        message: The error message (default: ``"Retry timeout"``).
        elapsed_ms: Elapsed milliseconds when the budget check fired.
        max_elapsed_ms: The configured budget in milliseconds.
    """

    def __init__(
        self,
        message: str = "Retry timeout",
        elapsed_ms: float | None = None,
        max_elapsed_ms: float | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.elapsed_ms = elapsed_ms
        self.max_elapsed_ms = max_elapsed_ms
