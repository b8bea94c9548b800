r"""Retry decision logic for determining whether to retry attempts.

This module provides the RetryDecider class that encapsulates the
default predicate policy of the executor:

- a raised error is retried unless the error predicate says no, or
  the attempt was the last one
- a returned value is accepted unless the result predicate says it
  has to be retried and the attempt was not the last one
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aretry.retry.context import AttemptContext


def _call_predicate(predicate: Any, value: Any, ctx: AttemptContext) -> bool:
    should_retry = getattr(predicate, "should_retry", None)
    if should_retry is not None:
        return bool(should_retry(value, ctx))
    return bool(predicate(value, ctx))


class RetryDecider:
    """Decides whether an attempt should be retried.

    Predicates are always evaluated when set, even on the last attempt,
    so they observe every outcome.
    """

    def __init__(self, error_predicate: Any | None = None, result_predicate: Any | None = None) -> None:
        """Initialize retry decider.

        Args:
            error_predicate: Optional predicate for raised errors.
            result_predicate: Optional predicate for returned values.
        """
        self.error_predicate = error_predicate
        self.result_predicate = result_predicate

    def should_retry_error(
        self, error: Exception, ctx: AttemptContext, is_last_attempt: bool
    ) -> tuple[bool, str]:
        """Determine if a raised error should trigger a retry.

        Args:
            error: The error raised by the attempt.
            ctx: The context of the attempt.
            is_last_attempt: Whether the attempt was the last one.

        Returns:
            Tuple of (should_retry, reason).
        """
        if self.error_predicate is not None:
            if not _call_predicate(self.error_predicate, error, ctx):
                return (False, "error_predicate returned False")
            if is_last_attempt:
                return (False, "max attempts exhausted")
            return (True, "error_predicate")

        # Default: retry any error
        if is_last_attempt:
            return (False, "max attempts exhausted")
        return (True, f"{type(error).__name__}")

    def should_retry_result(
        self, result: Any, ctx: AttemptContext, is_last_attempt: bool
    ) -> tuple[bool, str]:
        """Determine if a returned value should trigger a retry.

        Args:
            result: The value returned by the attempt.
            ctx: The context of the attempt.
            is_last_attempt: Whether the attempt was the last one.

        Returns:
            Tuple of (should_retry, reason).
        """
        # Default: accept any result
        if self.result_predicate is None:
            return (False, "success")
        if not _call_predicate(self.result_predicate, result, ctx):
            return (False, "success")
        if is_last_attempt:
            return (False, "max attempts exhausted")
        return (True, "result_predicate")
