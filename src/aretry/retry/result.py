r"""Terminal results of a retry call."""

from __future__ import annotations

__all__ = ["RetryFailure", "RetryResult", "RetrySuccess"]

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class RetrySuccess(Generic[T]):
    """Result of a call whose operation produced an accepted value.

    Attributes:
        value: The value returned by the operation.
        attempts: The number of attempts made (1-indexed).
        elapsed_ms: Milliseconds from the start of the call to its end.
    """

    value: T
    attempts: int
    elapsed_ms: float

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class RetryFailure:
    """Result of a call that ended without an accepted value.

    At most one of ``aborted`` and ``timed_out`` is ``True``. When both
    are ``False`` the attempts were exhausted, or the error was not
    retryable.

    Attributes:
        error: The final attempt error, or an ``AbortError`` /
            ``RetryTimeoutError`` when there is none to report.
        attempts: The number of attempts counted for the call.
        elapsed_ms: Milliseconds from the start of the call to its end.
        aborted: ``True`` if the call was cancelled.
        timed_out: ``True`` if the wall-clock budget ran out.
    """

    error: Exception
    attempts: int
    elapsed_ms: float
    aborted: bool = False
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return False


RetryResult = Union[RetrySuccess[T], RetryFailure]
