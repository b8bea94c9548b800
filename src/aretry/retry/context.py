r"""Per-attempt context objects passed to operations, predicates and
observers."""

from __future__ import annotations

__all__ = ["AttemptContext", "RetryAttemptInfo"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.signal import CancellationToken


@dataclass(frozen=True, kw_only=True)
class AttemptContext:
    """Snapshot of a retry call, built right before an attempt or a
    guardrail check.

    Attributes:
        attempt: The attempt number (0-indexed).
        attempts_so_far: The attempt number (1-indexed), i.e.
            ``attempt + 1``.
        started_at: Epoch milliseconds captured once when the call
            started.
        elapsed_ms: Milliseconds elapsed since ``started_at`` when the
            context was built.
        signal: The cancellation token of the call, if any.
    """

    attempt: int
    attempts_so_far: int
    started_at: float
    elapsed_ms: float
    signal: CancellationToken | None = None

    def with_info(self, next_delay_ms: float | None, is_last_attempt: bool) -> RetryAttemptInfo:
        """Extend the context with the outcome of the attempt.

        Args:
            next_delay_ms: Delay before the next attempt, or ``None`` if
                no further attempt will occur.
            is_last_attempt: Whether this is the final attempt.

        Returns:
            The attempt information.
        """
        return RetryAttemptInfo(
            attempt=self.attempt,
            attempts_so_far=self.attempts_so_far,
            started_at=self.started_at,
            elapsed_ms=self.elapsed_ms,
            signal=self.signal,
            next_delay_ms=next_delay_ms,
            is_last_attempt=is_last_attempt,
        )


@dataclass(frozen=True, kw_only=True)
class RetryAttemptInfo(AttemptContext):
    """Attempt context extended with what happens next.

    Passed to observer hooks that fire once the outcome of an attempt is
    known.

    Attributes:
        next_delay_ms: Milliseconds until the next attempt, or ``None``
            when no further attempt will occur (exhausted, timed out).
        is_last_attempt: ``True`` if this is the final attempt.
    """

    next_delay_ms: float | None
    is_last_attempt: bool
