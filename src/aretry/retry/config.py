r"""Configuration for retry behavior.

This module provides the ``RetryConfig`` dataclass and the predicate
interfaces used to decide whether an attempt should be retried.

Default predicate policy:
    - errors: retried unless this was the last attempt
      (no ``error_predicate`` behaves like "always retry")
    - results: accepted (no ``result_predicate`` behaves like "never
      retry")
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY_MS",
    "DEFAULT_MAX_ATTEMPTS",
    "ErrorPredicate",
    "ResultPredicate",
    "RetryConfig",
]

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from aretry.backoff.base import Delay
from aretry.backoff.constant import constant
from aretry.utils.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.backoff.base import DelayPolicy
    from aretry.retry.context import AttemptContext
    from aretry.retry.observer import RetryObserver
    from aretry.signal import CancellationToken

T = TypeVar("T")

# Default total number of attempts (1 initial attempt + 2 retries)
DEFAULT_MAX_ATTEMPTS = 3

# Default delay between attempts in milliseconds
DEFAULT_DELAY_MS = 100


class ErrorPredicate(ABC):
    """Determines whether to retry after an attempt raised an error."""

    @abstractmethod
    def should_retry(self, error: Exception, ctx: AttemptContext) -> bool:
        """Return ``True`` if the attempt should be retried.

        Args:
            error: The error raised by the attempt.
            ctx: The context of the attempt.
        """


class ResultPredicate(ABC, Generic[T]):
    """Determines whether to retry based on the value returned by an
    attempt (for APIs that report failures without raising)."""

    @abstractmethod
    def should_retry(self, result: T, ctx: AttemptContext) -> bool:
        """Return ``True`` if the attempt should be retried.

        Args:
            result: The value returned by the attempt.
            ctx: The context of the attempt.
        """


@dataclass(frozen=True, kw_only=True)
class RetryConfig(Generic[T]):
    """Configuration of one retry call.

    ``max_attempts`` counts total tries, not retries:
    ``max_attempts=1`` tries once with no retry, ``max_attempts=3``
    tries once plus up to 2 retries.

    Predicates can be ``ErrorPredicate``/``ResultPredicate`` instances
    or plain callables taking ``(value, ctx)`` and returning a bool.

    The configuration is validated by the executor when a call starts,
    so an invalid configuration can be built but never run.

    Args:
        max_attempts: Total number of attempts. Must be an integer >= 1.
        delay: Delay policy between attempts. Defaults to a constant
            ``DEFAULT_DELAY_MS`` delay.
        error_predicate: When to retry on a raised error. Defaults to
            retrying every error unless it is the last attempt.
        result_predicate: When to retry based on a returned value.
            Defaults to accepting every value.
        observer: Optional lifecycle observer.
        signal: Optional cancellation token.
        max_elapsed_ms: Optional wall-clock budget in milliseconds for
            all attempts. Must be finite and >= 0 if provided. Once
            reached, no new attempt starts and sleeps are shortened to
            fit the remaining budget.

    Example:
        ```pycon
        >>> from aretry.backoff import Delay, constant
        >>> from aretry.retry import RetryConfig
        >>> config = RetryConfig(max_attempts=5, delay=constant(Delay(200)))
        >>> config.max_attempts
        5
        >>> config.merge(max_elapsed_ms=1000).max_elapsed_ms
        1000

        ```
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay: DelayPolicy = field(default_factory=lambda: constant(Delay(DEFAULT_DELAY_MS)))
    error_predicate: ErrorPredicate | Callable[[Exception, AttemptContext], bool] | None = None
    result_predicate: ResultPredicate[T] | Callable[[T, AttemptContext], bool] | None = None
    observer: RetryObserver | Any | None = None
    signal: CancellationToken | None = None
    max_elapsed_ms: float | None = None

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If ``max_attempts`` or ``max_elapsed_ms`` is
                invalid.
        """
        validate_retry_params(max_attempts=self.max_attempts, max_elapsed_ms=self.max_elapsed_ms)

    def merge(self, **overrides: Any) -> RetryConfig[T]:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ``RetryConfig`` instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
