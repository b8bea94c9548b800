r"""Asynchronous retry executor.

This module provides the RetryExecutor class that runs a caller-supplied
coroutine function until it succeeds, the attempts are exhausted, the
wall-clock budget runs out, or the call is cancelled.
"""

from __future__ import annotations

__all__ = ["RetryExecutor", "create_retry_executor"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from aretry.clock import SystemClock
from aretry.exceptions import AbortError, RetryTimeoutError
from aretry.retry.context import AttemptContext
from aretry.retry.decider import RetryDecider
from aretry.retry.observer import ObserverManager
from aretry.retry.outcome import Continue, Done, Outcome
from aretry.retry.result import RetryFailure, RetryResult, RetrySuccess

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.clock import Clock
    from aretry.retry.config import RetryConfig
    from aretry.signal import CancellationToken

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _AttemptOutput(Generic[T]):
    """Value or error produced by one invocation of the operation."""

    ok: bool
    value: T | None = None
    error: Exception | None = None


@dataclass(frozen=True)
class _Call:
    """Per-call collaborators, shared by all attempts of one call."""

    config: RetryConfig
    decider: RetryDecider
    observer: ObserverManager
    started_at: float


class RetryExecutor:
    """Executes async operations with automatic retry logic.

    The executor holds no per-call state, only its clock, so one
    instance can be shared by any number of concurrent calls.

    Each call runs one strictly ordered sequence of attempts: an attempt
    never starts before the previous one and its delay have completed.
    Before every attempt two guardrails are checked, in this order: the
    wall-clock budget (``max_elapsed_ms``) and the cancellation token.

    Attributes:
        clock: The clock used for elapsed time and sleeping.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import RetryConfig, constant, create_retry_executor
        >>> from aretry.backoff import Delay
        >>> async def main():
        ...     executor = create_retry_executor()
        ...     attempts = []
        ...
        ...     async def operation(ctx):
        ...         attempts.append(ctx.attempt)
        ...         if ctx.attempt < 2:
        ...             raise ConnectionError("unavailable")
        ...         return "ok"
        ...
        ...     config = RetryConfig(max_attempts=5, delay=constant(Delay(1)))
        ...     result = await executor.try_execute(operation, config)
        ...     return result.value, result.attempts, attempts
        ...
        >>> asyncio.run(main())
        ('ok', 3, [0, 1, 2])

        ```
    """

    def __init__(self, clock: Clock) -> None:
        self.clock = clock

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(clock={self.clock!r})"

    async def execute(
        self, fn: Callable[[AttemptContext], Awaitable[T]], config: RetryConfig[T]
    ) -> T:
        """Run ``fn`` with retries and return its accepted value.

        Args:
            fn: Coroutine function receiving the attempt context.
            config: The retry configuration.

        Returns:
            The accepted value.

        Raises:
            Exception: The error of the failure when the attempts are
                exhausted, the error is not retryable, the budget runs
                out (last attempt error or ``RetryTimeoutError``) or the
                call is cancelled (``AbortError``).
            ValueError: If the configuration is invalid.
        """
        result = await self.try_execute(fn, config)
        if isinstance(result, RetrySuccess):
            return result.value
        raise result.error

    async def try_execute(
        self, fn: Callable[[AttemptContext], Awaitable[T]], config: RetryConfig[T]
    ) -> RetryResult[T]:
        """Run ``fn`` with retries and return the terminal result.

        Exhaustion, cancellation and timeout are reported in the
        returned result. Only configuration errors and exceptions raised
        by predicates or observer hooks propagate.

        Args:
            fn: Coroutine function receiving the attempt context.
            config: The retry configuration.

        Returns:
            ``RetrySuccess`` or ``RetryFailure``.

        Raises:
            ValueError: If the configuration is invalid.
        """
        config.validate()

        call = _Call(
            config=config,
            decider=RetryDecider(config.error_predicate, config.result_predicate),
            observer=ObserverManager(config.observer),
            started_at=self.clock.now_ms(),
        )

        if self._is_aborted(config.signal):
            ctx = self._build_context(0, call.started_at, config.signal)
            logger.debug("Retry call cancelled before the first attempt")
            await call.observer.on_aborted(ctx)
            return self._aborted_result(attempts=0, elapsed_ms=0, signal=config.signal)

        last_error: Exception | None = None
        for attempt in range(config.max_attempts - 1):
            outcome = await self._run_attempt(fn, call, attempt, last_error)
            if isinstance(outcome, Done):
                return outcome.result
            if outcome.last_error is not None:
                last_error = outcome.last_error

        return await self._run_last_attempt(fn, call, config.max_attempts - 1, last_error)

    async def _run_attempt(
        self,
        fn: Callable[[AttemptContext], Awaitable[Any]],
        call: _Call,
        attempt: int,
        last_error: Exception | None,
    ) -> Outcome:
        """Run an attempt that may be followed by another one."""
        ctx = self._build_context(attempt, call.started_at, call.config.signal)
        guard_result = await self._check_guardrails(ctx, call, last_error)
        if guard_result is not None:
            return Done(guard_result)

        output = await self._try_attempt(fn, ctx, call)

        if output.ok:
            should_retry, reason = call.decider.should_retry_result(
                output.value, ctx, is_last_attempt=False
            )
            if not should_retry:
                return Done(await self._succeed(output.value, ctx, call))
            next_delay_ms = self._get_delay_ms(call.config, attempt)
            logger.debug(
                f"Attempt {ctx.attempts_so_far}/{call.config.max_attempts} returned a "
                f"value to retry ({reason}), next attempt in {next_delay_ms}ms"
            )
            await call.observer.on_result_retry(
                output.value, ctx.with_info(next_delay_ms, is_last_attempt=False)
            )
            if await self._sleep(next_delay_ms, call):
                return Done(await self._sleep_aborted(ctx, call))
            return Continue()

        error = output.error
        should_retry, reason = call.decider.should_retry_error(error, ctx, is_last_attempt=False)
        if not should_retry:
            return Done(await self._exhaust(error, ctx, call, reason))
        next_delay_ms = self._get_delay_ms(call.config, attempt)
        logger.debug(
            f"Attempt {ctx.attempts_so_far}/{call.config.max_attempts} failed: {error!r} "
            f"({reason}), next attempt in {next_delay_ms}ms"
        )
        await call.observer.on_error(error, ctx.with_info(next_delay_ms, is_last_attempt=False))
        if await self._sleep(next_delay_ms, call):
            return Done(await self._sleep_aborted(ctx, call))
        return Continue(last_error=error)

    async def _run_last_attempt(
        self,
        fn: Callable[[AttemptContext], Awaitable[Any]],
        call: _Call,
        attempt: int,
        last_error: Exception | None,
    ) -> RetryResult:
        """Run the final attempt, which always ends the call."""
        ctx = self._build_context(attempt, call.started_at, call.config.signal)
        guard_result = await self._check_guardrails(ctx, call, last_error)
        if guard_result is not None:
            return guard_result

        output = await self._try_attempt(fn, ctx, call)

        if output.ok:
            # The predicate still sees the final value, which is never retried
            call.decider.should_retry_result(output.value, ctx, is_last_attempt=True)
            return await self._succeed(output.value, ctx, call)

        _, reason = call.decider.should_retry_error(output.error, ctx, is_last_attempt=True)
        return await self._exhaust(output.error, ctx, call, reason)

    async def _check_guardrails(
        self, ctx: AttemptContext, call: _Call, last_error: Exception | None
    ) -> RetryFailure | None:
        max_elapsed_ms = call.config.max_elapsed_ms
        if max_elapsed_ms is not None and ctx.elapsed_ms >= max_elapsed_ms:
            error = last_error
            if error is None:
                error = RetryTimeoutError(elapsed_ms=ctx.elapsed_ms, max_elapsed_ms=max_elapsed_ms)
            logger.debug(
                f"Retry budget exhausted after {ctx.attempt} attempts "
                f"({ctx.elapsed_ms:.0f}ms >= max_elapsed_ms={max_elapsed_ms}ms)"
            )
            await call.observer.on_exhausted(error, ctx.with_info(None, is_last_attempt=True))
            return RetryFailure(
                error=error,
                attempts=ctx.attempt,
                elapsed_ms=ctx.elapsed_ms,
                aborted=False,
                timed_out=True,
            )

        if self._is_aborted(ctx.signal):
            logger.debug(f"Retry call cancelled after {ctx.attempt} attempts")
            await call.observer.on_aborted(ctx)
            return self._aborted_result(
                attempts=ctx.attempt, elapsed_ms=ctx.elapsed_ms, signal=ctx.signal
            )

        return None

    async def _try_attempt(
        self, fn: Callable[[AttemptContext], Awaitable[Any]], ctx: AttemptContext, call: _Call
    ) -> _AttemptOutput:
        await call.observer.on_attempt(ctx)
        try:
            value = await fn(ctx)
        except Exception as exc:  # noqa: BLE001
            return _AttemptOutput(ok=False, error=exc)
        return _AttemptOutput(ok=True, value=value)

    async def _succeed(self, value: Any, ctx: AttemptContext, call: _Call) -> RetrySuccess:
        await call.observer.on_success(value, ctx)
        return RetrySuccess(
            value=value,
            attempts=ctx.attempts_so_far,
            elapsed_ms=self.clock.now_ms() - call.started_at,
        )

    async def _exhaust(
        self, error: Exception, ctx: AttemptContext, call: _Call, reason: str
    ) -> RetryFailure:
        logger.debug(
            f"Attempt {ctx.attempts_so_far}/{call.config.max_attempts} failed: {error!r}, "
            f"not retrying ({reason})"
        )
        await call.observer.on_exhausted(error, ctx.with_info(None, is_last_attempt=True))
        return RetryFailure(
            error=error,
            attempts=ctx.attempts_so_far,
            elapsed_ms=self.clock.now_ms() - call.started_at,
            aborted=False,
            timed_out=False,
        )

    async def _sleep_aborted(self, ctx: AttemptContext, call: _Call) -> RetryFailure:
        abort_ctx = self._build_context(ctx.attempt + 1, ctx.started_at, ctx.signal)
        logger.debug(f"Retry call cancelled while waiting after attempt {ctx.attempts_so_far}")
        await call.observer.on_aborted(abort_ctx)
        return self._aborted_result(
            attempts=abort_ctx.attempts_so_far, elapsed_ms=abort_ctx.elapsed_ms, signal=ctx.signal
        )

    async def _sleep(self, delay_ms: float, call: _Call) -> bool:
        """Wait before the next attempt.

        Returns:
            ``True`` if the clock reported a cancellation.
        """
        actual_delay = self._clamp_delay(delay_ms, call)
        if actual_delay <= 0:
            return False
        try:
            await self.clock.sleep(actual_delay, call.config.signal)
        except AbortError:
            return True
        return False

    def _clamp_delay(self, delay_ms: float, call: _Call) -> float:
        max_elapsed_ms = call.config.max_elapsed_ms
        if max_elapsed_ms is None:
            return delay_ms
        remaining = max_elapsed_ms - (self.clock.now_ms() - call.started_at)
        actual_delay = min(delay_ms, max(0, remaining))
        if actual_delay < delay_ms:
            logger.debug(
                f"Capping delay from {delay_ms}ms to {actual_delay}ms "
                f"(max_elapsed_ms={max_elapsed_ms}ms)"
            )
        return actual_delay

    def _get_delay_ms(self, config: RetryConfig, attempt: int) -> float:
        return config.delay.get_delay(attempt).milliseconds

    def _build_context(
        self, attempt: int, started_at: float, signal: CancellationToken | None
    ) -> AttemptContext:
        return AttemptContext(
            attempt=attempt,
            attempts_so_far=attempt + 1,
            started_at=started_at,
            elapsed_ms=self.clock.now_ms() - started_at,
            signal=signal,
        )

    def _is_aborted(self, signal: CancellationToken | None) -> bool:
        return signal is not None and signal.cancelled

    def _aborted_result(
        self, attempts: int, elapsed_ms: float, signal: CancellationToken | None
    ) -> RetryFailure:
        return RetryFailure(
            error=AbortError(reason=signal.reason if signal is not None else None),
            attempts=attempts,
            elapsed_ms=elapsed_ms,
            aborted=True,
            timed_out=False,
        )


def create_retry_executor(clock: Clock | None = None) -> RetryExecutor:
    """Create a retry executor.

    Args:
        clock: The clock used for elapsed time and sleeping. Defaults to
            ``SystemClock``.

    Returns:
        The retry executor.
    """
    return RetryExecutor(clock=clock if clock is not None else SystemClock())
