r"""Observer hooks for the retry lifecycle.

An observer can implement any subset of the hooks below; missing hooks
are skipped. Hooks can be regular functions or coroutine functions.
Hooks must not raise: an exception raised by a hook is treated as a
programmer error and propagates out of the executor, including out of
``try_execute``.

Lifecycle hooks:
- on_attempt: Called before each attempt
- on_error: Called when an attempt raised and will be retried
- on_result_retry: Called when a returned value will be retried
- on_success: Called once when a value is accepted
- on_exhausted: Called once when the call fails for good or times out
- on_aborted: Called once when the call is cancelled
"""

from __future__ import annotations

__all__ = ["ObserverManager", "RetryObserver"]

import inspect
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from aretry.retry.context import AttemptContext, RetryAttemptInfo

T = TypeVar("T")


class RetryObserver(Generic[T]):
    """Base class for retry observers.

    Every hook is a no-op; subclasses override the ones they need.

    Example:
        ```pycon
        >>> from aretry.retry import RetryObserver
        >>> class PrintObserver(RetryObserver):
        ...     async def on_error(self, error, info):
        ...         print(f"attempt {info.attempts_so_far} failed: {error}")
        ...

        ```
    """

    async def on_attempt(self, ctx: AttemptContext) -> None:
        """Called before each attempt."""

    async def on_error(self, error: Exception, info: RetryAttemptInfo) -> None:
        """Called when an attempt raised ``error`` and will be retried."""

    async def on_result_retry(self, result: T, info: RetryAttemptInfo) -> None:
        """Called when an attempt returned ``result`` and will be
        retried."""

    async def on_success(self, result: T, ctx: AttemptContext) -> None:
        """Called once when ``result`` is accepted."""

    async def on_exhausted(self, error: Exception, info: RetryAttemptInfo) -> None:
        """Called once when the call fails for good or times out."""

    async def on_aborted(self, ctx: AttemptContext) -> None:
        """Called once when the call is cancelled."""


class ObserverManager:
    """Dispatches lifecycle events to an optional observer.

    Attributes:
        observer: The observer receiving the events, or ``None``.
    """

    def __init__(self, observer: RetryObserver | Any | None) -> None:
        self.observer = observer

    async def _invoke(self, hook_name: str, *args: Any) -> None:
        if self.observer is None:
            return
        hook = getattr(self.observer, hook_name, None)
        if hook is None:
            return
        result = hook(*args)
        if inspect.isawaitable(result):
            await result

    async def on_attempt(self, ctx: AttemptContext) -> None:
        await self._invoke("on_attempt", ctx)

    async def on_error(self, error: Exception, info: RetryAttemptInfo) -> None:
        await self._invoke("on_error", error, info)

    async def on_result_retry(self, result: Any, info: RetryAttemptInfo) -> None:
        await self._invoke("on_result_retry", result, info)

    async def on_success(self, result: Any, ctx: AttemptContext) -> None:
        await self._invoke("on_success", result, ctx)

    async def on_exhausted(self, error: Exception, info: RetryAttemptInfo) -> None:
        await self._invoke("on_exhausted", error, info)

    async def on_aborted(self, ctx: AttemptContext) -> None:
        await self._invoke("on_aborted", ctx)
