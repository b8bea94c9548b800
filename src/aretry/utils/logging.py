r"""Observer that writes retry lifecycle events to a logger.

Example:
    ```python
    import logging

    from aretry import RetryConfig, constant, create_retry_executor
    from aretry.backoff import Delay
    from aretry.utils.logging import LoggingObserver

    logging.basicConfig(level=logging.INFO)
    config = RetryConfig(
        max_attempts=3,
        delay=constant(Delay(100)),
        observer=LoggingObserver(level=logging.INFO),
    )
    await create_retry_executor().execute(fetch, config)
    ```
"""

from __future__ import annotations

__all__ = ["LoggingObserver"]

import logging
from typing import TYPE_CHECKING, Any

from aretry.retry.observer import RetryObserver

if TYPE_CHECKING:
    from aretry.retry.context import AttemptContext, RetryAttemptInfo


class LoggingObserver(RetryObserver):
    """Retry observer that logs every lifecycle event.

    Structured fields (``attempt``, ``elapsed_ms``, ``next_delay_ms``)
    are attached to each record through ``extra``.

    Args:
        logger: The logger to write to (default: the ``aretry`` logger).
        level: The level of the lifecycle records (default: DEBUG).
            Exhaustion is logged at WARNING or at ``level``, whichever
            is higher.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.DEBUG) -> None:
        self.logger = logger if logger is not None else logging.getLogger("aretry")
        self.level = level

    def _log(self, level: int, message: str, ctx: AttemptContext, **extra: Any) -> None:
        self.logger.log(
            level,
            message,
            extra={"attempt": ctx.attempts_so_far, "elapsed_ms": ctx.elapsed_ms, **extra},
        )

    async def on_attempt(self, ctx: AttemptContext) -> None:
        self._log(self.level, f"Starting attempt {ctx.attempts_so_far}", ctx)

    async def on_error(self, error: Exception, info: RetryAttemptInfo) -> None:
        self._log(
            self.level,
            f"Attempt {info.attempts_so_far} failed: {error!r}, "
            f"retrying in {info.next_delay_ms}ms",
            info,
            next_delay_ms=info.next_delay_ms,
        )

    async def on_result_retry(self, result: Any, info: RetryAttemptInfo) -> None:
        self._log(
            self.level,
            f"Attempt {info.attempts_so_far} returned {result!r}, "
            f"retrying in {info.next_delay_ms}ms",
            info,
            next_delay_ms=info.next_delay_ms,
        )

    async def on_success(self, result: Any, ctx: AttemptContext) -> None:  # noqa: ARG002
        self._log(self.level, f"Attempt {ctx.attempts_so_far} succeeded", ctx)

    async def on_exhausted(self, error: Exception, info: RetryAttemptInfo) -> None:
        self._log(
            max(self.level, logging.WARNING),
            f"Giving up at attempt {info.attempts_so_far}: {error!r}",
            info,
        )

    async def on_aborted(self, ctx: AttemptContext) -> None:
        self._log(self.level, f"Retry cancelled before attempt {ctx.attempts_so_far}", ctx)
