r"""Clock implementations used by the retry executor.

The executor only needs two things from a clock: the current time in
epoch milliseconds (for elapsed-time arithmetic) and a cancellable
sleep. ``SystemClock`` uses the wall clock and ``asyncio``;
``FakeClock`` is driven by hand and is meant for tests.
"""

from __future__ import annotations

__all__ = ["Clock", "FakeClock", "SystemClock"]

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.signal import CancellationToken

logger: logging.Logger = logging.getLogger(__name__)


class Clock(ABC):
    """Abstract time source and sleeper.

    ``sleep`` must return immediately when ``ms <= 0`` or when the token
    is already cancelled, and should return early when the token is
    cancelled while sleeping. A clock may instead raise
    ``aretry.exceptions.AbortError`` to report the cancellation; the
    executor accepts both behaviors.

    The two behaviors report a different attempt count when the token is
    cancelled while sleeping after attempt ``n`` (1-indexed). Raising
    ``AbortError`` reports ``n + 1`` attempts: the attempt that just
    completed plus the one that would have run next. Returning early
    hands over to the cancellation check before the next attempt, which
    reports ``n`` attempts. ``SystemClock`` returns early.
    """

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime.

        Prefer ``now_ms`` for arithmetic.
        """
        return datetime.fromtimestamp(self.now_ms() / 1000, tz=timezone.utc)

    @abstractmethod
    def now_ms(self) -> float:
        """Return the current time in milliseconds since the Unix epoch."""

    @abstractmethod
    async def sleep(self, ms: float, signal: CancellationToken | None = None) -> None:
        """Wait for ``ms`` milliseconds or until ``signal`` is cancelled.

        Args:
            ms: The duration in milliseconds.
            signal: Optional cancellation token.
        """


class SystemClock(Clock):
    """Clock backed by ``time.time`` and ``asyncio``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.clock import SystemClock
        >>> clock = SystemClock()
        >>> clock.now_ms() > 0
        True
        >>> asyncio.run(clock.sleep(0))

        ```
    """

    def now_ms(self) -> float:
        return time.time() * 1000

    async def sleep(self, ms: float, signal: CancellationToken | None = None) -> None:
        if ms <= 0:
            return
        if signal is None:
            await asyncio.sleep(ms / 1000)
            return
        if signal.cancelled:
            return
        try:
            await asyncio.wait_for(signal.wait(), timeout=ms / 1000)
        except asyncio.TimeoutError:
            return
        logger.debug(f"Sleep of {ms:.0f}ms interrupted by cancellation")


class FakeClock(Clock):
    """Manually driven clock.

    Time only moves when ``advance`` or ``set`` is called, and ``sleep``
    returns immediately without moving time.

    Args:
        start: The initial time in epoch milliseconds (default: 0).

    Example:
        ```pycon
        >>> from aretry.clock import FakeClock
        >>> clock = FakeClock(start=1000)
        >>> clock.now_ms()
        1000
        >>> clock.advance(250)
        >>> clock.now_ms()
        1250

        ```
    """

    def __init__(self, start: float = 0) -> None:
        self._time = start

    def now_ms(self) -> float:
        return self._time

    def advance(self, ms: float) -> None:
        """Move time forward by ``ms`` milliseconds."""
        self._time += ms

    def set(self, ms: float) -> None:
        """Set the current time to ``ms`` epoch milliseconds."""
        self._time = ms

    async def sleep(self, ms: float, signal: CancellationToken | None = None) -> None:  # noqa: ARG002
        return
