r"""Cooperative cancellation token.

A ``CancellationToken`` is created by the caller, passed to the retry
executor through ``RetryConfig.signal`` and forwarded to each attempt
(``AttemptContext.signal``) and to the clock's ``sleep``. The engine
never interrupts an in-flight operation: the operation has to check
the token itself if it wants to stop early.
"""

from __future__ import annotations

__all__ = ["CancellationToken"]

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class CancellationToken:
    """Token that signals cooperative cancellation.

    Cancelling is idempotent: only the first call to ``cancel`` records
    a reason and runs the registered callbacks.

    ``wait`` can be awaited from successive event loops (for example
    several ``asyncio.run`` calls). Waiting from two loops running at
    the same time in different threads is not supported.

    Example:
        ```pycon
        >>> from aretry.signal import CancellationToken
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.cancel("shutdown")
        >>> token.cancelled
        True
        >>> token.reason
        'shutdown'

        ```
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: object = None
        self._event: asyncio.Event | None = None
        self._event_loop: asyncio.AbstractEventLoop | None = None
        self._callbacks: list[Callable[[CancellationToken], None]] = []

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(cancelled={self._cancelled})"

    @property
    def cancelled(self) -> bool:
        """``True`` once ``cancel`` has been called."""
        return self._cancelled

    @property
    def reason(self) -> object:
        """The reason passed to ``cancel``, or ``None``."""
        return self._reason

    def cancel(self, reason: object = None) -> None:
        """Cancel the token.

        Args:
            reason: Optional value describing why the token was
                cancelled.
        """
        if self._cancelled:
            return
        self._cancelled = True
        self._reason = reason
        logger.debug(f"Cancellation requested (reason={reason!r})")
        if self._event is not None:
            self._event.set()
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback(self)

    def add_callback(self, callback: Callable[[CancellationToken], None]) -> None:
        """Register a function called once when the token is cancelled.

        If the token is already cancelled, ``callback`` runs immediately.

        Args:
            callback: Function receiving the token.
        """
        if self._cancelled:
            callback(self)
            return
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[CancellationToken], None]) -> None:
        """Unregister a callback; unknown callbacks are ignored."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    async def wait(self) -> None:
        """Wait until the token is cancelled."""
        if self._cancelled:
            return
        loop = asyncio.get_running_loop()
        if self._event is None or self._event_loop is not loop:
            # asyncio.Event is bound to the loop that first waits on it
            self._event = asyncio.Event()
            self._event_loop = loop
        await self._event.wait()
