from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from aretry.backoff import Delay, DelayPolicy
from aretry.clock import FakeClock
from aretry.exceptions import AbortError
from aretry.retry import RetryExecutor

if TYPE_CHECKING:
    from aretry.signal import CancellationToken


class RecordingClock(FakeClock):
    """Fake clock that records sleeps and advances time by the slept
    duration."""

    def __init__(self, start: float = 0) -> None:
        super().__init__(start)
        self.sleep_calls: list[tuple[float, CancellationToken | None]] = []
        self._cancel_on_next_sleep: CancellationToken | None = None

    async def sleep(self, ms: float, signal: CancellationToken | None = None) -> None:
        self.sleep_calls.append((ms, signal))
        if self._cancel_on_next_sleep is not None:
            self._cancel_on_next_sleep.cancel()
            if signal is not None and signal.cancelled:
                raise AbortError
        self.advance(ms)

    def cancel_on_next_sleep(self, token: CancellationToken) -> None:
        """Cancel ``token`` and raise ``AbortError`` on the next sleep."""
        self._cancel_on_next_sleep = token

    @property
    def sleep_durations(self) -> list[float]:
        return [ms for ms, _ in self.sleep_calls]


class FixedDelay(DelayPolicy):
    """Delay policy returning a fixed delay and recording the attempts
    it was asked about."""

    def __init__(self, milliseconds: float = 100) -> None:
        self.milliseconds = milliseconds
        self.calls: list[int] = []

    def get_delay(self, attempt: int) -> Delay:
        self.calls.append(attempt)
        return Delay(milliseconds=self.milliseconds)


@pytest.fixture
def clock() -> RecordingClock:
    """Create a recording fake clock starting at 0."""
    return RecordingClock()


@pytest.fixture
def executor(clock: RecordingClock) -> RetryExecutor:
    """Create a retry executor driven by the recording clock."""
    return RetryExecutor(clock=clock)


@pytest.fixture
def fixed_delay() -> FixedDelay:
    """Create a delay policy that always returns 100ms."""
    return FixedDelay(100)


@pytest.fixture
def mock_observer() -> Mock:
    """Create a mock observer whose hooks are regular functions.

    Returns:
        A Mock object restricted to the observer hooks.
    """
    return Mock(
        spec=[
            "on_attempt",
            "on_error",
            "on_result_retry",
            "on_success",
            "on_exhausted",
            "on_aborted",
        ]
    )
