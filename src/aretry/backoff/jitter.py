r"""Jitter strategies for randomizing delays.

All strategies draw from a ``RandomSource`` so they can be made
deterministic in tests. The default source wraps the standard library
``random`` module.
"""

from __future__ import annotations

__all__ = ["DecorrelatedJitter", "EqualJitter", "FullJitter", "SystemRandom"]

import math
import random

from aretry.backoff.base import Delay, JitterStrategy, RandomSource


def _floor(value: float) -> float:
    # inf and nan pass through unchanged
    if isinstance(value, float) and not math.isfinite(value):
        return value
    return math.floor(value)


class SystemRandom(RandomSource):
    """Random source backed by ``random.random``."""

    def next(self) -> float:
        return random.random()  # noqa: S311


class FullJitter(JitterStrategy):
    """Full jitter: a random value between 0 and the delay.

    Provides maximum spread to de-correlate retries. The result is an
    integer in ``[0, delay]``.

    Args:
        random_source: Source of randomness (default: ``SystemRandom``).

    Example:
        ```pycon
        >>> from aretry.backoff import Delay, FullJitter
        >>> delay = FullJitter().apply(Delay(100))
        >>> 0 <= delay.milliseconds <= 100
        True

        ```
    """

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self.random_source = random_source or SystemRandom()

    def apply(self, delay: Delay) -> Delay:
        return Delay(
            milliseconds=_floor(self.random_source.next() * (delay.milliseconds + 1))
        )


class EqualJitter(JitterStrategy):
    """Equal jitter: half the delay plus a random value up to the other
    half.

    Guarantees at least 50% of the base delay. The result is an integer
    in ``[floor(delay / 2), delay]``.

    Args:
        random_source: Source of randomness (default: ``SystemRandom``).
    """

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self.random_source = random_source or SystemRandom()

    def apply(self, delay: Delay) -> Delay:
        half = _floor(delay.milliseconds / 2)
        jitter = _floor(self.random_source.next() * (half + 1))
        return Delay(milliseconds=half + jitter)


class DecorrelatedJitter(JitterStrategy):
    """Decorrelated jitter: a random value between ``min`` and three
    times the delay.

    This is the stateless variant: each application is independent of
    the previous one.

    Args:
        min: The delay floor.
        random_source: Source of randomness (default: ``SystemRandom``).
    """

    def __init__(self, min: Delay, random_source: RandomSource | None = None) -> None:  # noqa: A002
        self.min = min
        self.random_source = random_source or SystemRandom()

    def apply(self, delay: Delay) -> Delay:
        min_ms = self.min.milliseconds
        ceiling = delay.milliseconds * 3
        return Delay(
            milliseconds=_floor(min_ms + self.random_source.next() * (ceiling - min_ms))
        )
