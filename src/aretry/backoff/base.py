r"""Abstract base classes and value types for delay policies."""

from __future__ import annotations

__all__ = ["Delay", "DelayPolicy", "JitterStrategy", "RandomSource"]

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Delay:
    """A duration in milliseconds.

    No validation is done here: raw strategies may produce any value,
    and ``aretry.backoff.create_backoff`` is responsible for turning it
    into a finite, non-negative, integral delay.

    Attributes:
        milliseconds: The duration in milliseconds.
    """

    milliseconds: float


class DelayPolicy(ABC):
    """Abstract base class for delay policies.

    A delay policy determines how long to wait before the next attempt
    based on the 0-indexed number of the attempt that just completed.
    Implementations must be pure: safe to call with any non-negative
    integer, in any order and any number of times.
    """

    @abstractmethod
    def get_delay(self, attempt: int) -> Delay:
        """Return the delay to wait after the given attempt.

        Args:
            attempt: The attempt number (0-indexed). ``attempt=0`` is the
                delay between the first and the second attempt.

        Returns:
            The delay before the next attempt.
        """


class JitterStrategy(ABC):
    """Abstract base class for jitter strategies.

    A jitter strategy randomizes a raw delay to avoid synchronized retry
    storms across callers. Implementations should return non-negative
    delays, but callers are not expected to trust them.
    """

    @abstractmethod
    def apply(self, delay: Delay) -> Delay:
        """Return a randomized version of ``delay``."""


class RandomSource(ABC):
    """Abstract source of randomness."""

    @abstractmethod
    def next(self) -> float:
        """Return a floating-point number in the range ``[0, 1)``."""
