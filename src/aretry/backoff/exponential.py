r"""Exponential delay strategy."""

from __future__ import annotations

__all__ = ["ExponentialDelay", "exponential"]

from aretry.backoff.base import Delay, DelayPolicy


class ExponentialDelay(DelayPolicy):
    """Exponential delay strategy.

    Calculates delay as: base * (factor ** attempt).

    The result grows without bound, so this strategy is usually wrapped
    with ``create_backoff`` to cap it.

    Args:
        base: The delay for the first attempt.
        factor: The multiplier applied per attempt (default: 2.0).

    Example:
        ```pycon
        >>> from aretry.backoff import Delay, ExponentialDelay
        >>> policy = ExponentialDelay(base=Delay(100))
        >>> policy.get_delay(0)
        Delay(milliseconds=100.0)
        >>> policy.get_delay(3)
        Delay(milliseconds=800.0)

        ```
    """

    def __init__(self, base: Delay, factor: float = 2.0) -> None:
        self.base = base
        self.factor = factor

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base={self.base!r}, factor={self.factor})"

    def get_delay(self, attempt: int) -> Delay:
        try:
            milliseconds = self.base.milliseconds * (float(self.factor) ** attempt)
        except OverflowError:
            milliseconds = float("inf")
        return Delay(milliseconds=milliseconds)


def exponential(base: Delay, factor: float = 2.0) -> DelayPolicy:
    """Create an exponential delay policy.

    Args:
        base: The delay for the first attempt.
        factor: The multiplier applied per attempt (default: 2.0).

    Returns:
        The delay policy.
    """
    return ExponentialDelay(base=base, factor=factor)
