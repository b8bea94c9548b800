r"""Linear delay strategy."""

from __future__ import annotations

__all__ = ["LinearDelay", "linear"]

from aretry.backoff.base import Delay, DelayPolicy


class LinearDelay(DelayPolicy):
    """Linear delay strategy.

    Calculates delay as: base + increment * attempt.

    Args:
        base: The delay for the first attempt.
        increment: The amount added per attempt.

    Example:
        ```pycon
        >>> from aretry.backoff import Delay, LinearDelay
        >>> policy = LinearDelay(base=Delay(100), increment=Delay(50))
        >>> policy.get_delay(0)
        Delay(milliseconds=100)
        >>> policy.get_delay(2)
        Delay(milliseconds=200)

        ```
    """

    def __init__(self, base: Delay, increment: Delay) -> None:
        self.base = base
        self.increment = increment

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base={self.base!r}, increment={self.increment!r})"
        )

    def get_delay(self, attempt: int) -> Delay:
        return Delay(milliseconds=self.base.milliseconds + self.increment.milliseconds * attempt)


def linear(base: Delay, increment: Delay) -> DelayPolicy:
    """Create a linear delay policy.

    Args:
        base: The delay for the first attempt.
        increment: The amount added per attempt.

    Returns:
        The delay policy.
    """
    return LinearDelay(base=base, increment=increment)
