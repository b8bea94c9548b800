r"""Constant delay strategy."""

from __future__ import annotations

__all__ = ["ConstantDelay", "constant"]

from aretry.backoff.base import Delay, DelayPolicy


class ConstantDelay(DelayPolicy):
    """Constant/fixed delay strategy.

    Returns the same delay for every attempt, regardless of the attempt
    number. The delay is not validated; wrap the policy with
    ``create_backoff`` to bound it.

    Args:
        delay: The fixed delay to use between all attempts.

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantDelay, Delay
        >>> policy = ConstantDelay(delay=Delay(milliseconds=250))
        >>> policy.get_delay(0)
        Delay(milliseconds=250)
        >>> policy.get_delay(10)
        Delay(milliseconds=250)

        ```
    """

    def __init__(self, delay: Delay) -> None:
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay!r})"

    def get_delay(self, attempt: int) -> Delay:  # noqa: ARG002
        return Delay(milliseconds=self.delay.milliseconds)


def constant(delay: Delay) -> DelayPolicy:
    """Create a delay policy that always returns ``delay``.

    Args:
        delay: The fixed delay between attempts.

    Returns:
        The delay policy.

    Example:
        ```pycon
        >>> from aretry.backoff import Delay, constant
        >>> constant(Delay(100)).get_delay(5)
        Delay(milliseconds=100)

        ```
    """
    return ConstantDelay(delay=delay)
