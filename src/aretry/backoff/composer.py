r"""Bounded backoff composition.

``create_backoff`` wraps a raw delay policy, and optionally a jitter
strategy, into a policy whose output is always finite, non-negative,
integral and inside a configured ``[min, max]`` envelope, however the
wrapped strategies behave.
"""

from __future__ import annotations

__all__ = ["BoundedBackoff", "create_backoff"]

import logging
import math
from typing import TYPE_CHECKING

from aretry.backoff.base import Delay, DelayPolicy
from aretry.utils.validation import validate_delay_bounds

if TYPE_CHECKING:
    from aretry.backoff.base import JitterStrategy

logger: logging.Logger = logging.getLogger(__name__)


def _sanitize(ms: float, fallback: float) -> float:
    if not isinstance(ms, (int, float)):
        return fallback
    try:
        finite = math.isfinite(ms)
    except OverflowError:
        finite = False
    return ms if finite and ms >= 0 else fallback


def _clamp(ms: float, min_ms: float, max_ms: float) -> float:
    return max(min_ms, min(max_ms, ms))


class BoundedBackoff(DelayPolicy):
    """Delay policy that jitters, sanitizes and clamps another policy.

    The per-attempt computation is:
    1. ``raw = delay.get_delay(attempt)``
    2. ``jittered = jitter.apply(raw)`` if a jitter strategy is set
    3. a non-finite or negative value is replaced with ``min`` (not 0)
    4. the value is clamped into ``[min, max]``
    5. the value is floored to an integer

    Args:
        delay: The wrapped delay policy.
        jitter: Optional jitter strategy applied to the raw delay.
        min: The delay floor. Must be finite and non-negative.
        max: The delay ceiling. Must be finite, non-negative and
            ``>= min``.

    Raises:
        ValueError: If the bounds are invalid.

    Example:
        ```pycon
        >>> from aretry.backoff import BoundedBackoff, Delay, ExponentialDelay
        >>> policy = BoundedBackoff(
        ...     delay=ExponentialDelay(base=Delay(100)), min=Delay(50), max=Delay(1000)
        ... )
        >>> policy.get_delay(0)
        Delay(milliseconds=100)
        >>> policy.get_delay(10)
        Delay(milliseconds=1000)

        ```
    """

    def __init__(
        self,
        delay: DelayPolicy,
        min: Delay,  # noqa: A002
        max: Delay,  # noqa: A002
        jitter: JitterStrategy | None = None,
    ) -> None:
        self._min_ms, self._max_ms = validate_delay_bounds(min, max)
        self.delay = delay
        self.jitter = jitter
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(delay={self.delay!r}, jitter={self.jitter!r}, "
            f"min={self.min!r}, max={self.max!r})"
        )

    def get_delay(self, attempt: int) -> Delay:
        raw = self.delay.get_delay(attempt)
        jittered = self.jitter.apply(raw) if self.jitter is not None else raw
        sanitized = _sanitize(jittered.milliseconds, self._min_ms)
        if sanitized != jittered.milliseconds:
            logger.debug(
                f"Replacing invalid delay {jittered.milliseconds!r} with floor "
                f"{self._min_ms}ms (attempt={attempt})"
            )
        clamped = _clamp(sanitized, self._min_ms, self._max_ms)
        return Delay(milliseconds=math.floor(clamped))


def create_backoff(
    delay: DelayPolicy,
    jitter: JitterStrategy | None = None,
    *,
    min: Delay,  # noqa: A002
    max: Delay,  # noqa: A002
) -> DelayPolicy:
    """Create a bounded delay policy.

    Bounds are validated before the policy is returned, so an invalid
    envelope fails fast rather than on the first ``get_delay`` call.

    Args:
        delay: The raw delay policy.
        jitter: Optional jitter strategy.
        min: The delay floor. Must be finite and non-negative.
        max: The delay ceiling. Must be finite, non-negative and
            ``>= min``.

    Returns:
        A delay policy that always returns a finite, non-negative,
        integral delay inside ``[min, max]``.

    Raises:
        ValueError: If ``min`` or ``max`` is negative or non-finite, or
            if ``max < min``.

    Example:
        ```pycon
        >>> from aretry.backoff import Delay, constant, create_backoff
        >>> policy = create_backoff(constant(Delay(5000)), min=Delay(50), max=Delay(2000))
        >>> policy.get_delay(0)
        Delay(milliseconds=2000)

        ```
    """
    return BoundedBackoff(delay=delay, jitter=jitter, min=min, max=max)
