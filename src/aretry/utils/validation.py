r"""Parameter validation utilities for retry configuration and delay
bounds.

This module provides validation functions that reject invalid
configuration before any attempt runs or any delay is computed.
"""

from __future__ import annotations

__all__ = ["validate_delay_bounds", "validate_retry_params"]

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.backoff.base import Delay


def _is_finite_number(value: object) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large to convert to a float
        return False


def validate_retry_params(max_attempts: int, max_elapsed_ms: float | None = None) -> None:
    """Validate retry parameters.

    Args:
        max_attempts: Total number of attempts (not retries). Must be an
            integer >= 1. A value of 1 means a single try with no retry.
        max_elapsed_ms: Optional wall-clock budget in milliseconds for
            the whole call. Must be finite and >= 0 if provided.

    Raises:
        ValueError: If max_attempts is not an integer >= 1, or if
            max_elapsed_ms is negative or not finite.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_retry_params
        >>> validate_retry_params(max_attempts=3)
        >>> validate_retry_params(max_attempts=1, max_elapsed_ms=0)
        >>> validate_retry_params(max_attempts=0)
        Traceback (most recent call last):
        ...
        ValueError: max_attempts must be an integer >= 1, got 0

        ```
    """
    if not isinstance(max_attempts, int) or isinstance(max_attempts, bool) or max_attempts < 1:
        msg = f"max_attempts must be an integer >= 1, got {max_attempts!r}"
        raise ValueError(msg)
    if max_elapsed_ms is not None and (not _is_finite_number(max_elapsed_ms) or max_elapsed_ms < 0):
        msg = f"max_elapsed_ms must be a finite number >= 0, got {max_elapsed_ms!r}"
        raise ValueError(msg)


def validate_delay_bounds(min: Delay, max: Delay) -> tuple[float, float]:  # noqa: A002
    """Validate a ``[min, max]`` delay envelope.

    Args:
        min: The delay floor.
        max: The delay ceiling.

    Returns:
        The ``(min_ms, max_ms)`` pair in milliseconds.

    Raises:
        ValueError: If either bound is negative or not finite, or if
            ``max < min``.

    Example:
        ```pycon
        >>> from aretry.backoff import Delay
        >>> from aretry.utils.validation import validate_delay_bounds
        >>> validate_delay_bounds(Delay(50), Delay(2000))
        (50, 2000)

        ```
    """
    min_ms = min.milliseconds
    max_ms = max.milliseconds
    if not _is_finite_number(min_ms) or min_ms < 0:
        msg = f"min.milliseconds must be finite and >= 0, got {min_ms!r}"
        raise ValueError(msg)
    if not _is_finite_number(max_ms) or max_ms < 0:
        msg = f"max.milliseconds must be finite and >= 0, got {max_ms!r}"
        raise ValueError(msg)
    if max_ms < min_ms:
        msg = f"max.milliseconds must be >= min.milliseconds, got {max_ms!r} < {min_ms!r}"
        raise ValueError(msg)
    return min_ms, max_ms
