r"""Outcome of one non-final step of the attempt loop."""

from __future__ import annotations

__all__ = ["Continue", "Done", "Outcome"]

from dataclasses import dataclass
from typing import Union

from aretry.retry.result import RetryFailure, RetrySuccess


@dataclass(frozen=True)
class Continue:
    """The loop moves on to the next attempt.

    Attributes:
        last_error: The error of the attempt that just failed, or
            ``None`` if it returned a value that has to be retried.
    """

    last_error: Exception | None = None


@dataclass(frozen=True)
class Done:
    """The loop ends with ``result``."""

    result: RetrySuccess | RetryFailure


Outcome = Union[Continue, Done]
