r"""aretry - Asynchronous retry engine with bounded backoff.

This package runs caller-supplied coroutine functions until they
succeed, exhaust their attempts, run out of wall-clock budget, or are
cancelled, and computes safe delays between attempts.

Key Features:
    - Attempt loop with strict ordering and exact attempt counting
    - Cooperative cancellation through ``CancellationToken``
    - Wall-clock budget (``max_elapsed_ms``) that never overruns
    - Error and result predicates with explicit defaults
    - Observer hooks for logging, metrics and alerting
    - Constant, exponential and linear delay strategies
    - Full, equal and decorrelated jitter
    - ``create_backoff`` to sanitize and clamp any delay policy

Example:
    ```pycon
    >>> import asyncio
    >>> from aretry import RetryConfig, create_backoff, create_retry_executor
    >>> from aretry.backoff import Delay, FullJitter, exponential
    >>> delay = create_backoff(
    ...     exponential(base=Delay(100)), FullJitter(), min=Delay(10), max=Delay(2000)
    ... )
    >>> async def fetch(ctx):
    ...     return "data"
    ...
    >>> asyncio.run(
    ...     create_retry_executor().execute(fetch, RetryConfig(max_attempts=3, delay=delay))
    ... )
    'data'

    ```
"""

from __future__ import annotations

__all__ = [
    "AbortError",
    "AttemptContext",
    "CancellationToken",
    "Clock",
    "Delay",
    "DelayPolicy",
    "ErrorPredicate",
    "FakeClock",
    "JitterStrategy",
    "LoggingObserver",
    "ResultPredicate",
    "RetryAttemptInfo",
    "RetryConfig",
    "RetryExecutor",
    "RetryFailure",
    "RetryObserver",
    "RetryResult",
    "RetrySuccess",
    "RetryTimeoutError",
    "SystemClock",
    "__version__",
    "constant",
    "create_backoff",
    "create_retry_executor",
    "exponential",
    "linear",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.backoff import (
    Delay,
    DelayPolicy,
    JitterStrategy,
    constant,
    create_backoff,
    exponential,
    linear,
)
from aretry.clock import Clock, FakeClock, SystemClock
from aretry.exceptions import AbortError, RetryTimeoutError
from aretry.retry import (
    AttemptContext,
    ErrorPredicate,
    ResultPredicate,
    RetryAttemptInfo,
    RetryConfig,
    RetryExecutor,
    RetryFailure,
    RetryObserver,
    RetryResult,
    RetrySuccess,
    create_retry_executor,
)
from aretry.signal import CancellationToken
from aretry.utils.logging import LoggingObserver

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
