r"""Retry package implementing the attempt loop and its collaborators.

Public API:
    - RetryConfig: Configuration for one retry call
    - ErrorPredicate / ResultPredicate: Retry decision interfaces
    - RetryObserver: Base class for lifecycle observers
    - AttemptContext / RetryAttemptInfo: Per-attempt context objects
    - RetrySuccess / RetryFailure: Terminal results
    - RetryDecider: Default predicate policy
    - RetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY_MS",
    "DEFAULT_MAX_ATTEMPTS",
    "AttemptContext",
    "ErrorPredicate",
    "ObserverManager",
    "ResultPredicate",
    "RetryAttemptInfo",
    "RetryConfig",
    "RetryDecider",
    "RetryExecutor",
    "RetryFailure",
    "RetryObserver",
    "RetryResult",
    "RetrySuccess",
    "create_retry_executor",
]

from aretry.retry.config import (
    DEFAULT_DELAY_MS,
    DEFAULT_MAX_ATTEMPTS,
    ErrorPredicate,
    ResultPredicate,
    RetryConfig,
)
from aretry.retry.context import AttemptContext, RetryAttemptInfo
from aretry.retry.decider import RetryDecider
from aretry.retry.executor import RetryExecutor, create_retry_executor
from aretry.retry.observer import ObserverManager, RetryObserver
from aretry.retry.result import RetryFailure, RetryResult, RetrySuccess
