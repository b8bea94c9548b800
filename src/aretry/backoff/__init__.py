r"""Delay policies, jitter strategies and bounded backoff composition.

This package provides raw delay strategies (constant, exponential,
linear), jitter strategies (full, equal, decorrelated) and
``create_backoff``, which composes them into a policy whose output is
always safe to hand to a timer.
"""

from __future__ import annotations

__all__ = [
    "BoundedBackoff",
    "ConstantDelay",
    "DecorrelatedJitter",
    "Delay",
    "DelayPolicy",
    "EqualJitter",
    "ExponentialDelay",
    "FullJitter",
    "JitterStrategy",
    "LinearDelay",
    "RandomSource",
    "SystemRandom",
    "constant",
    "create_backoff",
    "exponential",
    "linear",
]

from aretry.backoff.base import Delay, DelayPolicy, JitterStrategy, RandomSource
from aretry.backoff.composer import BoundedBackoff, create_backoff
from aretry.backoff.constant import ConstantDelay, constant
from aretry.backoff.exponential import ExponentialDelay, exponential
from aretry.backoff.jitter import DecorrelatedJitter, EqualJitter, FullJitter, SystemRandom
from aretry.backoff.linear import LinearDelay, linear
