r"""Unit tests for the constant delay strategy."""

from __future__ import annotations

import pytest

from aretry.backoff import ConstantDelay, Delay, constant


@pytest.mark.parametrize("milliseconds", [100, 0, 60000])
@pytest.mark.parametrize("attempt", [0, 1, 5, 100])
def test_constant_returns_same_delay(milliseconds: int, attempt: int) -> None:
    """Test that constant ignores the attempt number."""
    assert constant(Delay(milliseconds=milliseconds)).get_delay(attempt) == Delay(milliseconds)


def test_constant_returns_copy() -> None:
    """Test that constant returns a new Delay on each call."""
    delay = Delay(milliseconds=100)
    policy = constant(delay)
    assert policy.get_delay(0) == delay
    assert policy.get_delay(0) is not delay


def test_constant_is_repeatable() -> None:
    """Test that constant can be called in any order, repeatedly."""
    policy = constant(Delay(250))
    assert [policy.get_delay(attempt) for attempt in (5, 0, 5, 1)] == [Delay(250)] * 4


def test_constant_does_not_validate() -> None:
    """Test that constant accepts values create_backoff would reject."""
    assert constant(Delay(-5)).get_delay(0) == Delay(-5)


def test_constant_delay_class() -> None:
    """Test the ConstantDelay class directly."""
    policy = ConstantDelay(delay=Delay(2.5))
    assert policy.delay == Delay(2.5)
    assert policy.get_delay(10) == Delay(2.5)
    assert repr(policy) == "ConstantDelay(delay=Delay(milliseconds=2.5))"
