r"""Unit tests for retry configuration."""

from __future__ import annotations

import dataclasses

import pytest
from coola.equality import objects_are_equal

from aretry.backoff import ConstantDelay, Delay, constant
from aretry.retry import (
    DEFAULT_DELAY_MS,
    DEFAULT_MAX_ATTEMPTS,
    ErrorPredicate,
    ResultPredicate,
    RetryConfig,
)
from aretry.signal import CancellationToken


def test_default_constants() -> None:
    assert DEFAULT_MAX_ATTEMPTS == 3
    assert DEFAULT_DELAY_MS == 100


def test_retry_config_defaults() -> None:
    """Test the default values of the optional fields."""
    delay = constant(Delay(DEFAULT_DELAY_MS))
    config = RetryConfig(delay=delay)
    assert config.max_attempts == DEFAULT_MAX_ATTEMPTS
    assert config.delay is delay
    assert config.error_predicate is None
    assert config.result_predicate is None
    assert config.observer is None
    assert config.signal is None
    assert config.max_elapsed_ms is None


def test_retry_config_default_delay() -> None:
    """Test that the default delay is a constant DEFAULT_DELAY_MS."""
    config = RetryConfig()
    assert isinstance(config.delay, ConstantDelay)
    assert [config.delay.get_delay(attempt) for attempt in (0, 1, 5)] == [
        Delay(DEFAULT_DELAY_MS)
    ] * 3


def test_retry_config_default_delay_not_shared() -> None:
    assert RetryConfig().delay is not RetryConfig().delay


def test_retry_config_keyword_only() -> None:
    with pytest.raises(TypeError):
        RetryConfig(3, constant(Delay(1)))  # type: ignore[misc]


def test_retry_config_is_frozen() -> None:
    config = RetryConfig(delay=constant(Delay(1)))
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.max_attempts = 5  # type: ignore[misc]


def test_retry_config_invalid_values_are_not_rejected_at_construction() -> None:
    """Test that validation is deferred until validate() is called."""
    config = RetryConfig(max_attempts=0, delay=constant(Delay(1)))
    with pytest.raises(ValueError, match=r"max_attempts must be an integer >= 1, got 0"):
        config.validate()


def test_retry_config_validate_max_elapsed_ms() -> None:
    config = RetryConfig(delay=constant(Delay(1)), max_elapsed_ms=-5)
    with pytest.raises(ValueError, match=r"max_elapsed_ms must be a finite number >= 0, got -5"):
        config.validate()


def test_retry_config_validate_valid() -> None:
    RetryConfig(max_attempts=1, delay=constant(Delay(1)), max_elapsed_ms=0).validate()


###############################
#     Tests for merge         #
###############################


def test_retry_config_merge_overrides() -> None:
    """Test that merge returns a new config with the overrides
    applied."""
    config = RetryConfig(delay=constant(Delay(1)))
    token = CancellationToken()
    merged = config.merge(max_attempts=7, signal=token)
    assert merged is not config
    assert merged.max_attempts == 7
    assert merged.signal is token
    assert merged.delay is config.delay
    assert config.max_attempts == DEFAULT_MAX_ATTEMPTS


def test_retry_config_merge_ignores_none() -> None:
    """Test that None overrides keep the current values."""
    config = RetryConfig(max_attempts=5, delay=constant(Delay(1)), max_elapsed_ms=100)
    assert config.merge(max_attempts=None, max_elapsed_ms=None) == config


def test_retry_config_merge_all_fields() -> None:
    """Test the full field set of a merged config."""
    delay = constant(Delay(1))
    token = CancellationToken()
    observer = object()
    merged = RetryConfig(delay=delay).merge(
        max_attempts=4, observer=observer, signal=token, max_elapsed_ms=2_000
    )
    assert objects_are_equal(
        {field.name: getattr(merged, field.name) for field in dataclasses.fields(merged)},
        {
            "max_attempts": 4,
            "delay": delay,
            "error_predicate": None,
            "result_predicate": None,
            "observer": observer,
            "signal": token,
            "max_elapsed_ms": 2_000,
        },
    )


def test_retry_config_merge_unknown_field() -> None:
    with pytest.raises(TypeError):
        RetryConfig(delay=constant(Delay(1))).merge(unknown=1)


###################################
#     Tests for predicates        #
###################################


def test_error_predicate_is_abstract() -> None:
    with pytest.raises(TypeError, match=r"Can't instantiate abstract class"):
        ErrorPredicate()  # type: ignore[abstract]


def test_result_predicate_is_abstract() -> None:
    with pytest.raises(TypeError, match=r"Can't instantiate abstract class"):
        ResultPredicate()  # type: ignore[abstract]
