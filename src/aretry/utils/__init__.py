r"""Utility functions for retry configuration and delay bounds."""

from __future__ import annotations

__all__ = ["validate_delay_bounds", "validate_retry_params"]

from aretry.utils.validation import validate_delay_bounds, validate_retry_params
