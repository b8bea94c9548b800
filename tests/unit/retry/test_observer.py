r"""Unit tests for observer dispatching."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest

from aretry.retry import AttemptContext, ObserverManager, RetryObserver


@pytest.fixture
def ctx() -> AttemptContext:
    return AttemptContext(attempt=0, attempts_so_far=1, started_at=0, elapsed_ms=0)


@pytest.mark.asyncio
async def test_retry_observer_hooks_are_noops(ctx: AttemptContext) -> None:
    observer = RetryObserver()
    info = ctx.with_info(100, is_last_attempt=False)
    assert await observer.on_attempt(ctx) is None
    assert await observer.on_error(ValueError(), info) is None
    assert await observer.on_result_retry(None, info) is None
    assert await observer.on_success("ok", ctx) is None
    assert await observer.on_exhausted(ValueError(), info) is None
    assert await observer.on_aborted(ctx) is None


@pytest.mark.asyncio
async def test_observer_manager_without_observer(ctx: AttemptContext) -> None:
    """Test that dispatching without an observer does nothing."""
    manager = ObserverManager(None)
    await manager.on_attempt(ctx)
    await manager.on_aborted(ctx)


@pytest.mark.asyncio
async def test_observer_manager_sync_hook(ctx: AttemptContext) -> None:
    observer = Mock(spec=["on_success"])
    await ObserverManager(observer).on_success("ok", ctx)
    observer.on_success.assert_called_once_with("ok", ctx)


@pytest.mark.asyncio
async def test_observer_manager_async_hook(ctx: AttemptContext) -> None:
    """Test that coroutine hooks are awaited."""
    observer = Mock(spec=["on_error"])
    observer.on_error = AsyncMock()
    error = ValueError()
    info = ctx.with_info(5, is_last_attempt=False)
    await ObserverManager(observer).on_error(error, info)
    observer.on_error.assert_awaited_once_with(error, info)


@pytest.mark.asyncio
async def test_observer_manager_missing_hook(ctx: AttemptContext) -> None:
    """Test that a hook the observer does not define is skipped."""
    observer = Mock(spec=["on_success"])
    await ObserverManager(observer).on_attempt(ctx)
    observer.on_success.assert_not_called()


@pytest.mark.asyncio
async def test_observer_manager_hook_exception_propagates(ctx: AttemptContext) -> None:
    observer = Mock(spec=["on_aborted"])
    observer.on_aborted.side_effect = RuntimeError("bug")
    with pytest.raises(RuntimeError, match=r"bug"):
        await ObserverManager(observer).on_aborted(ctx)
