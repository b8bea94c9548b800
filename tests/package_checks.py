from __future__ import annotations

import asyncio
import logging
import sys

import aretry
from aretry.backoff import Delay

logger: logging.Logger = logging.getLogger(__name__)


async def flaky(ctx: aretry.AttemptContext) -> str:
    if ctx.attempt < 2:
        msg = f"attempt {ctx.attempt} failed"
        raise ConnectionError(msg)
    return "ok"


def check_execute() -> None:
    logger.info("Checking execute...")
    config = aretry.RetryConfig(
        max_attempts=3,
        delay=aretry.create_backoff(
            aretry.exponential(Delay(10)), min=Delay(0), max=Delay(50)
        ),
        observer=aretry.LoggingObserver(level=logging.INFO),
    )
    value = asyncio.run(aretry.create_retry_executor().execute(flaky, config))
    assert value == "ok"


def check_cancel() -> None:
    logger.info("Checking cancellation...")
    token = aretry.CancellationToken()
    token.cancel()
    config = aretry.RetryConfig(delay=aretry.constant(Delay(10)), signal=token)
    result = asyncio.run(aretry.create_retry_executor().try_execute(flaky, config))
    assert result.aborted
    assert result.attempts == 0


def main() -> None:
    r"""Run all package checks to validate installation and
    functionality."""
    try:
        check_execute()
        check_cancel()

        logger.info("✅ All package checks passed successfully!")
    except Exception:
        logger.exception("❌ Package check failed")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
