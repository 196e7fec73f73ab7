"""Retry – RetryPolicy and RetryExecutor driven by a backoff sequence."""
from __future__ import annotations

import asyncio
import datetime
import functools
import logging
import time
from typing import Any, Awaitable, Callable, TypeVar

from backoff_sequence.sequence import BackoffSequence

T = TypeVar("T")
logger = logging.getLogger(__name__)


def to_seconds(delay: Any) -> float:
    """Convert a produced delay (seconds or ``timedelta``) to float seconds."""
    if isinstance(delay, datetime.timedelta):
        return delay.total_seconds()
    return float(delay)


class RetryPolicy:
    """Retry a callable, waiting the delays of a fresh sequence between attempts.

    A sequence cannot be rewound by its consumers, so the policy takes a
    factory and builds one sequence per :meth:`execute` call.  The call is
    attempted once more than the sequence has delays; when the sequence is
    exhausted the last exception is re-raised.

    *sleep* waits between synchronous attempts and *async_sleep* between
    asynchronous ones (defaults: :func:`time.sleep`, :func:`asyncio.sleep`).
    """

    def __init__(
        self,
        sequence_factory: Callable[[], BackoffSequence[Any]],
        retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
        sleep: Callable[[float], None] | None = None,
        async_sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self.sequence_factory = sequence_factory
        self.retryable_exceptions = retryable_exceptions
        self._sleep = sleep or time.sleep
        self._async_sleep = async_sleep or asyncio.sleep

    def _should_retry(self, exc: Exception) -> bool:
        return isinstance(exc, self.retryable_exceptions)

    def _next_delay(self, sequence: BackoffSequence[Any], attempt: int, exc: Exception) -> float | None:
        if not self._should_retry(exc):
            return None
        delay = sequence.next_delay()
        if delay is None:
            logger.warning("retry gave up attempts=%d exc=%r", attempt, exc)
            return None
        seconds = to_seconds(delay)
        logger.debug("retry attempt=%d delay=%.2fs exc=%r", attempt, seconds, exc)
        return seconds

    def execute(self, func: Callable[[], T]) -> T:
        """Execute *func* synchronously with retry."""
        sequence = self.sequence_factory()
        attempt = 0
        while True:
            attempt += 1
            try:
                return func()
            except Exception as exc:
                delay = self._next_delay(sequence, attempt, exc)
                if delay is None:
                    raise
            self._sleep(delay)

    async def execute_async(self, func: Callable[[], Awaitable[T]]) -> T:
        """Execute *func* asynchronously with retry."""
        sequence = self.sequence_factory()
        attempt = 0
        while True:
            attempt += 1
            try:
                return await func()
            except Exception as exc:
                delay = self._next_delay(sequence, attempt, exc)
                if delay is None:
                    raise
            await self._async_sleep(delay)


class RetryExecutor:
    """Decorator-friendly wrapper around ``RetryPolicy`` for coroutine functions."""

    def __init__(self, policy: RetryPolicy) -> None:
        self._policy = policy

    def __call__(self, func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            return await self._policy.execute_async(lambda: func(*args, **kwargs))

        return wrapper


__all__ = ["RetryExecutor", "RetryPolicy", "to_seconds"]
