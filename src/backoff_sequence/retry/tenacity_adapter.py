"""Retry – TenacityRetryPolicy adapter.

Optional dependency: ``tenacity``.  Install with::

    pip install backoff-sequence[tenacity]
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

from backoff_sequence.retry.policy import to_seconds
from backoff_sequence.sequence import BackoffSequence

T = TypeVar("T")


class TenacityRetryPolicy:
    """Retry policy backed by the ``tenacity`` library.

    Waits come from ``sequence.delay_at(attempt_number - 1)`` so one policy can
    be reused across calls without consuming the sequence.  When the sequence
    has ``max_iterations`` set, the call is attempted at most
    ``max_iterations + 1`` times; otherwise it retries until it succeeds or
    *retry* says stop.

    Parameters
    ----------
    sequence:
        Configured :class:`~backoff_sequence.sequence.BackoffSequence`.
    retry:
        A ``tenacity`` retry predicate, e.g.
        ``tenacity.retry_if_exception_type(IOError)``.  Defaults to retrying
        on any exception.
    reraise:
        Whether to re-raise the original exception after all attempts are
        exhausted.  Defaults to ``True``.
    kwargs:
        Additional keyword arguments forwarded to ``tenacity.Retrying`` /
        ``tenacity.AsyncRetrying``.

    Example
    -------
    ::

        seq = BackoffSequence(ExponentialGrowth(scale=0.5)).set_max(8).set_max_iterations(4)
        policy = TenacityRetryPolicy(seq, retry=retry_if_exception_type(IOError))
        result = await policy.execute_async(my_async_fn)
    """

    def __init__(
        self,
        sequence: BackoffSequence[Any],
        retry: Any = None,
        reraise: bool = True,
        **kwargs: Any,
    ) -> None:
        try:
            import tenacity as ten
        except ImportError as exc:
            raise ImportError(
                "Install 'tenacity' (pip install tenacity) to use TenacityRetryPolicy"
            ) from exc

        self._sequence = sequence
        self._retry = retry or ten.retry_if_exception(lambda _: True)
        self._reraise = reraise
        self._extra_kwargs = kwargs

    def wait(self, retry_state: Any) -> float:
        """``tenacity`` wait callable: delay before the next attempt."""
        return to_seconds(self._sequence.delay_at(retry_state.attempt_number - 1))

    def _stop(self) -> Any:
        import tenacity as ten

        if self._sequence.max_iterations is None:
            return ten.stop_never
        return ten.stop_after_attempt(self._sequence.max_iterations + 1)

    def _build_retrying(self) -> Any:
        import tenacity as ten

        return ten.Retrying(
            stop=self._stop(),
            wait=self.wait,
            retry=self._retry,
            reraise=self._reraise,
            **self._extra_kwargs,
        )

    def _build_async_retrying(self) -> Any:
        import tenacity as ten

        return ten.AsyncRetrying(
            stop=self._stop(),
            wait=self.wait,
            retry=self._retry,
            reraise=self._reraise,
            **self._extra_kwargs,
        )

    def execute(self, func: Callable[[], T]) -> T:
        """Execute *func* synchronously with tenacity retry."""
        return self._build_retrying()(func)

    async def execute_async(self, func: Callable[[], Awaitable[T]]) -> T:
        """Execute *func* asynchronously with tenacity retry."""
        async for attempt in self._build_async_retrying():
            with attempt:
                result = await func()
        return result  # type: ignore[return-value]


__all__ = ["TenacityRetryPolicy"]
