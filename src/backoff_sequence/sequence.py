"""Backoff sequence – clamped, optionally bounded stream of retry delays.

A :class:`BackoffSequence` maps each attempt index (0-based) through a growth
function, clamps the result to ``[min_delay, max_delay]`` and stops after
``max_iterations`` delays when a cap is configured.  It never sleeps; waiting
is up to the caller (see :mod:`backoff_sequence.retry`).

Usage::

    seq = (
        BackoffSequence(ExponentialGrowth(scale=0.1))
        .set_min(0.5)
        .set_max(30.0)
        .set_max_iterations(8)
    )
    for delay in seq:
        ...
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterator, TypeVar

from backoff_sequence.errors import InvalidBackoffConfigError

D = TypeVar("D")
logger = logging.getLogger(__name__)


def clamp(value: D, lower: D | None = None, upper: D | None = None) -> D:
    """Two-sided clamp; a ``None`` bound leaves that side open.

    An unordered value (NaN) is out of range on both sides: it becomes
    *lower*, or *upper* when only that bound is set.
    """
    if value != value:  # noqa: PLR0124
        if lower is not None:
            return lower
        if upper is not None:
            return upper
        return value
    if upper is not None and value > upper:  # type: ignore[operator]
        value = upper
    if lower is not None and value < lower:  # type: ignore[operator]
        value = lower
    return value


class BackoffSequence(Generic[D]):
    """Stateful generator of clamped backoff delays.

    Parameters
    ----------
    growth_fn:
        Callable mapping a non-negative attempt index to a raw delay.  It is
        expected to be pure; the sequence may call it with the same index more
        than once (see :meth:`delay_at`).
    """

    def __init__(self, growth_fn: Callable[[int], D]) -> None:
        if not callable(growth_fn):
            raise TypeError(f"growth_fn must be callable, got {type(growth_fn).__name__}")
        self._growth_fn = growth_fn
        self.min_delay: D | None = None
        self.max_delay: D | None = None
        self.max_iterations: int | None = None
        self.current_index = 0

    def __repr__(self) -> str:
        return (
            f"BackoffSequence(min_delay={self.min_delay!r}, max_delay={self.max_delay!r}, "
            f"max_iterations={self.max_iterations!r}, current_index={self.current_index})"
        )

    @property
    def growth_fn(self) -> Callable[[int], D]:
        return self._growth_fn

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_min(self, delay: D | None) -> BackoffSequence[D]:
        self.min_delay = delay
        return self

    def set_max(self, delay: D | None) -> BackoffSequence[D]:
        self.max_delay = delay
        return self

    def set_max_iterations(self, count: int | None) -> BackoffSequence[D]:
        """Cap the number of delays produced; ``0`` yields none, ``None`` removes the cap."""
        if count is not None and count < 0:
            raise InvalidBackoffConfigError(
                f"max_iterations must be >= 0, got {count}",
                detail={"max_iterations": count},
            )
        self.max_iterations = count
        return self

    # ------------------------------------------------------------------
    # Production
    # ------------------------------------------------------------------

    @property
    def exhausted(self) -> bool:
        return self.max_iterations is not None and self.current_index >= self.max_iterations

    def delay_at(self, index: int) -> D:
        """Return the clamped delay for *index* without advancing the sequence."""
        self._check_bounds()
        return clamp(self._growth_fn(index), self.min_delay, self.max_delay)

    def next_delay(self) -> D | None:
        """Return the next delay, or ``None`` once ``max_iterations`` is reached."""
        if self.exhausted:
            return None
        delay = self.delay_at(self.current_index)
        self.current_index += 1
        if self.exhausted:
            logger.debug("backoff sequence exhausted after %d delays", self.current_index)
        return delay

    produce_next = next_delay

    def reset(self) -> None:
        """Rewind to index 0; configuration is kept."""
        logger.debug("backoff sequence reset at index=%d", self.current_index)
        self.current_index = 0

    def __iter__(self) -> BackoffIterator[D]:
        return BackoffIterator(self)

    def _check_bounds(self) -> None:
        lower, upper = self.min_delay, self.max_delay
        if lower is not None and upper is not None and lower > upper:  # type: ignore[operator]
            raise InvalidBackoffConfigError(
                f"min_delay {lower!r} is greater than max_delay {upper!r}",
                detail={"min_delay": lower, "max_delay": upper},
            )


class BackoffIterator(Iterator[D]):
    """Forward-only view over a :class:`BackoffSequence`.

    Shares the sequence's counter: pulling from the iterator advances
    ``current_index`` on the sequence itself.
    """

    def __init__(self, sequence: BackoffSequence[D]) -> None:
        self._sequence = sequence

    @property
    def sequence(self) -> BackoffSequence[D]:
        return self._sequence

    def __iter__(self) -> BackoffIterator[D]:
        return self

    def __next__(self) -> D:
        if self._sequence.exhausted:
            raise StopIteration
        return self._sequence.next_delay()  # type: ignore[return-value]

    def __length_hint__(self) -> Any:
        seq = self._sequence
        if seq.max_iterations is None:
            return NotImplemented
        return max(seq.max_iterations - seq.current_index, 0)


__all__ = ["BackoffIterator", "BackoffSequence", "clamp"]
