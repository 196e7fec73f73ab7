"""Growth functions – raw (pre-clamp) delay in seconds for an attempt index."""
from __future__ import annotations

import abc
import math


class GrowthFunction(abc.ABC):
    """Compute the raw delay (seconds) for the 0-based attempt *index*."""

    def __call__(self, index: int) -> float:
        if index < 0:
            raise ValueError(f"index must be >= 0, got {index}")
        return self.compute(index)

    @abc.abstractmethod
    def compute(self, index: int) -> float: ...


class ConstantGrowth(GrowthFunction):
    """Fixed delay for every attempt."""

    def __init__(self, delay: float = 1.0) -> None:
        self._delay = delay

    def __repr__(self) -> str:
        return f"ConstantGrowth(delay={self._delay!r})"

    def compute(self, index: int) -> float:  # noqa: ARG002
        return self._delay


class LinearGrowth(GrowthFunction):
    """Delay grows linearly: ``offset + factor * index``."""

    def __init__(self, factor: float = 1.0, offset: float = 0.0) -> None:
        self._factor = factor
        self._offset = offset

    def __repr__(self) -> str:
        return f"LinearGrowth(factor={self._factor!r}, offset={self._offset!r})"

    def compute(self, index: int) -> float:
        return self._offset + self._factor * index


class ExponentialGrowth(GrowthFunction):
    """Delay grows exponentially: ``offset + scale * base^index``.

    Saturates to an infinity carrying the sign of ``scale * base^index`` once
    the result no longer fits in a float, so a clamped, unbounded sequence
    keeps producing the matching bound.  A zero ``scale`` yields ``offset``.
    """

    def __init__(self, base: float = 2.0, scale: float = 1.0, offset: float = 0.0) -> None:
        self._base = base
        self._scale = scale
        self._offset = offset

    @classmethod
    def binary(cls) -> ExponentialGrowth:
        """``2^index - 1``: 0, 1, 3, 7, 15, ..."""
        return cls(base=2, scale=1, offset=-1)

    def __repr__(self) -> str:
        return (
            f"ExponentialGrowth(base={self._base!r}, scale={self._scale!r}, "
            f"offset={self._offset!r})"
        )

    def compute(self, index: int) -> float:
        try:
            return self._offset + self._scale * self._base ** index
        except OverflowError:
            return self._saturate(index)

    def _saturate(self, index: int) -> float:
        if self._scale == 0:
            return self._offset
        sign = math.copysign(1.0, self._scale)
        if self._base < 0 and index % 2:
            sign = -sign
        return self._offset + sign * math.inf


__all__ = ["ConstantGrowth", "ExponentialGrowth", "GrowthFunction", "LinearGrowth"]
