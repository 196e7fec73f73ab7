"""Unit tests for growth functions."""

from __future__ import annotations

import math

import pytest

from backoff_sequence import (
    BackoffSequence,
    ConstantGrowth,
    ExponentialGrowth,
    GrowthFunction,
    LinearGrowth,
)


# ---------------------------------------------------------------------------
# ConstantGrowth
# ---------------------------------------------------------------------------


class TestConstantGrowth:
    def test_always_returns_same(self) -> None:
        g = ConstantGrowth(delay=2.0)
        for i in range(5):
            assert g(i) == 2.0

    def test_default_delay(self) -> None:
        assert ConstantGrowth()(0) == 1.0


# ---------------------------------------------------------------------------
# LinearGrowth
# ---------------------------------------------------------------------------


class TestLinearGrowth:
    def test_factor_2(self) -> None:
        seq = BackoffSequence(LinearGrowth(factor=2)).set_max_iterations(5)
        assert list(seq) == [0, 2, 4, 6, 8]

    def test_offset_shifts_start(self) -> None:
        seq = BackoffSequence(LinearGrowth(factor=10, offset=10)).set_max_iterations(10)
        assert list(seq) == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


# ---------------------------------------------------------------------------
# ExponentialGrowth
# ---------------------------------------------------------------------------


class TestExponentialGrowth:
    def test_doubles_each_index(self) -> None:
        g = ExponentialGrowth()
        assert [g(i) for i in range(4)] == [1.0, 2.0, 4.0, 8.0]

    def test_scale(self) -> None:
        g = ExponentialGrowth(scale=0.1)
        assert g(0) == pytest.approx(0.1)
        assert g(3) == pytest.approx(0.8)

    def test_binary(self) -> None:
        seq = BackoffSequence(ExponentialGrowth.binary()).set_max_iterations(6)
        assert list(seq) == [0, 1, 3, 7, 15, 31]

    def test_base_10_clamped(self) -> None:
        seq = BackoffSequence(ExponentialGrowth(base=10, offset=-1)).set_max(150).set_max_iterations(5)
        assert list(seq) == [0, 9, 99, 150, 150]

    def test_overflow_saturates_to_inf(self) -> None:
        assert ExponentialGrowth(base=2.0)(5000) == math.inf

    def test_integer_base_does_not_overflow(self) -> None:
        assert ExponentialGrowth(base=2, scale=1)(200) == 2 ** 200

    def test_overflow_with_negative_scale_saturates_to_neg_inf(self) -> None:
        assert ExponentialGrowth(scale=-1.0)(5000) == -math.inf

    def test_overflow_with_zero_scale_returns_offset(self) -> None:
        assert ExponentialGrowth(scale=0.0, offset=2.0)(5000) == 2.0

    def test_overflow_with_negative_base_follows_parity(self) -> None:
        g = ExponentialGrowth(base=-2.0)
        assert g(5000) == math.inf
        assert g(5001) == -math.inf

    def test_negative_scale_overflow_clamps_to_min(self) -> None:
        seq = BackoffSequence(ExponentialGrowth(scale=-1.0)).set_min(0.0).set_max(10.0)
        assert seq.delay_at(5000) == 0.0

    def test_linear_infinite_factor_clamped_within_bounds(self) -> None:
        seq = BackoffSequence(LinearGrowth(factor=math.inf)).set_min(0.5).set_max(10.0).set_max_iterations(3)
        assert list(seq) == [0.5, 10.0, 10.0]


# ---------------------------------------------------------------------------
# GrowthFunction contract
# ---------------------------------------------------------------------------


class TestGrowthFunction:
    def test_negative_index_rejected(self) -> None:
        with pytest.raises(ValueError, match="index"):
            LinearGrowth()(-1)

    def test_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            GrowthFunction()  # type: ignore[abstract]

    def test_repr(self) -> None:
        assert repr(ConstantGrowth(3)) == "ConstantGrowth(delay=3)"
        assert "base=2.0" in repr(ExponentialGrowth())
        assert "factor=1.0" in repr(LinearGrowth())
