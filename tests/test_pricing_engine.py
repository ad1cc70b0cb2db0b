"""
Tests for the pricing engine module.
"""

from decimal import Decimal

import pytest

from gold_catalog.pricing.pricing_engine import (
    calculate_price_usd,
    popularity_out_of_5,
    round_gold_price,
    round_half_up,
)


class TestCalculatePrice:
    """Tests for calculate_price_usd."""

    def test_reference_example(self) -> None:
        """Test (0.85 + 1) * 5g * 60 USD/g."""
        assert calculate_price_usd(0.85, 5, 60) == 555.00

    @pytest.mark.parametrize(
        "score,weight,gold,expected",
        [
            (0.0, 5, 10, 50.00),
            (1.0, 1, 60, 120.00),
            (0.51, 3.4, 60, 308.04),
            (0.82, 1.8, 60, 196.56),
            (0.5, 1, 0.001, 0.00),
        ],
    )
    def test_price_values(self, score: float, weight: float, gold: float, expected: float) -> None:
        assert calculate_price_usd(score, weight, gold) == expected

    def test_price_rounds_half_up_to_cents(self) -> None:
        """Test 1.5 * 1 * 0.003 = 0.0045 rounds to 0.00 and 0.005 to 0.01."""
        assert calculate_price_usd(0.5, 1, 0.003) == 0.00
        assert calculate_price_usd(0.0, 1, 0.005) == 0.01

    def test_price_uses_decimal_inputs(self) -> None:
        """Test binary float error does not leak into the result."""
        # 1.1 * 3 * 1 is 3.3000000000000003 in float arithmetic
        assert calculate_price_usd(0.1, 3, 1) == 3.30


class TestPopularity:
    """Tests for popularity_out_of_5."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (0.85, 4.3),
            (0.51, 2.6),
            (0.0, 0.0),
            (1.0, 5.0),
            (0.9, 4.5),
            (0.81, 4.1),
        ],
    )
    def test_rating_half_up(self, score: float, expected: float) -> None:
        assert popularity_out_of_5(score) == expected


class TestRounding:
    """Tests for rounding helpers."""

    def test_gold_price_four_places(self) -> None:
        assert round_gold_price(60.123456) == 60.1235
        assert round_gold_price(80) == 80.0

    def test_round_half_up_zero_places(self) -> None:
        assert round_half_up(Decimal("2.5"), 0) == Decimal("3")

    def test_round_half_up_places(self) -> None:
        assert round_half_up(Decimal("1.005"), 2) == Decimal("1.01")
