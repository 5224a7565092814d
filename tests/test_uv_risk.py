"""
Unit tests for UV index classification.
"""
import math
from decimal import Decimal
from fractions import Fraction

import pytest

from models import InvalidInputError, ProtectiveMeasure, RiskResult, RiskTier
from uv_risk import classify_uv_index, protective_measures, risk_tier_for, round_half_up


class TestThresholds:
    """Tier boundaries on the rounded UV index"""

    @pytest.mark.parametrize(
        "uv_index, tier",
        [
            (0, RiskTier.LOW),
            (2, RiskTier.LOW),
            (3, RiskTier.MODERATE),
            (5, RiskTier.MODERATE),
            (6, RiskTier.HIGH),
            (7, RiskTier.HIGH),
            (8, RiskTier.VERY_HIGH),
            (10, RiskTier.VERY_HIGH),
            (11, RiskTier.EXTREME),
            (14, RiskTier.EXTREME),
            (25, RiskTier.EXTREME),
        ],
    )
    def test_boundary_values(self, uv_index, tier):
        result = classify_uv_index(uv_index)

        assert isinstance(result, RiskResult)
        assert result.tier == tier

    def test_fractional_values_are_rounded_before_classification(self):
        """2.4 stays Low, 2.5 rounds up into Moderate"""
        assert classify_uv_index(2.4).tier == RiskTier.LOW
        assert classify_uv_index(2.5).tier == RiskTier.MODERATE
        assert classify_uv_index(10.49).tier == RiskTier.VERY_HIGH
        assert classify_uv_index(10.5).tier == RiskTier.EXTREME

    def test_round_half_up(self):
        assert round_half_up(6.4) == 6
        assert round_half_up(6.5) == 7
        assert round_half_up(0.49) == 0
        assert round_half_up(-3.5) == -3

    def test_risk_tier_for_takes_integers(self):
        assert risk_tier_for(5) == RiskTier.MODERATE
        assert risk_tier_for(11) == RiskTier.EXTREME


class TestMeasures:
    """Progressive protective measures per tier"""

    def test_measure_counts(self):
        counts = [len(protective_measures(tier)) for tier in RiskTier]

        assert counts == [4, 5, 6, 7, 7]
        assert counts == sorted(counts)

    def test_each_tier_extends_the_previous_one(self):
        tiers = list(RiskTier)
        for lower, higher in zip(tiers, tiers[1:]):
            smaller = protective_measures(lower)
            larger = protective_measures(higher)
            assert larger[: len(smaller)] == smaller

    def test_fixed_order(self):
        assert protective_measures(RiskTier.EXTREME) == [
            ProtectiveMeasure.SUNGLASSES,
            ProtectiveMeasure.SUNSCREEN,
            ProtectiveMeasure.HAT,
            ProtectiveMeasure.PROTECTIVE_CLOTHING,
            ProtectiveMeasure.SHADE,
            ProtectiveMeasure.REDUCED_EXPOSURE_TIME,
            ProtectiveMeasure.AVOID_SUN,
        ]

    def test_low_stops_before_shade(self):
        measures = classify_uv_index(1).measures

        assert ProtectiveMeasure.PROTECTIVE_CLOTHING in measures
        assert ProtectiveMeasure.SHADE not in measures


class TestResultFields:

    def test_high_scenario(self):
        """6.4 rounds to 6: High, six measures, reduce-exposure advice"""
        result = classify_uv_index(6.4)

        assert result.uv_index == 6
        assert result.raw_uv_index == 6.4
        assert result.tier == RiskTier.HIGH
        assert result.label == "High"
        assert result.color == "orange"
        assert len(result.measures) == 6
        assert "reduce your sun-time" in result.advisory_text

    @pytest.mark.parametrize(
        "uv_index, color",
        [(1, "green"), (4, "yellow"), (7, "orange"), (9, "red"), (12, "purple")],
    )
    def test_colors(self, uv_index, color):
        assert classify_uv_index(uv_index).color == color

    def test_extreme_advice(self):
        assert classify_uv_index(12).advisory_text == "UV off the Charts! You should be off the sun!"

    def test_idempotent(self):
        assert classify_uv_index(8.2) == classify_uv_index(8.2)

    def test_other_real_numbers_are_accepted(self):
        assert classify_uv_index(Fraction(13, 2)).tier == RiskTier.HIGH


class TestInvalidInput:
    """Bad values come back as InvalidInputError, never a default tier"""

    @pytest.mark.parametrize(
        "value",
        [float("nan"), math.inf, -math.inf, -1, -0.2, None, "6", True, [6]],
    )
    def test_rejected(self, value):
        result = classify_uv_index(value)

        assert isinstance(result, InvalidInputError)
        assert result.error == "InvalidInput"
        assert result.message.startswith("Invalid UV index")

    def test_does_not_raise(self):
        result = classify_uv_index(float("nan"))

        assert not isinstance(result, RiskResult)


class TestOtherNumericTypes:

    def test_decimal_is_accepted(self):
        result = classify_uv_index(Decimal("6.4"))

        assert result.tier == RiskTier.HIGH
        assert result.raw_uv_index == 6.4

    def test_decimal_nan_is_rejected(self):
        assert isinstance(classify_uv_index(Decimal("NaN")), InvalidInputError)

    def test_int_too_large_for_float(self):
        result = classify_uv_index(10 ** 400)

        assert isinstance(result, InvalidInputError)
        assert "out of range" in result.message
