# src/uv_risk.py
import logging
import math
from decimal import Decimal
from numbers import Real

from models import InvalidInputError, ProtectiveMeasure, RiskResult, RiskTier
from recommendations import RISK_TIER_TEXT

logger = logging.getLogger(__name__)

# (limite inferior, nível) avaliado de cima para baixo; o primeiro que casa vence
RISK_THRESHOLDS = [
    (11, RiskTier.EXTREME),
    (8, RiskTier.VERY_HIGH),
    (6, RiskTier.HIGH),
    (3, RiskTier.MODERATE),
]

# Quantas medidas (na ordem de ProtectiveMeasure) cada nível mostra
MEASURE_COUNT = {
    RiskTier.LOW: 4,
    RiskTier.MODERATE: 5,
    RiskTier.HIGH: 6,
    RiskTier.VERY_HIGH: 7,
    RiskTier.EXTREME: 7,
}


def round_half_up(value):
    """Round half up, the way the provider front-end displays values (6.5 -> 7)."""
    return int(math.floor(value + 0.5))


def risk_tier_for(uv_index: int) -> RiskTier:
    for lower, tier in RISK_THRESHOLDS:
        if uv_index >= lower:
            return tier
    return RiskTier.LOW


def protective_measures(tier: RiskTier):
    return list(ProtectiveMeasure)[:MEASURE_COUNT[tier]]


def _invalid(uv_index, reason):
    logger.warning("UV index rejected (%s): %r", reason, uv_index)
    return InvalidInputError(message=f"Invalid UV index: {reason}", value=repr(uv_index))


def classify_uv_index(uv_index):
    """Map a UV index to its risk tier, color, advisory text and measures.

    Returns an InvalidInputError instead of raising when the value is missing,
    not a number, NaN, infinite, too large for a float or negative.
    """
    if uv_index is None:
        return _invalid(uv_index, "missing value")
    if isinstance(uv_index, bool) or not isinstance(uv_index, (Real, Decimal)):
        return _invalid(uv_index, "not a number")
    try:
        value = float(uv_index)
    except OverflowError:
        return _invalid(uv_index, "out of range")
    except ValueError:
        return _invalid(uv_index, "not a number")
    if math.isnan(value) or math.isinf(value):
        return _invalid(uv_index, "not a finite number")
    if value < 0:
        return _invalid(uv_index, "negative value")

    rounded = round_half_up(value)
    tier = risk_tier_for(rounded)
    text = RISK_TIER_TEXT[tier]

    return RiskResult(
        tier=tier,
        label=text["label"],
        color=text["color"],
        advisory_text=text["advisory"],
        measures=protective_measures(tier),
        uv_index=rounded,
        raw_uv_index=value,
    )
