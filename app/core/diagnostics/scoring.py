"""Score aggregation and classification.

All functions here are pure: the same arguments always give the same result.
"""

import math
from collections.abc import Mapping

from app.core.diagnostics.types import (
    BusinessProfile,
    BusinessStage,
    DiagnosticsScores,
    FinancialSnapshot,
    HealthBand,
)

# (inclusive upper bound, label)
SCORE_BANDS: tuple[tuple[int, str], ...] = (
    (30, "Not yet ready"),
    (60, "Emerging / Semi-ready"),
    (80, "Bankable with support"),
)
TOP_SCORE_BAND = "Strongly bankable"

HEALTH_BANDS: tuple[tuple[int, HealthBand], ...] = (
    (20, HealthBand.CRITICAL),
    (40, HealthBand.DEVELOPING),
    (60, HealthBand.EMERGING),
    (80, HealthBand.ESTABLISHED),
)
TOP_HEALTH_BAND = HealthBand.THRIVING


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative input."""
    return int(math.floor(value + 0.5))


def clamp_score(score: float) -> int:
    """Round and clamp a raw score into [0, 100]."""
    return max(0, min(100, round_half_up(score)))


def weighted_score(factors: Mapping[str, float], weights: Mapping[str, int]) -> int:
    """
    Aggregate a sparse factor map into a 0-100 score.

    Only factors present in ``factors`` contribute, and the weight of absent
    factors is dropped from the denominator, so missing data is not scored
    as zero.

    Args:
        factors: Factor key -> value in [0, 1] (missing keys are omitted)
        weights: Factor key -> integer weight

    Returns:
        Integer score in [0, 100]; 0 when no weighted factor is present
    """
    total_score = 0.0
    total_weight = 0

    for key, weight in weights.items():
        if key in factors:
            total_score += min(1.0, max(0.0, factors[key])) * weight
            total_weight += weight

    if total_weight == 0:
        return 0
    return clamp_score(total_score * 100 / total_weight)


def score_band(score: float) -> str:
    """Readiness band label for a single dimension score."""
    for upper, label in SCORE_BANDS:
        if score <= upper:
            return label
    return TOP_SCORE_BAND


def health_band(scores: DiagnosticsScores) -> HealthBand:
    """Overall health band from the unrounded mean of the six scores."""
    mean = scores.mean()
    for upper, band in HEALTH_BANDS:
        if mean <= upper:
            return band
    return TOP_HEALTH_BAND


def detect_business_stage(
    profile: BusinessProfile,
    financial_data: FinancialSnapshot | None,
    scores: DiagnosticsScores | None,
) -> BusinessStage:
    """
    Classify business maturity. First matching rule wins.

    - scale: >= 5 years, >= 20 staff and mean score >= 70
    - growth: >= 2 years and (>= 5 staff or revenue data with mean score >= 50)
    - early: everything else

    Headcount counts full-time and part-time staff only.
    """
    years = profile.years_in_operation or 0
    employees = (profile.employee_count_fulltime or 0) + (profile.employee_count_parttime or 0)
    has_revenue = financial_data is not None and financial_data.revenue_year_1 is not None
    mean = scores.mean() if scores else 0

    if years >= 5 and employees >= 20 and mean >= 70:
        return BusinessStage.SCALE

    if years >= 2 and (employees >= 5 or (has_revenue and mean >= 50)):
        return BusinessStage.GROWTH

    return BusinessStage.EARLY
