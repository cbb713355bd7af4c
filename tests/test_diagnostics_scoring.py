"""Tests for score aggregation, bands and stage detection."""

import pytest

from app.core.diagnostics.scoring import (
    clamp_score,
    detect_business_stage,
    health_band,
    round_half_up,
    score_band,
    weighted_score,
)
from app.core.diagnostics.tables import WEIGHT_TABLES, weights_for
from app.core.diagnostics.types import (
    BusinessProfile,
    BusinessStage,
    DiagnosticsScores,
    Dimension,
    FinancialSnapshot,
    HealthBand,
)


def _uniform_scores(value: int) -> DiagnosticsScores:
    return DiagnosticsScores(**{dim.value: value for dim in Dimension})


# =============================================================================
# Weighted aggregation
# =============================================================================


class TestWeightedScore:
    def test_empty_factor_map_scores_zero(self):
        assert weighted_score({}, weights_for(Dimension.FUNDING_READINESS)) == 0

    def test_zero_total_weight_scores_zero(self):
        assert weighted_score({"a": 1.0}, {"a": 0}) == 0

    def test_unknown_factors_are_ignored(self):
        assert weighted_score({"not_a_factor": 1.0}, {"a": 10}) == 0

    def test_missing_factors_drop_out_of_denominator(self):
        # Only "a" is present, so its value alone decides the score
        assert weighted_score({"a": 0.5}, {"a": 10, "b": 90}) == 50

    def test_full_marks(self):
        weights = weights_for(Dimension.DIGITAL_MATURITY)
        assert weighted_score({k: 1.0 for k in weights}, weights) == 100

    def test_factor_values_are_clamped(self):
        assert weighted_score({"a": 3.0, "b": -2.0}, {"a": 1, "b": 1}) == 50

    def test_rounds_half_up(self):
        # 1 of 8 weight points -> 12.5
        assert weighted_score({"a": 1.0, "b": 0.0}, {"a": 1, "b": 7}) == 13


def test_round_half_up_differs_from_bankers_rounding():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2


def test_clamp_score_bounds():
    assert clamp_score(-4) == 0
    assert clamp_score(140.2) == 100
    assert clamp_score(63.5) == 64


def test_weight_tables_cover_every_dimension():
    assert set(WEIGHT_TABLES) == set(Dimension)
    assert sum(w.weight for w in WEIGHT_TABLES[Dimension.FUNDING_READINESS]) == 100
    assert sum(w.weight for w in WEIGHT_TABLES[Dimension.MARKET_READINESS]) == 100
    assert [w.key for w in WEIGHT_TABLES[Dimension.GOVERNANCE_MATURITY]] == [
        "board_advisory_presence",
        "written_policies",
        "role_segregation",
        "risk_management",
        "audit_practices",
    ]


# =============================================================================
# Bands
# =============================================================================


@pytest.mark.parametrize(
    "score,label",
    [
        (0, "Not yet ready"),
        (30, "Not yet ready"),
        (31, "Emerging / Semi-ready"),
        (45, "Emerging / Semi-ready"),
        (60, "Emerging / Semi-ready"),
        (65, "Bankable with support"),
        (80, "Bankable with support"),
        (95, "Strongly bankable"),
    ],
)
def test_score_band(score, label):
    assert score_band(score) == label


@pytest.mark.parametrize(
    "value,band",
    [
        (0, HealthBand.CRITICAL),
        (20, HealthBand.CRITICAL),
        (21, HealthBand.DEVELOPING),
        (40, HealthBand.DEVELOPING),
        (55, HealthBand.EMERGING),
        (80, HealthBand.ESTABLISHED),
        (85, HealthBand.THRIVING),
    ],
)
def test_health_band_uniform_scores(value, band):
    assert health_band(_uniform_scores(value)) == band


def test_health_band_uses_unrounded_mean():
    # Mean is 20.17, which is above the critical cutoff
    scores = DiagnosticsScores(
        funding_readiness=21,
        compliance_maturity=20,
        digital_maturity=20,
        governance_maturity=20,
        market_readiness=20,
        operational_efficiency=20,
    )
    assert health_band(scores) == HealthBand.DEVELOPING


# =============================================================================
# Stage detection
# =============================================================================


class TestDetectBusinessStage:
    def test_scale_requires_tenure_headcount_and_scores(self):
        profile = BusinessProfile(id="p", years_in_operation=5, employee_count_fulltime=20)
        assert detect_business_stage(profile, None, _uniform_scores(85)) == BusinessStage.SCALE

    def test_high_scores_without_headcount_is_growth(self):
        profile = BusinessProfile(id="p", years_in_operation=7, employee_count_fulltime=12)
        assert detect_business_stage(profile, None, _uniform_scores(85)) == BusinessStage.GROWTH

    def test_high_scores_short_tenure_is_early(self):
        profile = BusinessProfile(id="p", years_in_operation=1, employee_count_fulltime=40)
        assert detect_business_stage(profile, None, _uniform_scores(85)) == BusinessStage.EARLY

    def test_casual_staff_do_not_count(self):
        profile = BusinessProfile(
            id="p",
            years_in_operation=6,
            employee_count_fulltime=10,
            employee_count_casual=30,
        )
        assert detect_business_stage(profile, None, _uniform_scores(85)) == BusinessStage.GROWTH

    def test_growth_via_revenue_and_scores(self):
        profile = BusinessProfile(id="p", years_in_operation=3, employee_count_fulltime=2)
        financial = FinancialSnapshot(revenue_year_1=0)
        assert detect_business_stage(profile, financial, _uniform_scores(50)) == BusinessStage.GROWTH

    def test_revenue_without_scores_is_early(self):
        profile = BusinessProfile(id="p", years_in_operation=3, employee_count_fulltime=2)
        financial = FinancialSnapshot(revenue_year_1=500_000)
        assert detect_business_stage(profile, financial, _uniform_scores(49)) == BusinessStage.EARLY

    def test_default_is_early(self):
        assert detect_business_stage(BusinessProfile(id="p"), None, None) == BusinessStage.EARLY
