"""Tests for bottleneck and recommendation generation."""

import pytest

from app.core.diagnostics.bottlenecks import (
    SEVERITY_ORDER,
    generate_bottlenecks,
    severity_for_score,
)
from app.core.diagnostics.ladders import DimensionAssessment, Evidence
from app.core.diagnostics.recommendations import (
    find_remediation,
    generate_recommendations,
)
from app.core.diagnostics.types import (
    Bottleneck,
    Difficulty,
    Dimension,
    ScoreExplanation,
    ScoreExplanations,
    Severity,
    TimelineCategory,
)


def _assessments(scores: dict, negatives: dict) -> dict:
    result = {}
    for dim in Dimension:
        result[dim] = DimensionAssessment(
            dimension=dim,
            negatives=[Evidence(text, code) for text, code in negatives.get(dim, [])],
            score=scores.get(dim, 90),
        )
    return result


def _explanations(scores: dict, recommendations: dict) -> ScoreExplanations:
    return ScoreExplanations(
        **{
            dim.value: ScoreExplanation(
                score=scores.get(dim, 90),
                band="Bankable with support",
                data_quality="high",
                recommendations=recommendations.get(dim, []),
            )
            for dim in Dimension
        }
    )


def _bottleneck(description: str, severity=Severity.HIGH, code=None, idx=0) -> Bottleneck:
    return Bottleneck(
        id=f"bn-compliance_maturity-{idx}",
        area="Compliance",
        severity=severity,
        description=description,
        impact="May result in penalties and missed business opportunities",
        data_source=Dimension.COMPLIANCE_MATURITY,
        reason_code=code,
    )


# =============================================================================
# Bottlenecks
# =============================================================================


@pytest.mark.parametrize(
    "score,severity",
    [(0, Severity.HIGH), (29, Severity.HIGH), (30, Severity.MEDIUM), (39, Severity.MEDIUM), (45, Severity.LOW)],
)
def test_severity_for_score(score, severity):
    assert severity_for_score(score) == severity


class TestGenerateBottlenecks:
    def test_only_dimensions_below_50_contribute(self):
        assessments = _assessments(
            {Dimension.DIGITAL_MATURITY: 50, Dimension.GOVERNANCE_MATURITY: 49},
            {
                Dimension.DIGITAL_MATURITY: [("No business website", "no_website")],
                Dimension.GOVERNANCE_MATURITY: [("No board or advisory structure", "no_board")],
            },
        )
        bottlenecks = generate_bottlenecks(assessments)
        assert len(bottlenecks) == 1
        bn = bottlenecks[0]
        assert bn.id == "bn-governance_maturity-0"
        assert bn.area == "Governance"
        assert bn.severity == Severity.LOW
        assert bn.impact == "Reduces credibility with investors and partners"
        assert bn.data_source == Dimension.GOVERNANCE_MATURITY
        assert bn.reason_code == "no_board"

    def test_sorted_by_severity_then_dimension_order(self):
        assessments = _assessments(
            {
                Dimension.FUNDING_READINESS: 45,
                Dimension.COMPLIANCE_MATURITY: 35,
                Dimension.MARKET_READINESS: 10,
            },
            {
                Dimension.FUNDING_READINESS: [("No annual audits conducted", "no_audits")],
                Dimension.COMPLIANCE_MATURITY: [("Not tax registered", "not_tax_registered")],
                Dimension.MARKET_READINESS: [
                    ("Sector not defined", "no_sector"),
                    ("Limited operating history", "limited_history"),
                ],
            },
        )
        bottlenecks = generate_bottlenecks(assessments)
        assert [b.id for b in bottlenecks] == [
            "bn-market_readiness-0",
            "bn-market_readiness-1",
            "bn-compliance_maturity-0",
            "bn-funding_readiness-0",
        ]
        ranks = [SEVERITY_ORDER[b.severity] for b in bottlenecks]
        assert ranks == sorted(ranks)

    def test_capped_at_ten(self):
        negatives = {dim: [(f"Gap {i}", None) for i in range(3)] for dim in Dimension}
        assessments = _assessments({dim: 10 for dim in Dimension}, negatives)
        assert len(generate_bottlenecks(assessments)) == 10


# =============================================================================
# Remediation lookup
# =============================================================================


class TestFindRemediation:
    def test_matches_by_reason_code(self):
        template = find_remediation(_bottleneck("Reworded text", code="no_business_registration"))
        assert template.action == "Register your business with PACRA"

    def test_falls_back_to_case_insensitive_substring(self):
        template = find_remediation(_bottleneck("NOT TAX REGISTERED with ZRA"))
        assert template.action == "Register for tax with ZRA"

    def test_unknown_description(self):
        assert find_remediation(_bottleneck("Extended payment terms")) is None


# =============================================================================
# Recommendations
# =============================================================================


class TestGenerateRecommendations:
    def test_tiers_and_priorities(self):
        bottlenecks = [
            _bottleneck("Not tax registered", Severity.HIGH, "not_tax_registered", 0),
            _bottleneck("Tax returns not filed on time", Severity.HIGH, "returns_not_filed", 1),
            _bottleneck("No business registration", Severity.MEDIUM, "no_business_registration", 2),
            _bottleneck("No formal governance structures", Severity.LOW, None, 3),
        ]
        explanations = _explanations(
            {Dimension.DIGITAL_MATURITY: 66},
            {Dimension.DIGITAL_MATURITY: ["Explore additional online sales channels"]},
        )
        recs = generate_recommendations(bottlenecks, explanations)

        assert [r.priority for r in recs] == [1, 2, 3, 4]
        assert [r.timeline_category for r in recs] == [
            TimelineCategory.NOW,
            TimelineCategory.NOW,
            TimelineCategory.NEXT,
            TimelineCategory.LATER,
        ]

        templated = recs[0]
        assert templated.id == "rec-bn-1"
        assert templated.action == "Register for tax with ZRA"
        assert templated.estimated_time == "1-2 weeks"
        assert templated.difficulty == Difficulty.EASY
        assert templated.related_bottleneck_id == "bn-compliance_maturity-0"
        assert templated.why == "May result in penalties and missed business opportunities"

        generic = recs[1]
        assert generic.action == "Address: Tax returns not filed on time"
        assert generic.how == [
            "Assess current situation",
            "Develop improvement plan",
            "Implement changes",
            "Monitor progress",
        ]
        assert generic.estimated_time == "1-3 months"

        assert recs[2].action == "Register your business with PACRA"

        later = recs[3]
        assert later.id == "rec-digital_maturity-4"
        assert later.area == "digital maturity"
        assert later.action == "Explore additional online sales channels"
        assert later.estimated_time == "3-6 months"
        assert later.related_bottleneck_id is None

    def test_generic_next_item_takes_longer(self):
        recs = generate_recommendations(
            [_bottleneck("Uncertain about tax return filing status", Severity.MEDIUM)],
            _explanations({}, {}),
        )
        assert recs[0].estimated_time == "3-6 months"
        assert recs[0].timeline_category == TimelineCategory.NEXT

    def test_later_tier_excludes_80_and_above(self):
        explanations = _explanations(
            {Dimension.FUNDING_READINESS: 80, Dimension.MARKET_READINESS: 50},
            {
                Dimension.FUNDING_READINESS: ["Obtain current tax clearance certificate"],
                Dimension.MARKET_READINESS: ["Work on diversifying customer base"],
            },
        )
        recs = generate_recommendations([], explanations)
        assert [r.action for r in recs] == ["Work on diversifying customer base"]

    def test_capped_at_fifteen(self):
        bottlenecks = [_bottleneck(f"Gap {i}", idx=i) for i in range(10)]
        explanations = _explanations(
            {dim: 60 for dim in Dimension},
            {dim: ["Keep improving"] for dim in Dimension},
        )
        recs = generate_recommendations(bottlenecks, explanations)
        assert len(recs) == 15
        assert [r.priority for r in recs] == list(range(1, 16))

    def test_counter_is_local_to_each_call(self):
        bottlenecks = [_bottleneck("Not tax registered", code="not_tax_registered")]
        first = generate_recommendations(bottlenecks, _explanations({}, {}))
        second = generate_recommendations(bottlenecks, _explanations({}, {}))
        assert first == second
        assert second[0].priority == 1

