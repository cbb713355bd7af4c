"""Tests for narrative composition and the overall summary."""

from app.core.diagnostics.narrative import (
    build_headline,
    build_overall_summary,
    compose_narrative,
    recommended_themes,
)
from app.core.diagnostics.types import (
    Bottleneck,
    BusinessProfile,
    BusinessStage,
    DiagnosticsScores,
    Dimension,
    HealthBand,
    Severity,
    SWOTAnalysis,
    SWOTItem,
)


def _scores(**overrides) -> DiagnosticsScores:
    values = {dim.value: 55 for dim in Dimension}
    values.update(overrides)
    return DiagnosticsScores(**values)


def _bottleneck(idx: int, severity: Severity) -> Bottleneck:
    return Bottleneck(
        id=f"bn-digital_maturity-{idx}",
        area="Digital Presence",
        severity=severity,
        description=f"Gap {idx}",
        impact="Limits market reach and operational efficiency",
    )


class TestComposeNarrative:
    def test_full_narrative(self):
        profile = BusinessProfile(
            id="p", business_name="Mwila Crafts", sector="Retail", years_in_operation=3
        )
        scores = _scores(
            funding_readiness=45,
            compliance_maturity=62,
            digital_maturity=20,
            governance_maturity=70,
            market_readiness=40,
            operational_efficiency=70,
        )
        bottlenecks = [_bottleneck(0, Severity.HIGH), _bottleneck(1, Severity.LOW)]
        text = compose_narrative(
            profile, scores, HealthBand.EMERGING, BusinessStage.GROWTH, bottlenecks
        )

        assert text == (
            "Mwila Crafts is a growth-stage enterprise operating in the Retail sector "
            "with 3 years of operation. "
            'Based on our comprehensive analysis, the business is currently in the "emerging" '
            "health band with an overall readiness score of 51%. "
            "Key strengths include compliance maturity and governance maturity, "
            "which position the business well for growth. "
            "Priority areas requiring attention include funding readiness and digital maturity. "
            "\n\nThere are 1 urgent items that should be addressed in the next 3 months to "
            "improve business health and access to opportunities. "
            "The funding readiness score of 45% indicates some foundational work is needed "
            "before approaching formal lenders. "
            "\n\nRecommended focus for the next 3 months: Address compliance gaps, strengthen "
            "documentation, and complete the recommended actions to improve overall business health."
        )

    def test_dimension_names_follow_canonical_order(self):
        # Later dimensions score higher / lower but are not listed
        scores = _scores(
            funding_readiness=61,
            compliance_maturity=65,
            digital_maturity=10,
            governance_maturity=95,
            market_readiness=49,
            operational_efficiency=0,
        )
        text = compose_narrative(
            BusinessProfile(id="p"), scores, HealthBand.EMERGING, BusinessStage.EARLY, []
        )
        assert "Key strengths include funding readiness and compliance maturity," in text
        assert "Priority areas requiring attention include digital maturity and market readiness." in text

    def test_defaults_for_missing_profile_fields(self):
        text = compose_narrative(
            BusinessProfile(id="p"),
            _scores(funding_readiness=20),
            HealthBand.DEVELOPING,
            BusinessStage.EARLY,
            [],
        )
        assert text.startswith(
            "Your business is a early-stage enterprise operating in the your sector sector. "
        )
        assert "urgent items" not in text
        assert "The current funding readiness score of 20% suggests focusing" in text

    def test_single_year_is_singular(self):
        text = compose_narrative(
            BusinessProfile(id="p", years_in_operation=1),
            _scores(funding_readiness=75),
            HealthBand.EMERGING,
            BusinessStage.EARLY,
            [],
        )
        assert "with 1 year of operation. " in text
        assert "positioned to approach formal financial institutions" in text

    def test_mean_rounds_half_up(self):
        # Mean is exactly 50.5
        scores = DiagnosticsScores(
            funding_readiness=50,
            compliance_maturity=51,
            digital_maturity=50,
            governance_maturity=51,
            market_readiness=50,
            operational_efficiency=51,
        )
        text = compose_narrative(
            BusinessProfile(id="p"), scores, HealthBand.EMERGING, BusinessStage.EARLY, []
        )
        assert "overall readiness score of 51%" in text


class TestOverallSummary:
    def test_headline(self):
        assert build_headline(HealthBand.THRIVING, BusinessStage.SCALE) == (
            "Thriving business with scale potential"
        )
        assert build_headline(HealthBand.CRITICAL, BusinessStage.EARLY) == (
            "Critical business with early-stage potential"
        )
        assert build_headline(HealthBand.EMERGING, BusinessStage.GROWTH) == (
            "Emerging business with growth potential"
        )

    def test_themes_for_two_weakest(self):
        scores = _scores(digital_maturity=10, market_readiness=10, funding_readiness=20)
        assert recommended_themes(scores) == [
            "Enhance digital presence and capabilities",
            "Clarify market positioning and strategy",
        ]

    def test_growth_theme_when_strong(self):
        values = {dim.value: 70 for dim in Dimension}
        values["governance_maturity"] = 58
        scores = DiagnosticsScores(**values)
        assert recommended_themes(scores) == [
            "Strengthen governance and policy frameworks",
            "Leverage strengths for growth and expansion",
        ]

    def test_summary_lists(self):
        swot = SWOTAnalysis(
            strengths=[SWOTItem(id=f"s{i}", text=f"Strength {i}", importance="high") for i in range(5)]
        )
        bottlenecks = [
            _bottleneck(i, Severity.HIGH if i < 4 else Severity.MEDIUM) for i in range(6)
        ]
        summary = build_overall_summary(
            BusinessProfile(id="p"),
            _scores(),
            HealthBand.EMERGING,
            BusinessStage.EARLY,
            swot,
            bottlenecks,
        )
        assert summary.key_strengths == ["Strength 0", "Strength 1", "Strength 2"]
        assert summary.urgent_gaps == ["Gap 0", "Gap 1", "Gap 2"]
        assert summary.narrative.endswith("improve overall business health.")
