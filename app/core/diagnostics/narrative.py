"""Narrative summary and overall-summary assembly.

Everything here is a deterministic rendering of upstream artifacts: the same
scores, SWOT and bottlenecks always produce the same text.
"""

from app.core.diagnostics.scoring import round_half_up
from app.core.diagnostics.tables import DIMENSION_LABELS, GROWTH_THEME, RECOMMENDED_THEMES
from app.core.diagnostics.types import (
    Bottleneck,
    BusinessProfile,
    BusinessStage,
    DiagnosticsScores,
    Dimension,
    HealthBand,
    OverallSummary,
    Severity,
    SWOTAnalysis,
)

STAGE_NAMES = {
    BusinessStage.EARLY: "early-stage",
    BusinessStage.GROWTH: "growth-stage",
    BusinessStage.SCALE: "scale-stage",
}

HEADLINE_POTENTIAL = {
    BusinessStage.EARLY: "early-stage",
    BusinessStage.GROWTH: "growth",
    BusinessStage.SCALE: "scale",
}

URGENT_SEVERITIES = (Severity.HIGH, Severity.CRITICAL)
HIGH_SCORE_AT = 60
LOW_SCORE_BELOW = 50
THEME_SCORE_BELOW = 60
MAX_THEMES = 3
MAX_KEY_STRENGTHS = 3
MAX_URGENT_GAPS = 3

CLOSING_PARAGRAPH = (
    "Recommended focus for the next 3 months: Address compliance gaps, "
    "strengthen documentation, and complete the recommended actions to "
    "improve overall business health."
)


def _strongest(scores: DiagnosticsScores, limit: int = 2) -> list[Dimension]:
    """First dimensions scoring >= 60, in canonical order."""
    return [dim for dim, score in scores.by_dimension().items() if score >= HIGH_SCORE_AT][:limit]


def _weakest(scores: DiagnosticsScores, limit: int = 2) -> list[Dimension]:
    """First dimensions scoring < 50, in canonical order."""
    return [dim for dim, score in scores.by_dimension().items() if score < LOW_SCORE_BELOW][:limit]


def _funding_paragraph(funding: int) -> str:
    if funding >= 60:
        return (
            f"With a funding readiness score of {funding}%, the business is positioned "
            "to approach formal financial institutions for support. "
        )
    if funding >= 40:
        return (
            f"The funding readiness score of {funding}% indicates some foundational "
            "work is needed before approaching formal lenders. "
        )
    return (
        f"The current funding readiness score of {funding}% suggests focusing on "
        "building business fundamentals before seeking external financing. "
    )


def compose_narrative(
    profile: BusinessProfile,
    scores: DiagnosticsScores,
    band: HealthBand,
    stage: BusinessStage,
    bottlenecks: list[Bottleneck],
) -> str:
    """
    Render the multi-paragraph narrative summary.

    Args:
        profile: Business profile (name, sector, tenure)
        scores: The six dimension scores
        band: Overall health band
        stage: Detected business stage
        bottlenecks: Severity-sorted bottlenecks

    Returns:
        Narrative text, paragraphs separated by blank lines
    """
    business_name = profile.business_name or "Your business"
    sector = profile.sector or "your sector"
    years = profile.years_in_operation or 0
    avg_score = round_half_up(scores.mean())

    narrative = f"{business_name} is a {STAGE_NAMES[stage]} enterprise operating in the {sector} sector"
    if years > 0:
        narrative += f" with {years} year{'s' if years > 1 else ''} of operation"
    narrative += ". "

    narrative += (
        f'Based on our comprehensive analysis, the business is currently in the "{band.value}" '
        f"health band with an overall readiness score of {avg_score}%. "
    )

    strongest = _strongest(scores)
    if strongest:
        names = " and ".join(DIMENSION_LABELS[dim] for dim in strongest)
        narrative += f"Key strengths include {names}, which position the business well for growth. "

    weakest = _weakest(scores)
    if weakest:
        names = " and ".join(DIMENSION_LABELS[dim] for dim in weakest)
        narrative += f"Priority areas requiring attention include {names}. "

    urgent_count = sum(1 for b in bottlenecks if b.severity in URGENT_SEVERITIES)
    if urgent_count > 0:
        narrative += (
            f"\n\nThere are {urgent_count} urgent items that should be addressed in the next "
            "3 months to improve business health and access to opportunities. "
        )

    narrative += _funding_paragraph(scores.funding_readiness)
    narrative += f"\n\n{CLOSING_PARAGRAPH}"

    return narrative


def build_headline(band: HealthBand, stage: BusinessStage) -> str:
    return f"{band.value.capitalize()} business with {HEADLINE_POTENTIAL[stage]} potential"


def recommended_themes(scores: DiagnosticsScores) -> list[str]:
    """Themes for the two weakest dimensions below 60, plus growth when the mean is >= 60."""
    lowest_two = sorted(scores.by_dimension().items(), key=lambda item: item[1])[:2]
    themes = [RECOMMENDED_THEMES[dim] for dim, score in lowest_two if score < THEME_SCORE_BELOW]

    if scores.mean() >= 60:
        themes.append(GROWTH_THEME)

    return themes[:MAX_THEMES]


def build_overall_summary(
    profile: BusinessProfile,
    scores: DiagnosticsScores,
    band: HealthBand,
    stage: BusinessStage,
    swot: SWOTAnalysis,
    bottlenecks: list[Bottleneck],
) -> OverallSummary:
    return OverallSummary(
        health_band=band,
        business_stage=stage,
        headline=build_headline(band, stage),
        key_strengths=[item.text for item in swot.strengths[:MAX_KEY_STRENGTHS]],
        urgent_gaps=[
            b.description for b in bottlenecks if b.severity == Severity.HIGH
        ][:MAX_URGENT_GAPS],
        recommended_themes=recommended_themes(scores),
        narrative=compose_narrative(profile, scores, band, stage, bottlenecks),
    )
