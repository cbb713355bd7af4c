"""SWOT synthesis.

Strengths and weaknesses are flattened from dimension evidence. Opportunities
and threats come from a rule table keyed on profile attributes, scores and
the sector benchmark.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from app.core.diagnostics.tables import DIMENSION_LABELS, SECTOR_CHALLENGE_THREATS
from app.core.diagnostics.types import (
    BusinessModelType,
    BusinessProfile,
    DiagnosticsScores,
    FinancialSnapshot,
    Importance,
    ScoreExplanations,
    SectorBenchmark,
    SWOTAnalysis,
    SWOTItem,
)

MAX_STRENGTHS = 6
MAX_WEAKNESSES = 6
MAX_OPPORTUNITIES = 5
MAX_THREATS = 5
MAX_SECTOR_THREATS = 3
MAJORITY_OWNERSHIP_PCT = 51
CONCENTRATION_THREAT_PCT = 60

IMPORTANCE_ORDER = {"high": 0, "medium": 1, "low": 2}


@dataclass(frozen=True)
class SwotContext:
    profile: BusinessProfile
    scores: DiagnosticsScores
    financial: FinancialSnapshot | None = None
    benchmark: SectorBenchmark | None = None


@dataclass(frozen=True)
class SwotRule:
    """Emits one SWOT item when ``when`` holds."""

    id: str
    when: Callable[[SwotContext], bool]
    text: Union[str, Callable[[SwotContext], str]]
    category: str
    importance: Importance


def _majority(pct: float | None) -> bool:
    return bool(pct) and pct >= MAJORITY_OWNERSHIP_PCT


OPPORTUNITY_RULES: tuple[SwotRule, ...] = (
    SwotRule(
        id="opp-1",
        when=lambda c: _majority(c.profile.female_ownership_pct),
        text="Eligible for women-owned business programs and funding",
        category="Funding",
        importance="high",
    ),
    SwotRule(
        id="opp-2",
        when=lambda c: _majority(c.profile.youth_ownership_pct),
        text="Eligible for youth entrepreneurship programs",
        category="Funding",
        importance="high",
    ),
    SwotRule(
        id="opp-3",
        when=lambda c: c.scores.digital_maturity >= 60,
        text="Ready to expand into e-commerce and digital sales channels",
        category="Growth",
        importance="medium",
    ),
    SwotRule(
        id="opp-4",
        when=lambda c: BusinessModelType.B2G in (c.profile.business_model or []),
        text="Can participate in government procurement opportunities",
        category="Market",
        importance="medium",
    ),
    SwotRule(
        id="opp-5",
        when=lambda c: c.benchmark is not None and c.benchmark.growth_potential == "high",
        text=lambda c: f"{c.profile.sector or c.benchmark.sector} sector has high growth potential",
        category="Market",
        importance="high",
    ),
    SwotRule(
        id="opp-6",
        when=lambda c: c.scores.funding_readiness >= 60,
        text="Ready to access formal bank financing",
        category="Funding",
        importance="high",
    ),
)

THREAT_RULES: tuple[SwotRule, ...] = (
    SwotRule(
        id="threat-1",
        when=lambda c: c.financial is not None
        and bool(c.financial.top_3_clients_revenue_pct)
        and c.financial.top_3_clients_revenue_pct > CONCENTRATION_THREAT_PCT,
        text="High customer concentration creates revenue risk",
        category="Market",
        importance="high",
    ),
)

# Evaluated after the sector-challenge threats.
TRAILING_THREAT_RULES: tuple[SwotRule, ...] = (
    SwotRule(
        id="threat-compliance",
        when=lambda c: c.scores.compliance_maturity < 50,
        text="Non-compliance may result in penalties or missed opportunities",
        category="Legal",
        importance="high",
    ),
    SwotRule(
        id="threat-new",
        when=lambda c: bool(c.profile.years_in_operation) and c.profile.years_in_operation < 2,
        text="Limited track record may affect access to finance and contracts",
        category="Market",
        importance="medium",
    ),
)


def _apply_rules(rules: tuple[SwotRule, ...], ctx: SwotContext) -> list[SWOTItem]:
    items = []
    for rule in rules:
        if rule.when(ctx):
            text = rule.text(ctx) if callable(rule.text) else rule.text
            items.append(
                SWOTItem(id=rule.id, text=text, category=rule.category, importance=rule.importance)
            )
    return items


def _sector_threats(benchmark: SectorBenchmark | None) -> list[SWOTItem]:
    if benchmark is None or not benchmark.common_challenges:
        return []
    return [
        SWOTItem(
            id=f"threat-sector-{idx}",
            text=SECTOR_CHALLENGE_THREATS.get(challenge, f"Sector challenge: {challenge}"),
            category="External",
            importance="medium",
        )
        for idx, challenge in enumerate(benchmark.common_challenges[:MAX_SECTOR_THREATS])
    ]


def _strength_importance(score: int) -> Importance:
    if score >= 70:
        return "high"
    if score >= 50:
        return "medium"
    return "low"


def _weakness_importance(score: int) -> Importance:
    if score <= 30:
        return "high"
    if score <= 50:
        return "medium"
    return "low"


def rank_by_importance(items: list[SWOTItem], limit: int) -> list[SWOTItem]:
    """Stable sort high -> medium -> low, then cap."""
    return sorted(items, key=lambda item: IMPORTANCE_ORDER[item.importance])[:limit]


def generate_swot(
    profile: BusinessProfile,
    scores: DiagnosticsScores,
    explanations: ScoreExplanations,
    financial_data: FinancialSnapshot | None = None,
    sector_benchmark: SectorBenchmark | None = None,
) -> SWOTAnalysis:
    """
    Build the SWOT analysis for a diagnosis.

    Args:
        profile: Business profile
        scores: The six dimension scores
        explanations: Per-dimension evidence
        financial_data: Optional financial snapshot (concentration threat)
        sector_benchmark: Optional benchmark (growth opportunity, sector threats)

    Returns:
        SWOTAnalysis with each list ranked by importance and capped
    """
    strengths: list[SWOTItem] = []
    weaknesses: list[SWOTItem] = []

    for dim, explanation in explanations.by_dimension().items():
        for idx, text in enumerate(explanation.factors_positive):
            strengths.append(
                SWOTItem(
                    id=f"str-{dim.value}-{idx}",
                    text=text,
                    category=DIMENSION_LABELS[dim],
                    importance=_strength_importance(explanation.score),
                )
            )

    for dim, explanation in explanations.by_dimension().items():
        for idx, text in enumerate(explanation.factors_negative):
            weaknesses.append(
                SWOTItem(
                    id=f"weak-{dim.value}-{idx}",
                    text=text,
                    category=DIMENSION_LABELS[dim],
                    importance=_weakness_importance(explanation.score),
                )
            )

    ctx = SwotContext(
        profile=profile,
        scores=scores,
        financial=financial_data,
        benchmark=sector_benchmark,
    )
    opportunities = _apply_rules(OPPORTUNITY_RULES, ctx)
    threats = (
        _apply_rules(THREAT_RULES, ctx)
        + _sector_threats(sector_benchmark)
        + _apply_rules(TRAILING_THREAT_RULES, ctx)
    )

    return SWOTAnalysis(
        strengths=rank_by_importance(strengths, MAX_STRENGTHS),
        weaknesses=rank_by_importance(weaknesses, MAX_WEAKNESSES),
        opportunities=rank_by_importance(opportunities, MAX_OPPORTUNITIES),
        threats=rank_by_importance(threats, MAX_THREATS),
    )
