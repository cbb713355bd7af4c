"""Partner and opportunity matching.

Both matchers are rule tables: each candidate has one trigger and a fit
formula over the scores. Results are ranked by fit (stable) and capped.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

from app.core.diagnostics.scoring import clamp_score
from app.core.diagnostics.types import (
    BusinessModelType,
    BusinessProfile,
    DiagnosticsScores,
    FinancialSnapshot,
    OpportunityAmount,
    OpportunityType,
    PartnerType,
    RecommendedPartner,
    SuggestedOpportunity,
)

MAX_PARTNERS = 5
MAX_OPPORTUNITIES = 5
MAJORITY_OWNERSHIP_PCT = 51

Predicate = Callable[[BusinessProfile, DiagnosticsScores], bool]
FitFormula = Callable[[DiagnosticsScores], float]


def _fixed(value: int) -> FitFormula:
    return lambda scores: value


def _majority(pct: Optional[float]) -> bool:
    return bool(pct) and pct >= MAJORITY_OWNERSHIP_PCT


def _tenure_at_least(profile: BusinessProfile, years: int) -> bool:
    return bool(profile.years_in_operation) and profile.years_in_operation >= years


def _tenure_below(profile: BusinessProfile, years: int) -> bool:
    return bool(profile.years_in_operation) and profile.years_in_operation < years


# =============================================================================
# Partners
# =============================================================================


@dataclass(frozen=True)
class PartnerRule:
    partner_type: PartnerType
    partner_id: str
    name: str
    reason: str | Callable[[DiagnosticsScores], str]
    suggested_product: str
    when: Predicate
    fit: FitFormula


PARTNER_RULES: tuple[PartnerRule, ...] = (
    PartnerRule(
        partner_type=PartnerType.BANK,
        partner_id="bank-generic",
        name="Commercial Banks (SME Units)",
        reason=lambda s: (
            f"With a funding readiness score of {s.funding_readiness}, "
            "you may qualify for bank financing"
        ),
        suggested_product="Working Capital Facility",
        when=lambda p, s: s.funding_readiness >= 50,
        fit=lambda s: min(95, s.funding_readiness + 10),
    ),
    PartnerRule(
        partner_type=PartnerType.INVESTOR,
        partner_id="investor-generic",
        name="Angel Investors / VC Funds",
        reason="Your business profile suggests potential for equity investment",
        suggested_product="Equity Investment",
        when=lambda p, s: _tenure_at_least(p, 2) and s.market_readiness >= 50,
        fit=lambda s: min(90, s.market_readiness + 5),
    ),
    PartnerRule(
        partner_type=PartnerType.CONSULTANT,
        partner_id="consultant-compliance",
        name="Tax & Compliance Consultants",
        reason="Professional support can help address compliance gaps quickly",
        suggested_product="Compliance Review & Support",
        when=lambda p, s: s.compliance_maturity < 50,
        fit=_fixed(85),
    ),
    PartnerRule(
        partner_type=PartnerType.TRAINING_PROVIDER,
        partner_id="training-digital",
        name="Digital Skills Training Providers",
        reason="Training can help improve your digital capabilities",
        suggested_product="Digital Business Training",
        when=lambda p, s: s.digital_maturity < 50,
        fit=_fixed(80),
    ),
    PartnerRule(
        partner_type=PartnerType.DONOR,
        partner_id="donor-women",
        name="Women Enterprise Development Programs",
        reason="As a majority women-owned business, you qualify for specialized support",
        suggested_product="Grant Funding & Technical Assistance",
        when=lambda p, s: _majority(p.female_ownership_pct),
        fit=_fixed(90),
    ),
    PartnerRule(
        partner_type=PartnerType.DONOR,
        partner_id="donor-youth",
        name="Youth Enterprise Funds",
        reason="As a youth-owned business, you qualify for youth enterprise programs",
        suggested_product="Youth Enterprise Grant",
        when=lambda p, s: _majority(p.youth_ownership_pct),
        fit=_fixed(90),
    ),
)


def match_partners(
    profile: BusinessProfile,
    scores: DiagnosticsScores,
    financial_data: FinancialSnapshot | None = None,
) -> list[RecommendedPartner]:
    """
    Match partner types to the business.

    Args:
        profile: Business profile
        scores: The six dimension scores
        financial_data: Accepted for interface symmetry; no current rule reads it

    Returns:
        Up to 5 partners, fit score descending (ties keep rule order)
    """
    partners = []
    for rule in PARTNER_RULES:
        if not rule.when(profile, scores):
            continue
        partners.append(
            RecommendedPartner(
                partner_type=rule.partner_type,
                partner_id=rule.partner_id,
                name=rule.name,
                reason=rule.reason(scores) if callable(rule.reason) else rule.reason,
                suggested_product=rule.suggested_product,
                fit_score=clamp_score(rule.fit(scores)),
            )
        )

    partners.sort(key=lambda p: p.fit_score, reverse=True)
    return partners[:MAX_PARTNERS]


# =============================================================================
# Opportunities
# =============================================================================


@dataclass(frozen=True)
class OpportunityRule:
    id: str
    type: OpportunityType
    title: str
    description: str
    provider: str
    when: Predicate
    fit: FitFormula
    requirements: tuple[str, ...] = field(default_factory=tuple)
    amount: OpportunityAmount | None = None


OPPORTUNITY_RULES: tuple[OpportunityRule, ...] = (
    OpportunityRule(
        id="opp-grant-1",
        type=OpportunityType.GRANT,
        title="SME Development Grants",
        description="Various grant programs for compliant SMEs",
        provider="Development Partners",
        when=lambda p, s: s.compliance_maturity >= 50,
        fit=lambda s: s.compliance_maturity,
        requirements=("Tax clearance", "Business registration", "Bank account"),
    ),
    OpportunityRule(
        id="opp-tender-1",
        type=OpportunityType.TENDER,
        title="Government Procurement Opportunities",
        description="Public sector tenders matching your sector",
        provider="ZPPA / Government Ministries",
        when=lambda p, s: BusinessModelType.B2G in (p.business_model or [])
        and s.compliance_maturity >= 60,
        fit=lambda s: s.compliance_maturity + 10,
        requirements=("Tax clearance", "PACRA registration", "ZRA compliance"),
    ),
    OpportunityRule(
        id="opp-loan-1",
        type=OpportunityType.LOAN,
        title="SME Working Capital Loans",
        description="Short-term financing for operational needs",
        provider="Commercial Banks",
        when=lambda p, s: s.funding_readiness >= 60,
        fit=lambda s: s.funding_readiness,
        requirements=("Financial statements", "Business plan", "Collateral"),
        amount=OpportunityAmount(min=5000, max=100000, currency="ZMW"),
    ),
    OpportunityRule(
        id="opp-training-1",
        type=OpportunityType.TRAINING,
        title="Digital Business Skills Training",
        description="Training programs to improve digital capabilities",
        provider="Wathaci Academy",
        when=lambda p, s: s.digital_maturity < 60,
        fit=_fixed(85),
    ),
    OpportunityRule(
        id="opp-mentor-1",
        type=OpportunityType.MENTORSHIP,
        title="Business Mentorship Program",
        description="Connect with experienced business mentors",
        provider="Wathaci Connect",
        when=lambda p, s: _tenure_below(p, 3),
        fit=_fixed(80),
    ),
    OpportunityRule(
        id="opp-women-1",
        type=OpportunityType.GRANT,
        title="Women-Owned Business Grants",
        description="Grant and technical-assistance programs for majority women-owned businesses",
        provider="Women Enterprise Development Programs",
        when=lambda p, s: _majority(p.female_ownership_pct),
        fit=_fixed(90),
        requirements=("Proof of ownership", "Business registration"),
    ),
    OpportunityRule(
        id="opp-youth-1",
        type=OpportunityType.GRANT,
        title="Youth Enterprise Grants",
        description="Funding programs for majority youth-owned businesses",
        provider="Youth Enterprise Funds",
        when=lambda p, s: _majority(p.youth_ownership_pct),
        fit=_fixed(90),
        requirements=("Proof of ownership", "Business registration"),
    ),
)


def match_opportunities(
    profile: BusinessProfile,
    scores: DiagnosticsScores,
) -> list[SuggestedOpportunity]:
    """
    Suggest funding, procurement and capacity-building opportunities.

    Returns:
        Up to 5 opportunities, fit score descending (ties keep rule order)
    """
    opportunities = []
    for rule in OPPORTUNITY_RULES:
        if not rule.when(profile, scores):
            continue
        opportunities.append(
            SuggestedOpportunity(
                id=rule.id,
                type=rule.type,
                title=rule.title,
                description=rule.description,
                provider=rule.provider,
                amount=rule.amount.model_copy() if rule.amount else None,
                fit_score=clamp_score(rule.fit(scores)),
                requirements=list(rule.requirements),
            )
        )

    opportunities.sort(key=lambda o: o.fit_score, reverse=True)
    return opportunities[:MAX_OPPORTUNITIES]
