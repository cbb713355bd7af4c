"""Governance maturity dimension.

Key question: "Would an investor trust how decisions and money are controlled?"
"""

from app.core.diagnostics.ladders import (
    DimensionAssessment,
    FactorContext,
    FactorLadder,
    Rung,
    assess_dimension,
    always,
)
from app.core.diagnostics.types import Dimension


def _policy_flags(ctx: FactorContext) -> tuple:
    p = ctx.profile
    return (p.has_hr_policy, p.has_finance_policy, p.has_procurement_policy, p.has_risk_policy)


def _policy_count(ctx: FactorContext) -> int:
    return sum(1 for flag in _policy_flags(ctx) if flag)


LADDERS: tuple[FactorLadder, ...] = (
    FactorLadder(
        key="board_advisory_presence",
        observed=lambda c: c.profile.has_board_of_directors is not None
        or c.profile.has_advisory_board is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.has_board_of_directors),
                value=1.0,
                positive="Board of Directors established",
            ),
            Rung(
                when=lambda c: bool(c.profile.has_advisory_board),
                value=0.7,
                positive="Advisory board in place",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No board or advisory structure",
                code="no_board",
                recommendation="Establish a board of directors or advisory committee",
            ),
        ),
    ),
    FactorLadder(
        key="written_policies",
        observed=lambda c: any(flag is not None for flag in _policy_flags(c)),
        rungs=(
            Rung(
                when=lambda c: _policy_count(c) >= 4,
                value=1.0,
                positive="Comprehensive written policies in place",
            ),
            Rung(
                when=lambda c: _policy_count(c) >= 2,
                value=0.5,
                positive=lambda c: f"{_policy_count(c)} written policies in place",
                recommendation="Develop additional governance policies",
            ),
            Rung(
                when=lambda c: _policy_count(c) == 1,
                value=0.25,
                recommendation="Develop comprehensive governance policies",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No written governance policies",
                code="no_written_policies",
                recommendation="Create basic HR, finance, and risk management policies",
            ),
        ),
    ),
    FactorLadder(
        key="role_segregation",
        observed=lambda c: c.headcount_known,
        rungs=(
            Rung(
                when=lambda c: c.core_headcount >= 5 and bool(c.profile.has_finance_policy),
                value=1.0,
                positive="Role segregation with finance policies",
            ),
            Rung(
                when=lambda c: c.core_headcount >= 3,
                value=0.5,
                positive="Team structure allows for role segregation",
            ),
            Rung(
                when=lambda c: c.core_headcount > 0,
                value=0.3,
                recommendation="As the team grows, implement clear role segregation",
            ),
            # Solo operation
            Rung(when=always, value=0.2),
        ),
    ),
    FactorLadder(
        key="risk_management",
        observed=lambda c: c.profile.has_risk_policy is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.has_risk_policy),
                value=1.0,
                positive="Risk management policy in place",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No formal risk management",
                code="no_risk_management",
                recommendation="Develop a risk management framework",
            ),
        ),
    ),
    FactorLadder(
        key="audit_practices",
        observed=lambda c: c.profile.annual_audits_done is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.annual_audits_done),
                value=1.0,
                positive="Regular audits conducted",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No regular audits",
                code="no_regular_audits",
                recommendation="Consider annual financial audits",
            ),
        ),
    ),
)


def score_governance_maturity(ctx: FactorContext) -> DimensionAssessment:
    return assess_dimension(Dimension.GOVERNANCE_MATURITY, LADDERS, ctx)
