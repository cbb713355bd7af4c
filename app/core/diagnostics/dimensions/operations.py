"""Operational efficiency dimension.

Key question: "Does the business run on people, tools and processes that scale?"
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


def _fulltime_ratio(ctx: FactorContext) -> float:
    if ctx.headcount == 0:
        return 0.0
    return (ctx.profile.employee_count_fulltime or 0) / ctx.headcount


def _tool_flags(ctx: FactorContext) -> tuple:
    p = ctx.profile
    return (p.uses_erp, p.uses_pos, p.uses_accounting_software)


def _tool_count(ctx: FactorContext) -> int:
    return sum(1 for flag in _tool_flags(ctx) if flag)


def _payment_terms(ctx: FactorContext) -> int | None:
    return ctx.financial.payment_terms_days if ctx.financial is not None else None


def _engaged(ctx: FactorContext, logins: int, completion: float = 0) -> bool:
    b = ctx.behavior
    return b is not None and b.login_count_30d >= logins and b.profile_completion_pct >= completion


LADDERS: tuple[FactorLadder, ...] = (
    FactorLadder(
        key="employee_structure",
        observed=lambda c: c.headcount_known,
        rungs=(
            Rung(
                when=lambda c: c.headcount > 0 and _fulltime_ratio(c) >= 0.6,
                value=1.0,
                positive="Strong core team with full-time employees",
            ),
            Rung(
                when=lambda c: c.headcount > 0 and _fulltime_ratio(c) >= 0.3,
                value=0.6,
                positive="Mixed employee structure",
            ),
            Rung(
                when=lambda c: c.headcount > 0,
                value=0.3,
                negative="Heavily reliant on casual/part-time staff",
                code="casual_heavy_staff",
                recommendation="Consider building a stronger core team",
            ),
            # Solo operation is neutral
            Rung(when=always, value=0.5),
        ),
    ),
    FactorLadder(
        key="digital_tools_adoption",
        observed=lambda c: any(flag is not None for flag in _tool_flags(c)),
        rungs=(
            Rung(
                when=lambda c: _tool_count(c) >= 3,
                value=1.0,
                positive="Full digital tools adoption",
            ),
            Rung(
                when=lambda c: _tool_count(c) >= 2,
                value=0.7,
                positive="Good digital tools adoption",
            ),
            Rung(
                when=lambda c: _tool_count(c) == 1,
                value=0.4,
                positive="Some digital tools in use",
                recommendation="Expand use of digital tools",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No digital tools adopted",
                code="no_digital_tools",
                recommendation="Adopt digital tools for better efficiency",
            ),
        ),
    ),
    FactorLadder(
        key="financial_management",
        rungs=(
            Rung(
                when=lambda c: c.financial is not None
                and bool(c.financial.cash_flow_positive)
                and not c.financial.has_defaults_or_arrears,
                value=1.0,
                positive="Good financial management",
            ),
            Rung(
                when=lambda c: c.financial is not None and bool(c.financial.cash_flow_positive),
                value=0.6,
                positive="Positive cash flow",
            ),
            Rung(
                when=lambda c: c.financial is not None,
                value=0.3,
                recommendation="Improve cash flow management",
            ),
        ),
    ),
    FactorLadder(
        key="customer_management",
        rungs=(
            Rung(
                when=lambda c: _payment_terms(c) is not None and _payment_terms(c) <= 30,
                value=1.0,
                positive="Efficient payment terms",
            ),
            Rung(
                when=lambda c: _payment_terms(c) is not None and _payment_terms(c) <= 60,
                value=0.6,
            ),
            Rung(
                when=lambda c: _payment_terms(c) is not None,
                value=0.3,
                negative="Extended payment terms",
                code="extended_payment_terms",
                recommendation="Review and optimize payment terms",
            ),
        ),
    ),
    FactorLadder(
        key="platform_engagement",
        rungs=(
            Rung(
                when=lambda c: _engaged(c, logins=10, completion=80),
                value=1.0,
                positive="High platform engagement",
            ),
            Rung(
                when=lambda c: _engaged(c, logins=5),
                value=0.6,
                positive="Regular platform usage",
            ),
            Rung(
                when=lambda c: c.behavior is not None,
                value=0.3,
                recommendation="Increase platform engagement to access more opportunities",
            ),
        ),
    ),
    FactorLadder(
        key="process_automation",
        observed=lambda c: c.profile.uses_erp is not None
        or c.profile.uses_accounting_software is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.uses_erp) and bool(c.profile.uses_accounting_software),
                value=1.0,
                positive="Key processes automated",
            ),
            Rung(
                when=lambda c: bool(c.profile.uses_erp) or bool(c.profile.uses_accounting_software),
                value=0.5,
                positive="Some process automation",
            ),
            Rung(
                when=always,
                value=0.0,
                recommendation="Automate key business processes",
            ),
        ),
    ),
)


def score_operational_efficiency(ctx: FactorContext) -> DimensionAssessment:
    return assess_dimension(Dimension.OPERATIONAL_EFFICIENCY, LADDERS, ctx)
