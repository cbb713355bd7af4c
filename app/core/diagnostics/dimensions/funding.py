"""Funding readiness dimension.

Key question: "Could a lender or grant maker underwrite this business today?"
"""

from app.core.diagnostics.ladders import (
    DimensionAssessment,
    FactorContext,
    FactorLadder,
    Rung,
    assess_dimension,
    always,
)
from app.core.diagnostics.types import Dimension, DocumentType, RegistrationStatus


def _revenue_growth(ctx: FactorContext) -> float | None:
    f = ctx.financial
    if f is None or not f.revenue_year_1 or not f.revenue_year_2:
        return None
    return (f.revenue_year_1 - f.revenue_year_2) / f.revenue_year_2


def _growth_above(threshold: float):
    def check(ctx: FactorContext) -> bool:
        growth = _revenue_growth(ctx)
        return growth is not None and growth > threshold

    return check


def _years_text(ctx: FactorContext) -> str:
    return f"{ctx.profile.years_in_operation} years in operation - established track record"


LADDERS: tuple[FactorLadder, ...] = (
    FactorLadder(
        key="formal_registration",
        observed=lambda c: c.profile.registration_status is not None,
        rungs=(
            Rung(
                when=lambda c: c.profile.registration_status not in (None, RegistrationStatus.SOLE_TRADER),
                value=1.0,
                positive="Formally registered business entity",
            ),
            Rung(
                when=lambda c: c.profile.registration_status == RegistrationStatus.SOLE_TRADER,
                value=0.5,
                positive="Registered as sole trader",
                recommendation="Consider registering as a company for better access to formal financing",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No formal registration status",
                code="no_registration",
                recommendation="Register your business with PACRA or relevant authority",
            ),
        ),
    ),
    FactorLadder(
        key="years_in_business",
        observed=lambda c: c.profile.years_in_operation is not None,
        rungs=(
            Rung(
                when=lambda c: (c.profile.years_in_operation or 0) >= 3,
                value=1.0,
                positive=_years_text,
            ),
            Rung(
                when=lambda c: (c.profile.years_in_operation or 0) >= 1,
                value=0.6,
                positive=lambda c: f"{c.profile.years_in_operation} year(s) in operation",
            ),
            Rung(
                when=always,
                value=0.2,
                negative="Less than 1 year in operation",
                code="short_tenure",
            ),
        ),
    ),
    FactorLadder(
        key="has_revenue_data",
        observed=lambda c: c.financial is not None,
        rungs=(
            Rung(
                when=lambda c: c.financial is not None and (c.financial.revenue_year_1 or 0) > 0,
                value=1.0,
                positive="Historical revenue data available",
            ),
            Rung(
                when=lambda c: c.financial is not None and bool(c.financial.revenue_range),
                value=0.5,
                positive="Revenue range information provided",
                recommendation="Provide exact revenue figures for more accurate assessment",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No revenue data available",
                code="no_revenue_data",
                recommendation="Add revenue information to improve funding readiness assessment",
            ),
        ),
    ),
    FactorLadder(
        key="revenue_trend_positive",
        rungs=(
            Rung(when=_growth_above(0.1), value=1.0, positive="Strong revenue growth trend"),
            Rung(when=_growth_above(0.0), value=0.7, positive="Positive revenue trend"),
            Rung(
                when=_growth_above(-0.1),
                value=0.4,
                negative="Flat or slightly declining revenue",
                code="revenue_flat",
            ),
            Rung(
                when=lambda c: _revenue_growth(c) is not None,
                value=0.1,
                negative="Declining revenue trend",
                code="revenue_declining",
                recommendation="Address revenue decline before seeking funding",
            ),
        ),
    ),
    FactorLadder(
        key="profitability",
        rungs=(
            Rung(
                when=lambda c: c.financial is not None
                and c.financial.profit_year_1 is not None
                and c.financial.profit_year_1 > 0,
                value=1.0,
                positive="Business is profitable",
            ),
            Rung(
                when=lambda c: c.financial is not None and c.financial.profit_year_1 is not None,
                value=0.3,
                negative="Business is not currently profitable",
                code="not_profitable",
                recommendation="Work on achieving profitability",
            ),
            Rung(
                when=lambda c: c.financial is not None and bool(c.financial.cash_flow_positive),
                value=0.6,
                positive="Positive cash flow",
            ),
        ),
    ),
    FactorLadder(
        key="has_financial_records",
        observed=lambda c: bool(c.documents) or c.profile.uses_accounting_software is not None,
        rungs=(
            Rung(
                when=lambda c: c.has_document(DocumentType.FINANCIAL_STATEMENTS),
                value=1.0,
                positive="Financial statements available",
            ),
            Rung(
                when=lambda c: bool(c.profile.uses_accounting_software),
                value=0.6,
                positive="Uses accounting software",
                recommendation="Generate and upload formal financial statements",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No financial records available",
                code="no_financial_records",
                recommendation="Maintain proper financial records using accounting software",
            ),
        ),
    ),
    FactorLadder(
        key="has_audited_statements",
        observed=lambda c: c.profile.annual_audits_done is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.annual_audits_done),
                value=1.0,
                positive="Annual audits conducted",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No annual audits conducted",
                code="no_audits",
                recommendation="Consider getting annual financial audits",
            ),
        ),
    ),
    FactorLadder(
        key="debt_repayment_behavior",
        rungs=(
            Rung(
                when=lambda c: c.financial is not None and bool(c.financial.has_defaults_or_arrears),
                value=0.0,
                negative="Has defaults or arrears on existing loans",
                code="loan_defaults",
                recommendation="Clear any existing defaults before seeking new funding",
            ),
            Rung(
                when=lambda c: c.financial is not None and (c.financial.existing_loans_count or 0) > 0,
                value=1.0,
                positive="Good debt repayment history",
            ),
            # No debt history either way
            Rung(when=lambda c: c.financial is not None, value=0.5),
        ),
    ),
    FactorLadder(
        key="compliance_complete",
        observed=lambda c: c.profile.tax_status is not None or bool(c.documents),
        rungs=(
            Rung(
                when=lambda c: c.has_document(DocumentType.TAX_CLEARANCE)
                and c.profile.tax_returns_filed_on_time == "yes",
                value=1.0,
                positive="Tax compliant with clearance certificate",
            ),
            Rung(
                when=lambda c: c.has_tax_status("registered"),
                value=0.5,
                positive="Tax registered",
                recommendation="Obtain current tax clearance certificate",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="Tax compliance not established",
                code="tax_noncompliant",
                recommendation="Register for tax and obtain tax clearance",
            ),
        ),
    ),
)


def score_funding_readiness(ctx: FactorContext) -> DimensionAssessment:
    """Score funding readiness from registration, tenure, financials and tax status."""
    return assess_dimension(Dimension.FUNDING_READINESS, LADDERS, ctx)
