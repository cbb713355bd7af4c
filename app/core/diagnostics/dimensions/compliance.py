"""Compliance maturity dimension.

Key question: "Is the business in good standing with ZRA, PACRA and its staff?"
"""

from app.core.diagnostics.ladders import (
    DimensionAssessment,
    FactorContext,
    FactorLadder,
    Rung,
    assess_dimension,
    always,
)
from app.core.diagnostics.types import Dimension, DocumentType


def _tax_extras(ctx: FactorContext) -> list[str]:
    extras = []
    if ctx.has_tax_status("vat"):
        extras.append("VAT registered")
    if ctx.has_tax_status("paye"):
        extras.append("PAYE registered")
    return extras


LADDERS: tuple[FactorLadder, ...] = (
    FactorLadder(
        key="tax_registration",
        observed=lambda c: c.profile.tax_status is not None,
        rungs=(
            Rung(
                when=lambda c: c.has_tax_status("registered"),
                value=1.0,
                positive="Tax registered",
                extra_positives=_tax_extras,
            ),
            Rung(
                when=always,
                value=0.0,
                negative="Not tax registered",
                code="not_tax_registered",
                recommendation="Register for tax with ZRA",
            ),
        ),
    ),
    FactorLadder(
        key="tax_clearance",
        observed=lambda c: bool(c.documents),
        rungs=(
            Rung(
                when=lambda c: c.has_valid_document(DocumentType.TAX_CLEARANCE),
                value=1.0,
                positive="Valid tax clearance certificate",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No valid tax clearance certificate",
                code="no_tax_clearance",
                recommendation="Obtain a current tax clearance certificate from ZRA",
            ),
        ),
    ),
    FactorLadder(
        key="annual_return_filing",
        observed=lambda c: c.profile.tax_returns_filed_on_time is not None,
        rungs=(
            Rung(
                when=lambda c: c.profile.tax_returns_filed_on_time == "yes",
                value=1.0,
                positive="Tax returns filed on time",
            ),
            Rung(
                when=lambda c: c.profile.tax_returns_filed_on_time == "not_sure",
                value=0.3,
                negative="Uncertain about tax return filing status",
                code="returns_filing_uncertain",
                recommendation="Verify tax return filing status with ZRA",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="Tax returns not filed on time",
                code="returns_not_filed",
                recommendation="File all outstanding tax returns",
            ),
        ),
    ),
    FactorLadder(
        key="industry_licenses",
        observed=lambda c: bool(c.documents) or c.profile.registration_status is not None,
        rungs=(
            Rung(
                when=lambda c: c.has_document(DocumentType.REGISTRATION_CERTIFICATE)
                and bool(c.profile.registration_authority),
                value=1.0,
                positive="Business registration certificate available",
            ),
            Rung(
                when=lambda c: c.profile.registration_status is not None,
                value=0.5,
                positive="Business is registered",
                recommendation="Upload registration certificate for verification",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No business registration",
                code="no_business_registration",
                recommendation="Register business with PACRA",
            ),
        ),
    ),
    FactorLadder(
        key="hr_policies_contracts",
        observed=lambda c: c.profile.has_hr_policy is not None or c.headcount_known,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.has_hr_policy),
                value=1.0,
                positive="HR policies in place",
            ),
            # Not applicable to solo operations
            Rung(when=lambda c: c.headcount == 0, value=0.5),
            Rung(
                when=always,
                value=0.0,
                negative="No HR policies in place",
                code="no_hr_policies",
                recommendation="Develop basic HR policies and employment contracts",
            ),
        ),
    ),
    FactorLadder(
        key="governance_structures",
        observed=lambda c: c.profile.has_board_of_directors is not None
        or c.profile.has_advisory_board is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.has_board_of_directors),
                value=1.0,
                positive="Board of Directors in place",
            ),
            Rung(
                when=lambda c: bool(c.profile.has_advisory_board),
                value=0.7,
                positive="Advisory board in place",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No formal governance structures",
                code="no_governance_structures",
                recommendation="Consider establishing a board or advisory committee",
            ),
        ),
    ),
)


def score_compliance_maturity(ctx: FactorContext) -> DimensionAssessment:
    return assess_dimension(Dimension.COMPLIANCE_MATURITY, LADDERS, ctx)
